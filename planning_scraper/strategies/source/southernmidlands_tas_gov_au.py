import logging

from bs4 import BeautifulSoup

from planning_scraper.exceptions import FatalFetchError
from planning_scraper.strategies.base.source_strategy import SourceStrategy
from planning_scraper.strategies.downloader.default import DefaultDownloader
from planning_scraper.utils.bs_utils import get_absolute_href, make_soup

BASE_URL = 'https://www.southernmidlands.tas.gov.au'
LISTING_URL = f'{BASE_URL}/advertised-development-applications/'


class SouthernmidlandsTasGovAuSourceStrategy(SourceStrategy):
    link_selector = 'article .content h2 a[href]'

    def __init__(self, downloader=None, base_url: str = BASE_URL, listing_url: str = LISTING_URL):
        self.download = (downloader or DefaultDownloader()).download
        self.base_url = base_url
        self.listing_url = listing_url

    def get_sources(self, listing_url: str = None) -> list:
        """
        Get the detail page URLs of every advertised application.
        :param listing_url: listing page to read, defaults to the council's advertised applications page
        :return: list of absolute detail page URLs in page order
        """
        listing_url = listing_url or self.listing_url

        logging.info(f'Fetching page content from: {listing_url}')
        listing_data = self.download(listing_url)
        if not listing_data:
            error_message = f'get_sources() error: failed to fetch listing page {listing_url}'
            logging.error(error_message)
            raise FatalFetchError(listing_url, error_message)

        logging.info('Successfully fetched page content.')
        sources = self._get_search_data(make_soup(listing_data), listing_url)
        logging.info(f'Found {len(sources)} sources.')

        return sources

    def _get_search_data(self, soup: BeautifulSoup, listing_url: str) -> list:
        sources = []
        for link in soup.select(self.link_selector):
            # Relative hrefs hang off the site root, absolute ones are kept as they are.
            source = get_absolute_href(link, self.base_url or listing_url)
            if source:
                logging.info(f'Found job link: {source}')
                sources.append(source)

        return sources
