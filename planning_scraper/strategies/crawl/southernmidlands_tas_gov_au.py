import logging
from datetime import datetime

from planning_scraper.exceptions import RecoverableFetchError
from planning_scraper.strategies.base.crawl_strategy import CrawlStrategy
from planning_scraper.strategies.downloader.default import DefaultDownloader


class SouthernmidlandsTasGovAuCrawlStrategy(CrawlStrategy):
    def __init__(self, downloader=None):
        self.download = (downloader or DefaultDownloader()).download

    def crawl(self, source: str) -> dict:
        """
        Crawl data from source
        :param source: str - detail page url
        :return: dict - crawled data
        """
        logging.info(f'Getting data from {source}')
        main_page_data = self.download(source)
        if not main_page_data:
            error_message = f'crawl() error: failed to fetch detail page {source}'
            logging.error(error_message)
            raise RecoverableFetchError(source, error_message)

        return {
            'application_details': {'data': main_page_data, 'source': source},
            'date_captured': datetime.now().strftime('%Y-%m-%dT%H%M%S')
        }
