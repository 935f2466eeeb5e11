import logging
import re
from datetime import datetime

from bs4 import BeautifulSoup

from planning_scraper.models import PlanningApplicationRecord, on_notice_to
from planning_scraper.strategies.base.parse_strategy import ParseStrategy
from planning_scraper.utils.bs_utils import get_absolute_href, get_tag_text, make_soup

BASE_URL = 'https://www.southernmidlands.tas.gov.au'

LOCATION_PATTERN = re.compile(r'Location:\s*(.*?)(?=\s*Proposal)')
PROPOSAL_PATTERN = re.compile(r'Proposal:\s*(.*)')
# First token of the proposal up to and including its last digit, then the rest.
REFERENCE_PATTERN = re.compile(r'(\S*\d)(.*)', re.S)
DATE_RECEIVED_PATTERN = re.compile(r'(\d{1,2} [A-Za-z]+ \d{4}),')
DATE_FORMATS = ('%d %B %Y', '%d %b %Y')


class SouthernmidlandsTasGovAuParseStrategy(ParseStrategy):
    details_prefix = 'Location:'
    document_selector = 'a.pdf[href]'
    date_selector = 'p.subdued'

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url

    def parse(self, raw_data: dict) -> PlanningApplicationRecord:
        """
        Turn a crawled detail page into a planning application record.
        :param raw_data: crawl output holding the page html under application_details
        :return: the record, with every field that could not be found left as None
        """
        application_details = raw_data.get('application_details') or {}
        source = application_details.get('source')
        soup = make_soup(application_details.get('data') or '')

        return self.extract(soup, source=source)

    def extract(self, soup: BeautifulSoup, source: str = None) -> PlanningApplicationRecord:
        record = PlanningApplicationRecord()

        details_tag = self._get_details_paragraph(soup)
        if details_tag is None:
            logging.info(f'No "{self.details_prefix}" paragraph found on {source}')
        else:
            self._extract_details(details_tag, record)

        date_received = self._get_date_received(soup, source)
        if date_received:
            record.date_received = date_received.isoformat()
            record.on_notice_to = on_notice_to(date_received).isoformat()

        logging.info(f'Location: {record.address}')
        logging.info(f'Proposal: {record.council_reference}')
        logging.info(f'Description: {record.description}')
        logging.info(f'PDF Link: {record.document_description}')
        logging.info(f'Date received: {record.date_received}')

        return record

    def _get_details_paragraph(self, soup: BeautifulSoup):
        for tag in soup.select('p'):
            if get_tag_text(tag).startswith(self.details_prefix):
                return tag

        return None

    def _extract_details(self, details_tag, record: PlanningApplicationRecord):
        text = get_tag_text(details_tag)

        location_match = LOCATION_PATTERN.search(text)
        if location_match and location_match.group(1).strip():
            record.address = location_match.group(1).strip()
        else:
            logging.info('Address not found in details paragraph')

        proposal_match = PROPOSAL_PATTERN.search(text)
        proposal = proposal_match.group(1).strip() if proposal_match else ''
        if proposal:
            record.council_reference = self._get_council_reference(proposal)
            record.description = self._get_description(proposal)
        else:
            logging.info('Proposal not found in details paragraph')

        record.document_description = get_absolute_href(details_tag.select_one(self.document_selector),
                                                        self.base_url)

    @staticmethod
    def _get_council_reference(proposal: str):
        reference_token = proposal.split()[0]
        if not re.search(r'\d', reference_token):
            logging.info(f'Unparseable proposal, no reference number in: {proposal}')
            return None

        return re.sub(r'^DA', '', reference_token).strip() or None

    @staticmethod
    def _get_description(proposal: str):
        reference_match = REFERENCE_PATTERN.match(proposal)
        if not reference_match:
            logging.info(f'Unparseable proposal, no description after reference in: {proposal}')
            return None

        description = reference_match.group(2).replace('View Application', '')
        description = re.sub(r'\s+', ' ', description).strip()

        return description or None

    def _get_date_received(self, soup: BeautifulSoup, source: str = None):
        for tag in soup.select(self.date_selector):
            date_match = DATE_RECEIVED_PATTERN.search(get_tag_text(tag))
            if not date_match:
                continue

            date_text = date_match.group(1)
            for date_format in DATE_FORMATS:
                try:
                    return datetime.strptime(date_text, date_format).date()
                except ValueError:
                    continue

            logging.error(f'_get_date_received() error: invalid date "{date_text}" on {source}')
            return None

        logging.error(f'Date received not found on {source}')
        return None
