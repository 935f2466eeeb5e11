"""
Pytest configuration and shared fixtures.
"""

import pytest

from planning_scraper.store import RecordStore, RecordWriter
from planning_scraper.strategies.crawl.southernmidlands_tas_gov_au import SouthernmidlandsTasGovAuCrawlStrategy
from planning_scraper.strategies.parse.southernmidlands_tas_gov_au import SouthernmidlandsTasGovAuParseStrategy
from planning_scraper.strategies.source.southernmidlands_tas_gov_au import SouthernmidlandsTasGovAuSourceStrategy
from planning_scraper.walker import ListingWalker

BASE_URL = 'https://www.southernmidlands.tas.gov.au'
LISTING_URL = f'{BASE_URL}/advertised-development-applications/'
DETAIL_A_URL = f'{BASE_URL}/da2400094-12-main-st/'
DETAIL_B_URL = f'{BASE_URL}/da-no-details/'

LISTING_HTML = """
<html><body>
  <article>
    <div class="content"><h2><a href="/da2400094-12-main-st/">12 Main St</a></h2></div>
  </article>
  <article>
    <div class="content"><h2><a href="/da-no-details/">Unknown</a></h2></div>
  </article>
  <aside><h2><a href="/contact-us/">Contact us</a></h2></aside>
</body></html>
"""

DETAIL_A_HTML = """
<html><body>
  <p class="subdued">Submitted 20 February 2025, by Planning Department</p>
  <p>Some introduction text.</p>
  <p>Location: 12 Main St Proposal: DA2400094
     <a class="pdf" href="/wp-content/uploads/2025/02/DA2400094.pdf">View Application</a> New dwelling</p>
</body></html>
"""

DETAIL_B_HTML = """
<html><body>
  <p>This application has no details yet.</p>
</body></html>
"""


class FakeDownloader:
    """Serves canned pages by URL and returns None for anything else, like a failed download."""

    def __init__(self, pages: dict):
        self.pages = pages
        self.requested = []

    def download(self, url, timeout=None, headers=None, cookies=None):
        self.requested.append(url)
        return self.pages.get(url)


@pytest.fixture
def pages() -> dict:
    return {
        LISTING_URL: LISTING_HTML,
        DETAIL_A_URL: DETAIL_A_HTML,
        DETAIL_B_URL: DETAIL_B_HTML,
    }


@pytest.fixture
def downloader(pages) -> FakeDownloader:
    return FakeDownloader(pages)


@pytest.fixture
def store(tmp_path):
    record_store = RecordStore(tmp_path / 'data.sqlite')
    record_store.create_table()
    yield record_store
    record_store.close()


@pytest.fixture
def parser() -> SouthernmidlandsTasGovAuParseStrategy:
    return SouthernmidlandsTasGovAuParseStrategy()


@pytest.fixture
def make_walker(downloader, store, parser):
    """Build a walker over the fake downloader and the temporary store."""

    def _make_walker(workers: int = 1, dry_run: bool = False, writer=None) -> ListingWalker:
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=downloader)
        crawler = SouthernmidlandsTasGovAuCrawlStrategy(downloader=downloader)
        writer = writer or RecordWriter(store, dry_run=dry_run)
        return ListingWalker(source, crawler, parser, writer, workers=workers)

    return _make_walker
