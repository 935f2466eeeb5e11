"""
Tests for the listing page source strategy and the detail page crawl strategy.
"""

import pytest

from planning_scraper.exceptions import FatalFetchError, RecoverableFetchError
from planning_scraper.strategies.crawl.southernmidlands_tas_gov_au import SouthernmidlandsTasGovAuCrawlStrategy
from planning_scraper.strategies.source.southernmidlands_tas_gov_au import SouthernmidlandsTasGovAuSourceStrategy
from tests.conftest import DETAIL_A_HTML, DETAIL_A_URL, DETAIL_B_URL, LISTING_URL, FakeDownloader


class TestGetSources:
    def test_returns_article_links_in_page_order(self, downloader):
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=downloader)

        assert source.get_sources() == [DETAIL_A_URL, DETAIL_B_URL]
        assert downloader.requested == [LISTING_URL]

    def test_explicit_listing_url(self):
        listing_url = 'https://www.southernmidlands.tas.gov.au/advertised-development-applications/page/2/'
        downloader = FakeDownloader({listing_url: '<article><div class="content"><h2>'
                                                  '<a href="/da2400200/">DA2400200</a></h2></div></article>'})
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=downloader)

        assert source.get_sources(listing_url) == ['https://www.southernmidlands.tas.gov.au/da2400200/']

    def test_hrefs_are_resolved_not_concatenated(self):
        downloader = FakeDownloader({LISTING_URL: """
            <article><div class="content"><h2><a href="https://www.southernmidlands.tas.gov.au/abs/">A</a></h2></div></article>
            <article><div class="content"><h2><a href="rel/?id=1&amp;v=2">B</a></h2></div></article>
            <article><div class="content"><h2><a>No href</a></h2></div></article>
        """})
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=downloader)

        assert source.get_sources() == [
            'https://www.southernmidlands.tas.gov.au/abs/',
            'https://www.southernmidlands.tas.gov.au/rel/?id=1&v=2',
        ]

    def test_listing_without_articles(self):
        downloader = FakeDownloader({LISTING_URL: '<html><body><p>No applications advertised.</p></body></html>'})
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=downloader)

        assert source.get_sources() == []

    def test_failed_listing_download_is_fatal(self):
        source = SouthernmidlandsTasGovAuSourceStrategy(downloader=FakeDownloader({}))

        with pytest.raises(FatalFetchError) as exc_info:
            source.get_sources()

        assert exc_info.value.url == LISTING_URL


class TestCrawl:
    def test_wraps_page_with_source(self, downloader):
        crawler = SouthernmidlandsTasGovAuCrawlStrategy(downloader=downloader)

        raw_data = crawler.crawl(DETAIL_A_URL)

        assert raw_data['application_details'] == {'data': DETAIL_A_HTML, 'source': DETAIL_A_URL}
        assert 'date_captured' in raw_data

    def test_failed_detail_download_is_recoverable(self):
        crawler = SouthernmidlandsTasGovAuCrawlStrategy(downloader=FakeDownloader({}))

        with pytest.raises(RecoverableFetchError) as exc_info:
            crawler.crawl(DETAIL_A_URL)

        assert exc_info.value.url == DETAIL_A_URL
