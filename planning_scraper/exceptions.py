class ScraperError(Exception):
    """Base class for errors raised while scraping planning applications."""


class FetchError(ScraperError):
    def __init__(self, url: str, message: str = None):
        self.url = url
        super().__init__(message or f'Failed to download {url}')


class FatalFetchError(FetchError):
    """The listing page could not be downloaded, so the run cannot continue."""


class RecoverableFetchError(FetchError):
    """A single detail page could not be downloaded. The run carries on without it."""


class StoreError(ScraperError):
    """A query or insert against the record store failed."""
