import logging
from concurrent.futures import ThreadPoolExecutor

from planning_scraper.exceptions import FatalFetchError, RecoverableFetchError, StoreError
from planning_scraper.models import RunSummary, WriteOutcome


class ListingWalker:
    """
    Walks the listing page and runs fetch, extract and write for every
    detail page it links to.

    With more than one worker, detail pages are fetched and parsed on a thread
    pool. Results are still consumed in page order and every write happens on
    the calling thread, so the store only ever has one writer.
    """

    def __init__(self, source_strategy, crawl_strategy, parse_strategy, writer, workers: int = 1):
        self.source_strategy = source_strategy
        self.crawl_strategy = crawl_strategy
        self.parse_strategy = parse_strategy
        self.writer = writer
        self.workers = max(1, workers)

    def run(self, listing_url: str = None) -> RunSummary:
        summary = RunSummary()

        try:
            sources = self.source_strategy.get_sources(listing_url)
        except FatalFetchError as e:
            logging.error(f'Failed to fetch page content: {e}')
            raise

        logging.info('Start Extraction of Data')
        try:
            for source, record in self._extract_all(sources):
                if record is None:
                    summary.failed += 1
                    continue

                summary.processed += 1
                outcome = self.writer.write(record)
                if outcome == WriteOutcome.SKIPPED_DUPLICATE:
                    summary.skipped += 1
                else:
                    summary.inserted += 1

        except StoreError as e:
            logging.error(f'Aborting run after store failure: {e} ({summary.as_dict()})')
            raise

        logging.info(f'Finished run: {summary.as_dict()}')
        return summary

    def _extract(self, source: str) -> tuple:
        try:
            raw_data = self.crawl_strategy.crawl(source)
        except RecoverableFetchError as e:
            logging.error(f'Skipping {source}: {e}')
            return source, None

        return source, self.parse_strategy.parse(raw_data)

    def _extract_all(self, sources: list):
        if self.workers == 1:
            for source in sources:
                yield self._extract(source)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            yield from pool.map(self._extract, sources)
