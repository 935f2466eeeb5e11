import argparse
import json
import logging
import os
import sys

from planning_scraper.exceptions import FatalFetchError, StoreError
from planning_scraper.file_handler.csv_writer import CsvWriter
from planning_scraper.store import DEFAULT_DB_PATH, RecordStore, RecordWriter
from planning_scraper.strategies.downloader.default import DefaultDownloader
from planning_scraper.utils.strategy_factory import StrategyFactory
from planning_scraper.walker import ListingWalker

DB_PATH_ENV = 'PLANNING_SCRAPER_DB_PATH'

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_STORE_FAILED = 2


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Scrape advertised development applications into sqlite.')
    parser.add_argument('--url', default=None, help='Listing page URL, defaults to the one in mapping.json.')
    parser.add_argument('--db-path', default=os.environ.get(DB_PATH_ENV, DEFAULT_DB_PATH),
                        help=f'sqlite database file (env {DB_PATH_ENV}).')
    parser.add_argument('--dry-run', action='store_true', help='Extract and check duplicates without writing.')
    parser.add_argument('--workers', type=int, default=1, help='Detail pages fetched in parallel.')
    parser.add_argument('--timeout', type=float, default=None, help='Per request timeout in seconds.')
    parser.add_argument('--export-csv', default=None, help='Write the whole table to this CSV file after the run.')
    parser.add_argument('--scraper', default=None, help='Scraper name from mapping.json.')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def build_walker(config: dict, factory: StrategyFactory, writer: RecordWriter, timeout: float = None,
                 workers: int = 1) -> ListingWalker:
    name = config['name']
    downloader = DefaultDownloader(timeout=timeout or config.get('timeout', 30))

    source = factory.get_strategy('source', name, downloader=downloader, base_url=config['base_url'],
                                  listing_url=config['listing_url'])
    crawler = factory.get_strategy('crawl', name, downloader=downloader)
    parser = factory.get_strategy('parse', name, base_url=config['base_url'])

    return ListingWalker(source, crawler, parser, writer, workers=workers)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(asctime)s %(levelname)s: %(message)s')

    factory = StrategyFactory()
    config = factory.get_scraper_config(args.scraper)

    try:
        with RecordStore(args.db_path, table=config['table']) as store:
            store.create_table()
            writer = RecordWriter(store, dry_run=args.dry_run)
            walker = build_walker(config, factory, writer, timeout=args.timeout, workers=args.workers)

            summary = walker.run(args.url)

            if args.export_csv:
                CsvWriter().write(store, args.export_csv)

    except FatalFetchError:
        return EXIT_FETCH_FAILED
    except StoreError:
        return EXIT_STORE_FAILED

    print(json.dumps(summary.as_dict()))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
