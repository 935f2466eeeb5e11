import logging

import requests
import urllib3
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout, TooManyRedirects
from retrying import retry

from planning_scraper.strategies.base.download_strategy import DownloadStrategy

DEFAULT_TIMEOUT = 30
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-AU,en;q=0.9",
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
}


def _is_retryable(exception) -> bool:
    if isinstance(exception, (Timeout, ConnectionError)):
        return True
    if isinstance(exception, HTTPError) and exception.response is not None:
        return exception.response.status_code >= 500
    return False


class DefaultDownloader(DownloadStrategy):
    max_attempts = 3

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, verify: bool = True, headers: dict = None):
        self.timeout = timeout
        self.requester = requests.Session()
        self.requester.headers.update(headers or DEFAULT_HEADERS)
        self.requester.verify = verify
        if not verify:
            urllib3.disable_warnings()

    def download(self, url, timeout=None, headers=None, cookies=None):
        """
        Download a page as text.
        :param url: absolute URL of the page
        :param timeout: seconds to wait per attempt, defaults to the downloader timeout
        :param headers: extra request headers
        :param cookies: request cookies
        :return: the response body, or None when every attempt failed
        """
        raw_data = None

        try:
            response = self._get(url, timeout=timeout or self.timeout, headers=headers, cookies=cookies)
            raw_data = response.text

        except Timeout:
            logging.error(f"Timeout occurred while downloading {url}")
            return None
        except TooManyRedirects:
            logging.error(f"Too many redirects for {url}")
            return None
        except HTTPError as e:
            logging.error(f"HTTP Error {e.response.status_code} occurred for {url}")
            return None
        except RequestException as e:
            logging.error(f"An error occurred while downloading {url}: {e}")
            return None

        return raw_data

    @retry(
        stop_max_attempt_number=max_attempts,
        retry_on_exception=_is_retryable,
        wait_random_min=1000,
        wait_random_max=3000
    )
    def _get(self, url, timeout, headers=None, cookies=None):
        logging.debug(f'GET {url}')
        response = self.requester.get(url, timeout=timeout, headers=headers, cookies=cookies)
        response.raise_for_status()

        return response
