"""Load the penal code table from the content delivery network or disk.

The penal code is published as a single JSON object keyed by charge id.
This module only acquires the raw JSON; turning it into typed charge
definitions is the calculator's concern.
"""

import json
import time
import logging
from pathlib import Path
from typing import Any

import requests

from .config import (
    CONTENT_DELIVERY_NETWORK,
    PENAL_CODE_FILE,
    REQUEST_HEADERS,
    REQUEST_DELAY,
    REQUEST_TIMEOUT,
    MAX_RETRIES,
    RETRY_BACKOFF,
)

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_json_file(path: str | Path) -> Any:
    """Read a JSON file, naming the file when it cannot be parsed."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {path}: {e}") from e


class PenalCodeFetcher:
    """Fetches penal code data files from the content delivery network."""

    def __init__(self, base_url: str = CONTENT_DELIVERY_NETWORK, delay: float = REQUEST_DELAY):
        self.session = requests.Session()
        self.session.headers.update(REQUEST_HEADERS)
        self.base_url = base_url
        self.delay = delay
        self._last_request_time = 0.0

    def _polite_get(self, url: str, params: dict | None = None) -> requests.Response:
        """Make a GET request with polite delays and retries."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self.delay:
            time.sleep(self.delay - elapsed)

        for attempt in range(MAX_RETRIES):
            try:
                logger.info(f"Fetching: {url} {params or ''}")
                response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
                self._last_request_time = time.time()

                if response.status_code == 200:
                    return response
                elif response.status_code == 429:
                    wait = RETRY_BACKOFF ** (attempt + 1)
                    logger.warning(f"Rate limited, waiting {wait}s...")
                    time.sleep(wait)
                else:
                    logger.warning(f"HTTP {response.status_code} for {url}")
                    response.raise_for_status()

            except requests.RequestException as e:
                if attempt < MAX_RETRIES - 1:
                    wait = RETRY_BACKOFF ** (attempt + 1)
                    logger.warning(f"Request failed ({e}), retrying in {wait}s...")
                    time.sleep(wait)
                else:
                    raise

        response.raise_for_status()
        return response

    def fetch_file(self, name: str) -> Any:
        """Fetch a named data file (``?file=<name>``) and decode it as JSON."""
        if not self.base_url:
            raise ValueError("No content delivery network configured")
        response = self._polite_get(self.base_url, params={"file": name})
        try:
            return response.json()
        except ValueError as e:
            raise ValueError(f"Malformed JSON for {name} from {self.base_url}: {e}") from e

    def fetch_penal_code(self) -> dict[str, Any]:
        data = self.fetch_file(PENAL_CODE_FILE)
        if not isinstance(data, dict):
            raise ValueError(f"Penal code from {self.base_url} is not a JSON object")
        logger.info(f"Fetched {len(data)} penal code entries")
        return data


def load_penal_code(source: str, fetcher: PenalCodeFetcher | None = None) -> dict[str, Any]:
    """Load the raw penal code table from a URL or a local path."""
    if is_url(source):
        fetcher = fetcher or PenalCodeFetcher(base_url=source)
        return fetcher.fetch_penal_code()

    data = load_json_file(source)
    if not isinstance(data, dict):
        raise ValueError(f"Penal code in {source} is not a JSON object")
    logger.info(f"Loaded {len(data)} penal code entries from {source}")
    return data
