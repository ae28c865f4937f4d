"""
Loads the listings dataset.

The dataset is a single static JSON file holding an array of listing
records. It is fetched once, over HTTP(S) when the source is a URL,
otherwise read from disk.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """The dataset could not be fetched or is not a JSON array."""


def fetch_listings(
    source: str,
    limit: Optional[int] = None,
    session: Optional[requests.Session] = None,
    timeout: int = 30,
) -> list[dict[str, Any]]:
    """Fetch the dataset and return its records in source order.

    Only the first ``limit`` elements are consumed when a limit is given.
    Elements that are not JSON objects are skipped.
    Raises LoadError on any transport, status or decoding failure.
    """
    if _is_url(source):
        data = _fetch_remote(source, session, timeout)
    else:
        data = _read_local(source)

    if not isinstance(data, list):
        raise LoadError(f"expected a JSON array, got {type(data).__name__}")

    head = data if limit is None else data[:limit]
    listings = []
    for i, item in enumerate(head):
        if isinstance(item, dict):
            listings.append(item)
        else:
            logger.debug(f"Skipping record {i}: not an object ({type(item).__name__})")

    logger.info(f"Loaded {len(listings)} listings from {source}")
    return listings


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_remote(url: str, session: Optional[requests.Session], timeout: int) -> Any:
    session = session or requests.Session()
    session.headers.update({"Accept": "application/json"})
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise LoadError(f"HTTP error! status: {e.response.status_code}") from e
    except requests.exceptions.RequestException as e:
        raise LoadError(f"request failed: {e}") from e

    try:
        return resp.json()
    except (ValueError, RecursionError) as e:
        raise LoadError(f"invalid JSON response: {e}") from e


def _read_local(path: str) -> Any:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise LoadError(f"cannot read {path}: {e.strerror or e}") from e

    try:
        return json.loads(data)
    except (ValueError, RecursionError) as e:
        # UnicodeDecodeError is a ValueError
        raise LoadError(f"invalid JSON in {path}: {e}") from e
