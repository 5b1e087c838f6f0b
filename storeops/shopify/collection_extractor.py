"""
Collection Extractor

Lists the collections of any Shopify storefront through its public
``collections.json`` endpoint, and keeps the last listing in a local
JSON cache.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import requests

from ..common.config_loader import load_extractor_settings
from ..common.exceptions import InputMissingError, UpstreamFailureError
from ..common.text_utils import normalize_store_url
from ..models import ExtractedCollection

logger = logging.getLogger(__name__)


def extract_collections(
    url: str,
    limit: Optional[int] = None,
    timeout: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> List[ExtractedCollection]:
    """
    Fetch the public collection list of a storefront.

    Args:
        url: Storefront URL (scheme optional)
        limit: Page size (default from config, 250)
        timeout: Request timeout in seconds (default from config)
        session: Optional requests session

    Returns:
        Collections with title, handle and storefront URL

    Raises:
        InputMissingError: If url is empty
        UpstreamFailureError: If the store does not answer with success
    """
    if not url or not url.strip():
        raise InputMissingError("URL is required")

    settings = load_extractor_settings()
    limit = limit or settings["limit"]
    timeout = timeout or settings["timeout"]

    base_url = normalize_store_url(url)
    endpoint = f"{base_url}/collections.json?limit={limit}"
    logger.info("Fetching %s", endpoint)

    http = session or requests
    try:
        response = http.get(endpoint, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise UpstreamFailureError(f"Failed to fetch from store: {e}") from e

    if not response.ok:
        raise UpstreamFailureError("Failed to fetch from store", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamFailureError("Store returned invalid JSON") from e
    if not isinstance(data, dict):
        raise UpstreamFailureError("Store returned invalid JSON")

    collections = [
        ExtractedCollection(
            title=item.get("title", ""),
            handle=item.get("handle", ""),
            url=f"{base_url}/collections/{item.get('handle', '')}",
        )
        for item in data.get("collections", [])
    ]
    logger.info("Found %d collections", len(collections))
    return collections


def filter_collections(collections: List[ExtractedCollection], term: str) -> List[ExtractedCollection]:
    """Case-insensitive title search."""
    term = (term or "").lower()
    return [c for c in collections if term in c.title.lower()]


class CollectionCache:
    """
    Local JSON cache of the last extraction.

    A new extraction replaces the cached list entirely.
    """

    def __init__(self, path: Optional[str | Path] = None):
        if path is None:
            path = load_extractor_settings()["cache_file"]
        self.path = Path(path)

    def save(self, collections: List[ExtractedCollection]) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([c.to_dict() for c in collections], f, indent=2, ensure_ascii=False)
        logger.debug("Cached %d collections in %s", len(collections), self.path)

    def load(self) -> List[ExtractedCollection]:
        """Return the cached list ([] if missing or unreadable)."""
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                items = json.load(f)
            return [ExtractedCollection(**item) for item in items]
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable collection cache %s: %s", self.path, e)
            return []

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
