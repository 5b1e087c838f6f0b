"""
Shopify Collection Importer

Creates smart collections in Shopify from a JSON array of collection
definitions (as produced by the JSON creator or exported from a store).
Collections are posted one at a time with a fixed pause in between; a
failing collection is recorded and the batch carries on.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..common.config_loader import load_importer_settings
from ..common.exceptions import InputMissingError, UpstreamFailureError
from ..models import ImportResults
from .api_client import ShopifyAPIClient

logger = logging.getLogger(__name__)

# Assigned by Shopify; rejected when creating a collection
GENERATED_FIELDS = ("id", "admin_graphql_api_id")

ProgressCallback = Callable[[int, int], None]


def sanitize_collection(collection: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the collection without Shopify-generated IDs."""
    return {key: value for key, value in collection.items() if key not in GENERATED_FIELDS}


def load_collections_file(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read a smart collections JSON file.

    Raises:
        InputMissingError: If the file does not exist
        ValueError: If the file is not a JSON array
    """
    path = Path(path)
    if not path.exists():
        raise InputMissingError(f"Collections file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        collections = json.load(f)

    if not isinstance(collections, list):
        raise ValueError("Invalid JSON format. Expected an array of collections.")
    return collections


class ShopifyCollectionImporter:
    """
    Posts smart collections to the Admin API through a sequential queue.

    ``processed`` and ``total`` expose progress while a batch runs.

    Usage:
        importer = ShopifyCollectionImporter(
            shop_url="my-store.myshopify.com",
            access_token="shpat_xxx",
        )
        results = importer.import_collections(collections)
        print(results.success, results.failed)
    """

    ENDPOINT = "smart_collections.json"

    def __init__(
        self,
        shop_url: str,
        access_token: str,
        delay_seconds: Optional[float] = None,
        api_version: Optional[str] = None,
        client: Optional[ShopifyAPIClient] = None,
    ):
        """
        Initialize the importer.

        Args:
            shop_url: Shop domain or URL
            access_token: Shopify Admin API access token
            delay_seconds: Pause between collections (default from config, 0.5s)
            api_version: Admin API version (default from config)
            client: Preconfigured client (mainly for tests)
        """
        settings = load_importer_settings()
        if delay_seconds is None:
            delay_seconds = float(settings["delay_seconds"])

        self.delay_seconds = delay_seconds
        self.client = client or ShopifyAPIClient(
            shop_url, access_token, api_version=api_version or settings["api_version"]
        )

        self.processed = 0
        self.total = 0

    def _import_one(self, collection: Dict[str, Any], results: ImportResults) -> None:
        handle = collection.get("handle") or "unknown"
        payload = {"smart_collection": sanitize_collection(collection)}

        try:
            response = self.client.rest_request(
                "POST", self.ENDPOINT, payload, raise_on_error=True
            )
        except UpstreamFailureError as e:
            logger.error("Failed to create %s: %s", handle, e)
            results.record_failure(handle, str(e))
            return

        collection_id = ((response or {}).get("smart_collection") or {}).get("id")
        logger.info("Created: %s (ID: %s)", handle, collection_id)
        results.record_success()

    async def import_collections_async(
        self,
        collections: List[Dict[str, Any]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> ImportResults:
        """
        Import collections sequentially, pausing ``delay_seconds`` between them.

        Args:
            collections: Smart collection definitions
            on_progress: Called with (processed, total) after each collection

        Returns:
            ImportResults with success/failure counts and per-item errors
        """
        queue: asyncio.Queue = asyncio.Queue()
        for collection in collections:
            queue.put_nowait(collection)

        results = ImportResults()
        self.processed = 0
        self.total = queue.qsize()
        logger.info("Importing %d collections...", self.total)

        while not queue.empty():
            collection = queue.get_nowait()
            if isinstance(collection, dict):
                await asyncio.to_thread(self._import_one, collection, results)
            else:
                results.record_failure("unknown", "Collection definition must be a JSON object")
            queue.task_done()

            self.processed += 1
            logger.info("[%d/%d] processed", self.processed, self.total)
            if on_progress:
                on_progress(self.processed, self.total)

            if not queue.empty():
                await asyncio.sleep(self.delay_seconds)

        logger.info("Import finished: %d created, %d failed", results.success, results.failed)
        return results

    def import_collections(
        self,
        collections: List[Dict[str, Any]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> ImportResults:
        """Blocking wrapper around :meth:`import_collections_async`."""
        return asyncio.run(self.import_collections_async(collections, on_progress))

    def close(self) -> None:
        self.client.close()
