"""
Shopify integration modules.

Modules:
    api_client - Client for the Shopify Admin REST API
    collections - Smart collection import from a JSON array
    collection_builder - Smart collection JSON creator
    collection_extractor - Public storefront collection listing and cache
"""

from .api_client import ShopifyAPIClient
from .collection_builder import SmartCollectionBuilder
from .collection_extractor import (
    CollectionCache,
    extract_collections,
    filter_collections,
)
from .collections import (
    ShopifyCollectionImporter,
    load_collections_file,
    sanitize_collection,
)

__all__ = [
    # API Client
    'ShopifyAPIClient',
    # JSON creator
    'SmartCollectionBuilder',
    # Extraction
    'CollectionCache',
    'extract_collections',
    'filter_collections',
    # Import
    'ShopifyCollectionImporter',
    'load_collections_file',
    'sanitize_collection',
]
