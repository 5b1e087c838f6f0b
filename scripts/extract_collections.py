#!/usr/bin/env python3
"""
Collection Extractor

Lists the public collections of a Shopify storefront and caches the result
locally. Without --url, shows the cached list.

Usage:
    python3 scripts/extract_collections.py --url https://example-store.com
    python3 scripts/extract_collections.py --search sale
    python3 scripts/extract_collections.py --url example-store.com --json
    python3 scripts/extract_collections.py --clear
"""

import argparse
import json
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storeops.common.exceptions import StoreOpsError
from storeops.common.log_config import setup_logging
from storeops.shopify import CollectionCache, extract_collections, filter_collections

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Extract public collections from a Shopify storefront"
    )
    parser.add_argument("--url", "-u", help="Storefront URL (e.g. https://example-store.com)")
    parser.add_argument("--search", "-q", default="", help="Filter by title")
    parser.add_argument("--cache", default=None, help="Cache file (default from config/console.yaml)")
    parser.add_argument("--clear", action="store_true", help="Delete the cached collections")
    parser.add_argument("--json", action="store_true", help="Print collections as JSON")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    cache = CollectionCache(args.cache)

    if args.clear:
        cache.clear()
        print(f"Cleared {cache.path}")
        return

    if args.url:
        try:
            collections = extract_collections(args.url)
        except StoreOpsError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        if not collections:
            print("ERROR: No collections found or store is password protected.")
            sys.exit(1)
        cache.save(collections)
    else:
        collections = cache.load()
        if not collections:
            print("No cached collections. Use --url to extract.")
            return

    matches = filter_collections(collections, args.search)

    if args.json:
        print(json.dumps([c.to_dict() for c in matches], indent=2, ensure_ascii=False))
        return

    print(f"Extracted Collections ({len(matches)})")
    print("-" * 60)
    for collection in matches:
        print(f"  {collection.title}")
        print(f"    {collection.url}")
    if not matches:
        print("  No collections match your search.")


if __name__ == "__main__":
    main()
