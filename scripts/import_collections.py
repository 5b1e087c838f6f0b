#!/usr/bin/env python3
"""
Shopify Smart Collection Importer

Uploads every smart collection in a JSON array to a store, one at a time
with a fixed pause between requests. Failed collections are listed at
the end; they never stop the batch.

Requirements:
    pip install requests python-dotenv

Usage:
    python3 scripts/import_collections.py --json smart_collections.json --shop my-store.myshopify.com --token shpat_xxx
    python3 scripts/import_collections.py --json smart_collections.json   # SHOPIFY_SHOP / SHOPIFY_ACCESS_TOKEN from .env
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storeops.common.exceptions import InputMissingError
from storeops.common.log_config import setup_logging
from storeops.shopify import ShopifyCollectionImporter, load_collections_file

load_dotenv(Path(__file__).parent.parent / ".env")

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Import smart collections from a JSON file into Shopify"
    )
    parser.add_argument(
        "--json", "-j",
        required=True,
        help="Smart collections JSON file (array of collections)"
    )
    parser.add_argument(
        "--shop", "-s",
        default=os.getenv("SHOPIFY_SHOP"),
        help="Shop domain (default: SHOPIFY_SHOP env var)"
    )
    parser.add_argument(
        "--token", "-t",
        default=os.getenv("SHOPIFY_ACCESS_TOKEN"),
        help="Admin API access token (default: SHOPIFY_ACCESS_TOKEN env var)"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between requests (default from config/console.yaml)"
    )
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if not args.shop or not args.token:
        print("ERROR: Shop and access token are required. Use --shop/--token or set them in .env.")
        sys.exit(1)

    try:
        collections = load_collections_file(args.json)
    except (InputMissingError, ValueError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print("=" * 60)
    print("Shopify Collection Importer")
    print("=" * 60)
    print(f"  Shop: {args.shop}")
    print(f"  File: {args.json}")
    print(f"  Collections: {len(collections)}")

    importer = ShopifyCollectionImporter(
        shop_url=args.shop,
        access_token=args.token,
        delay_seconds=args.delay,
    )
    try:
        if not importer.client.test_connection():
            print("ERROR: Could not connect to the shop. Check the shop URL and access token.")
            sys.exit(1)

        results = importer.import_collections(
            collections,
            on_progress=lambda done, total: print(f"  [{done}/{total}]"),
        )
    finally:
        importer.close()

    print("\n" + "=" * 60)
    print("IMPORT SUMMARY")
    print("=" * 60)
    print(f"  Success: {results.success}")
    print(f"  Failed: {results.failed}")
    if results.errors:
        print("\n  Failed collections:")
        for error in results.errors[:10]:
            print(f"    - {error['handle']}: {error['error']}")
    print("=" * 60)


if __name__ == "__main__":
    main()
