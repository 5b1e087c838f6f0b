#!/usr/bin/env python3
"""
Smart Collection JSON Creator

Appends a smart collection definition ("tag equals <condition>") to a JSON
file that import_collections.py can upload.

Usage:
    python3 scripts/create_collection_json.py --title "Summer Sale" --handle summer-sale --tag cus-summer-sale
    python3 scripts/create_collection_json.py --title "New In" --handle new-in --tag cus-new-in \\
        --body-html "<p>Fresh arrivals</p>" --sort-order created-desc --output smart_collections.json
    python3 scripts/create_collection_json.py --clear --output smart_collections.json
"""

import argparse
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storeops.common.exceptions import InputMissingError
from storeops.common.log_config import setup_logging
from storeops.models import SORT_ORDERS
from storeops.shopify import SmartCollectionBuilder
from storeops.shopify.collection_builder import DEFAULT_FILENAME

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Add smart collection definitions to a JSON file"
    )
    parser.add_argument("--title", help="Collection title")
    parser.add_argument("--handle", help="Collection handle (URL slug)")
    parser.add_argument("--tag", help="Condition tag (products tagged with it join the collection)")
    parser.add_argument("--body-html", default="", help="Description (HTML supported)")
    parser.add_argument(
        "--sort-order",
        default="best-selling",
        choices=SORT_ORDERS,
        help="Sort order (default: best-selling)"
    )
    parser.add_argument(
        "--output", "-o",
        default=DEFAULT_FILENAME,
        help=f"JSON file to append to (default: {DEFAULT_FILENAME})"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Empty the JSON file instead of adding a collection"
    )
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    builder = SmartCollectionBuilder()

    if args.clear:
        builder.save(args.output)
        print(f"Cleared {args.output}")
        return

    if os.path.exists(args.output):
        builder.load(args.output)

    try:
        builder.add(
            handle=args.handle,
            title=args.title,
            condition_tag=args.tag,
            body_html=args.body_html,
            sort_order=args.sort_order,
        )
    except InputMissingError as e:
        print(f"Error: {e}")
        sys.exit(1)

    builder.save(args.output)
    print(builder.to_json())
    print(f"\n{len(builder)} items ready to export in {args.output}")


if __name__ == "__main__":
    main()
