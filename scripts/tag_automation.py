#!/usr/bin/env python3
"""
Tag Automation Script

Adds collection tags to a Shopify master product CSV. Every CSV inside the
collections ZIP is one collection export; each product handle it lists gets
the tag "<prefix><file name>".

Usage:
    python3 scripts/tag_automation.py --master products_export.csv --zip collections.zip
    python3 scripts/tag_automation.py --master products_export.csv --zip collections.zip --prefix cus- --output out/Master_Updated_With_Tags.csv
    python3 scripts/tag_automation.py --master products_export.csv --zip collections.zip --all-rows
"""

import argparse
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storeops.common.config_loader import load_tagging_settings
from storeops.common.log_config import setup_logging
from storeops.tagging import TagAutomationRun, TagMergeEngine

logger = logging.getLogger(__name__)


def main():
    settings = load_tagging_settings()

    parser = argparse.ArgumentParser(
        description="Merge collection tags from a ZIP of collection CSVs into a master product CSV"
    )
    parser.add_argument(
        "--master", "-m",
        required=True,
        help="Master product CSV (Shopify product export)"
    )
    parser.add_argument(
        "--zip", "-z",
        required=True,
        help="ZIP archive with one CSV per collection"
    )
    parser.add_argument(
        "--prefix", "-p",
        default=settings["default_prefix"],
        help=f"Tag prefix (default: {settings['default_prefix']!r})"
    )
    parser.add_argument(
        "--output", "-o",
        default=settings["output_filename"],
        help=f"Output CSV path (default: {settings['output_filename']})"
    )
    parser.add_argument(
        "--all-rows",
        action="store_true",
        help="Tag every matching row, including rows with neither Title nor Tags"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    for path in (args.master, args.zip):
        if not os.path.exists(path):
            print(f"Error: Input file not found: {path}")
            sys.exit(1)

    print("=" * 60)
    print("Tag Automation")
    print("=" * 60)
    print(f"  Master: {args.master}")
    print(f"  ZIP:    {args.zip}")
    print(f"  Prefix: {args.prefix!r}")
    print(f"  Output: {args.output}")

    with open(args.master, "rb") as f:
        master_csv = f.read()
    with open(args.zip, "rb") as f:
        archive = f.read()

    require_title_or_tags = settings["require_title_or_tags"] and not args.all_rows
    engine = TagMergeEngine(require_title_or_tags=require_title_or_tags)
    run = TagAutomationRun(engine=engine, on_log=lambda line: print(f"> {line}"))
    result = run.run(master_csv, archive, prefix=args.prefix, output_path=args.output)

    print("\n" + "=" * 60)
    print("TAG AUTOMATION SUMMARY")
    print("=" * 60)
    print(f"  State: {result.state.value}")
    print(f"  Rows loaded: {result.rows_loaded}")
    print(f"  Handles mapped: {result.handles_mapped}")
    print(f"  Rows updated: {result.updated_count}")
    if result.skipped_entries:
        print(f"  Skipped collections: {len(result.skipped_entries)}")
        for skipped in result.skipped_entries[:10]:
            print(f"    - {skipped.entry_name}")
    if result.output_path:
        print(f"  Output: {result.output_path}")
    print("=" * 60)

    if not result.succeeded:
        sys.exit(1)


if __name__ == "__main__":
    main()
