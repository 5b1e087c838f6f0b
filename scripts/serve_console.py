#!/usr/bin/env python3
"""
Console Proxy Server

Serves POST /extract-collections and POST /import-collections for the
browser console.

Usage:
    python3 scripts/serve_console.py
    python3 scripts/serve_console.py --host 0.0.0.0 --port 8080 --log-file logs/console.log
"""

import argparse
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from storeops.api import serve
from storeops.common.log_config import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Run the console proxy server")
    parser.add_argument("--host", default=None, help="Bind address (default from config/console.yaml)")
    parser.add_argument("--port", type=int, default=None, help="Port (default from config/console.yaml)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    serve(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
