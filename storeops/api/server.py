"""
Console Proxy Server

Small HTTP server that forwards the console's collection requests to
Shopify:

    POST /extract-collections  {url}
    POST /import-collections   {shopUrl, accessToken, collections}

Every response body is JSON.
"""

import http.server
import json
import logging
from typing import Any, Dict, Optional, Tuple

from ..common.config_loader import load_server_settings
from ..shopify.collection_extractor import extract_collections
from ..shopify.collections import ShopifyCollectionImporter

logger = logging.getLogger(__name__)

Response = Tuple[int, Dict[str, Any]]


def handle_extract(body: Optional[Dict[str, Any]]) -> Response:
    """Serve POST /extract-collections."""
    url = (body or {}).get("url")
    if not url or not isinstance(url, str):
        return 400, {"error": "URL is required"}

    try:
        collections = extract_collections(url)
    except Exception as e:
        logger.error("Extraction failed for %s: %s", url, e)
        return 500, {"error": str(e)}

    return 200, {"collections": [c.to_dict() for c in collections]}


def handle_import(body: Optional[Dict[str, Any]]) -> Response:
    """Serve POST /import-collections."""
    body = body or {}
    shop_url = body.get("shopUrl")
    access_token = body.get("accessToken")
    collections = body.get("collections")

    if not shop_url or not access_token or not isinstance(collections, list):
        return 400, {"error": "Missing required fields or invalid JSON."}

    importer = ShopifyCollectionImporter(shop_url=shop_url, access_token=access_token)
    try:
        results = importer.import_collections(collections)
    finally:
        importer.close()

    return 200, {"message": "Import process completed", "results": results.to_dict()}


ROUTES = {
    "/extract-collections": handle_extract,
    "/import-collections": handle_import,
    # Paths used by the hosted console
    "/api/extract_collections": handle_extract,
    "/api/import_collections": handle_import,
}


class ConsoleRequestHandler(http.server.BaseHTTPRequestHandler):
    """Route console POST requests to their handlers."""

    server_version = "StoreOpsConsole/1.0"

    def _send_json(self, status: int, payload: Dict[str, Any]) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _read_json(self) -> Optional[Dict[str, Any]]:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length) if length else b""
        try:
            body = json.loads(raw or b"{}")
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    def do_POST(self):
        """Handle POST request."""
        handler = ROUTES.get(self.path.split("?", 1)[0])
        if handler is None:
            self._send_json(404, {"error": "Not found"})
            return

        try:
            status, payload = handler(self._read_json())
        except Exception as e:
            logger.exception("Unhandled error on %s", self.path)
            status, payload = 500, {"error": str(e)}
        self._send_json(status, payload)

    def _method_not_allowed(self):
        if self.path.split("?", 1)[0] not in ROUTES:
            self._send_json(404, {"error": "Not found"})
            return
        self._send_json(405, {"error": "Method not allowed"})

    do_GET = _method_not_allowed
    do_PUT = _method_not_allowed
    do_DELETE = _method_not_allowed
    do_PATCH = _method_not_allowed

    def log_message(self, format, *args):
        """Route access logs through the package logger."""
        logger.info("%s - %s", self.address_string(), format % args)


def create_server(host: Optional[str] = None, port: Optional[int] = None) -> http.server.ThreadingHTTPServer:
    """
    Create (but do not start) the proxy server.

    Args:
        host: Bind address (default from config)
        port: Port (default from config; 0 picks a free port)
    """
    settings = load_server_settings()
    host = settings["host"] if host is None else host
    port = settings["port"] if port is None else port
    return http.server.ThreadingHTTPServer((host, port), ConsoleRequestHandler)


def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the proxy server until interrupted."""
    server = create_server(host, port)
    bound_host, bound_port = server.server_address[:2]
    logger.info("Console proxy listening on http://%s:%d", bound_host, bound_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
