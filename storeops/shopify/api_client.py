"""
Shopify API Client

Client for the Shopify Admin REST API.
Handles authentication, rate limiting, retries and error reporting.
"""

import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from ..common.exceptions import UpstreamFailureError
from ..common.text_utils import normalize_shop_domain

logger = logging.getLogger(__name__)


def describe_error(response: requests.Response) -> str:
    """
    Build a failure message from an Admin API error response.

    Uses the JSON-encoded ``errors`` member when the body has one,
    otherwise the HTTP reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("errors"):
        return json.dumps(body["errors"])
    return response.reason or f"HTTP {response.status_code}"


class ShopifyAPIClient:
    """
    Client for the Shopify Admin REST API.

    Handles:
    - Authentication
    - Rate limiting (2 requests/second)
    - Retries on 429 and gateway errors

    Usage:
        client = ShopifyAPIClient(shop="my-store.myshopify.com", access_token="shpat_xxx")
        result = client.rest_request("GET", "shop.json")
    """

    API_VERSION = "2025-01"
    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}

    def __init__(self, shop: str, access_token: str, api_version: Optional[str] = None):
        """
        Initialize the API client.

        Args:
            shop: Shop name, domain or URL (scheme and trailing slash are ignored)
            access_token: Shopify Admin API access token
            api_version: Admin API version (default: API_VERSION)
        """
        self.shop_domain = normalize_shop_domain(shop)
        self.api_version = api_version or self.API_VERSION

        self.access_token = access_token
        self.base_url = f"https://{self.shop_domain}/admin/api/{self.api_version}"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.5  # 2 req/sec

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Implement rate limiting (2 requests/second max)."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    def _fail(self, message: str, status_code: Optional[int], raise_on_error: bool) -> None:
        logger.error("%s", message)
        if raise_on_error:
            raise UpstreamFailureError(message, status_code=status_code)

    def rest_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        timeout: int = 30,
        raise_on_error: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Make REST API request with rate limiting and error handling.

        Args:
            method: HTTP method (GET or POST)
            endpoint: API endpoint (e.g., "smart_collections.json")
            data: Request body for POST
            timeout: Request timeout in seconds
            raise_on_error: Raise UpstreamFailureError instead of returning None

        Returns:
            Response JSON or None on error

        Raises:
            UpstreamFailureError: On failure, when raise_on_error is set
        """
        url = urljoin(self.base_url + "/", endpoint)

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                if method == "GET":
                    response = self.session.get(url, timeout=timeout)
                elif method == "POST":
                    response = self.session.post(url, json=data, timeout=timeout)
                else:
                    raise ValueError(f"Unsupported method: {method}")

                # Retry on rate limiting or server errors
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = int(response.headers.get("Retry-After", 2 ** attempt))
                    logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                                   response.status_code, endpoint, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                # Check for errors
                if response.status_code >= 400:
                    self._fail(describe_error(response), response.status_code, raise_on_error)
                    return None

                if not response.content:
                    return {}
                return response.json()

            except requests.exceptions.Timeout:
                self._fail(f"Request timeout: {endpoint}", None, raise_on_error)
                return None
            except requests.exceptions.RequestException as e:
                self._fail(f"Request failed: {e}", None, raise_on_error)
                return None

        self._fail(f"Max retries ({self.MAX_RETRIES}) exceeded for {method} {endpoint}",
                   None, raise_on_error)
        return None

    def test_connection(self) -> bool:
        """
        Test API connection by fetching shop info.

        Returns:
            True if connection successful
        """
        result = self.rest_request("GET", "shop.json")
        if result and "shop" in result:
            shop_name = result["shop"].get("name", "Unknown")
            logger.info("Connected to: %s", shop_name)
            return True
        return False
