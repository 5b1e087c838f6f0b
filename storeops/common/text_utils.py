"""
Text Utilities

Helpers for normalizing the store URLs operators paste into the tools.
"""

import re

MYSHOPIFY_SUFFIX = ".myshopify.com"


def normalize_store_url(url: str) -> str:
    """
    Normalize a public storefront URL.

    Adds ``https://`` when the URL does not already start with ``http`` and
    removes a single trailing slash.

    Args:
        url: Storefront URL as typed by the operator (e.g. "store.com/")

    Returns:
        Normalized base URL (e.g. "https://store.com")
    """
    url = url.strip()
    if not url.startswith("http"):
        url = f"https://{url}"
    if url.endswith("/"):
        url = url[:-1]
    return url


def normalize_shop_domain(shop: str) -> str:
    """
    Normalize a shop identifier to the host used for Admin API calls.

    Strips any scheme and trailing slash. Bare shop names without a dot
    get the ``.myshopify.com`` suffix.

    Args:
        shop: Shop name, domain or URL
            (e.g. "my-store", "https://my-store.myshopify.com/")

    Returns:
        Host name (e.g. "my-store.myshopify.com")
    """
    host = re.sub(r'^https?://', '', shop.strip())
    host = re.sub(r'/$', '', host)
    if "." not in host:
        host = f"{host}{MYSHOPIFY_SUFFIX}"
    return host
