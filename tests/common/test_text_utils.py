"""Tests for storeops/common/text_utils.py"""

from storeops.common.text_utils import normalize_shop_domain, normalize_store_url


class TestNormalizeStoreUrl:
    def test_adds_scheme(self):
        assert normalize_store_url("example-store.com") == "https://example-store.com"

    def test_strips_trailing_slash(self):
        assert normalize_store_url("https://example-store.com/") == "https://example-store.com"

    def test_keeps_http(self):
        assert normalize_store_url("http://example-store.com") == "http://example-store.com"

    def test_trims_whitespace(self):
        assert normalize_store_url("  example-store.com/ ") == "https://example-store.com"


class TestNormalizeShopDomain:
    def test_bare_shop_name(self):
        assert normalize_shop_domain("test-store") == "test-store.myshopify.com"

    def test_full_domain(self):
        assert normalize_shop_domain("test-store.myshopify.com") == "test-store.myshopify.com"

    def test_full_url_with_slash(self):
        assert normalize_shop_domain("https://test-store.myshopify.com/") == "test-store.myshopify.com"

    def test_custom_domain(self):
        assert normalize_shop_domain("http://shop.example.com") == "shop.example.com"
