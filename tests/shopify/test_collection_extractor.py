"""Tests for storeops/shopify/collection_extractor.py"""

from unittest.mock import MagicMock

import pytest
import requests

from storeops.common.exceptions import InputMissingError, UpstreamFailureError
from storeops.models import ExtractedCollection
from storeops.shopify.collection_extractor import (
    CollectionCache,
    extract_collections,
    filter_collections,
)

STORE_PAYLOAD = {
    "collections": [
        {"id": 1, "title": "Summer Sale", "handle": "summer-sale", "products_count": 12},
        {"id": 2, "title": "New Arrivals", "handle": "new-arrivals"},
    ]
}


def _session(status_code=200, payload=None, ok=True):
    response = MagicMock()
    response.status_code = status_code
    response.ok = ok
    response.json.return_value = payload if payload is not None else STORE_PAYLOAD
    session = MagicMock()
    session.get.return_value = response
    return session


class TestExtractCollections:
    def test_maps_title_handle_and_url(self):
        session = _session()
        collections = extract_collections("example-store.com/", session=session)

        assert collections == [
            ExtractedCollection("Summer Sale", "summer-sale", "https://example-store.com/collections/summer-sale"),
            ExtractedCollection("New Arrivals", "new-arrivals", "https://example-store.com/collections/new-arrivals"),
        ]

    def test_requests_collections_endpoint(self):
        session = _session()
        extract_collections("https://example-store.com", limit=50, timeout=5, session=session)

        session.get.assert_called_once_with(
            "https://example-store.com/collections.json?limit=50", timeout=5
        )

    def test_default_limit(self):
        session = _session()
        extract_collections("example-store.com", session=session)
        assert session.get.call_args.args[0].endswith("?limit=250")

    def test_no_collections_key(self):
        assert extract_collections("example-store.com", session=_session(payload={})) == []

    @pytest.mark.parametrize("url", ["", "   "])
    def test_url_required(self, url):
        with pytest.raises(InputMissingError, match="URL is required"):
            extract_collections(url, session=_session())

    def test_non_success_status(self):
        with pytest.raises(UpstreamFailureError) as exc_info:
            extract_collections("example-store.com", session=_session(status_code=404, ok=False))

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Failed to fetch from store"

    def test_network_error(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(UpstreamFailureError, match="Failed to fetch from store"):
            extract_collections("example-store.com", session=session)

    def test_invalid_json(self):
        session = _session()
        session.get.return_value.json.side_effect = ValueError("Expecting value")

        with pytest.raises(UpstreamFailureError, match="invalid JSON"):
            extract_collections("example-store.com", session=session)


class TestFilterCollections:
    def test_case_insensitive(self):
        collections = [
            ExtractedCollection("Summer Sale", "summer-sale", "u1"),
            ExtractedCollection("New Arrivals", "new-arrivals", "u2"),
        ]
        assert [c.handle for c in filter_collections(collections, "SUMMER")] == ["summer-sale"]

    def test_empty_term_keeps_all(self):
        collections = [ExtractedCollection("A", "a", "u")]
        assert filter_collections(collections, "") == collections


class TestCollectionCache:
    def test_save_and_load(self, tmp_path):
        cache = CollectionCache(tmp_path / "cache.json")
        collections = [ExtractedCollection("Summer Sale", "summer-sale", "u1")]

        cache.save(collections)

        assert cache.load() == collections

    def test_save_replaces_previous(self, tmp_path):
        cache = CollectionCache(tmp_path / "cache.json")
        cache.save([ExtractedCollection("A", "a", "u1")])
        cache.save([ExtractedCollection("B", "b", "u2")])

        assert [c.handle for c in cache.load()] == ["b"]

    def test_missing_cache(self, tmp_path):
        assert CollectionCache(tmp_path / "missing.json").load() == []

    def test_unreadable_cache(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("not json", encoding="utf-8")
        assert CollectionCache(path).load() == []

    def test_clear(self, tmp_path):
        cache = CollectionCache(tmp_path / "cache.json")
        cache.save([])
        cache.clear()
        assert not cache.path.exists()

    def test_default_path_from_config(self):
        assert CollectionCache().path.name == ".extracted_collections.json"
