"""Tests for storeops/models"""

import dataclasses

import pytest

from storeops.models import (
    CollectionRule,
    ExtractedCollection,
    ImportResults,
    RunState,
    SmartCollection,
    TagAssignment,
    TagAutomationResult,
)


class TestRunState:
    def test_values(self):
        assert [s.value for s in RunState] == [
            "idle", "parsing-master", "scanning-archive", "applying-tags", "exporting", "done", "failed",
        ]

    @pytest.mark.parametrize("state,terminal", [
        (RunState.IDLE, False),
        (RunState.EXPORTING, False),
        (RunState.DONE, True),
        (RunState.FAILED, True),
    ])
    def test_is_terminal(self, state, terminal):
        assert state.is_terminal is terminal


class TestTagAssignment:
    def test_lookup(self):
        assignment = TagAssignment(tags_by_handle={"mug-01": ("cus-a", "cus-b")})

        assert "mug-01" in assignment
        assert "shirt-01" not in assignment
        assert assignment.tags_for("mug-01") == ("cus-a", "cus-b")
        assert assignment.tags_for("shirt-01") == ()
        assert len(assignment) == 1

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TagAssignment().sources = ()


class TestTagAutomationResult:
    def test_succeeded(self):
        assert TagAutomationResult(state=RunState.DONE).succeeded
        assert not TagAutomationResult(state=RunState.FAILED, error="x").succeeded


class TestSmartCollection:
    def test_to_dict_key_order(self):
        collection = SmartCollection(handle="sale", title="Sale", rules=[CollectionRule("cus-sale")])
        data = collection.to_dict()

        assert list(data) == ["handle", "title", "body_html", "sort_order", "rules"]
        assert list(data["rules"][0]) == ["column", "relation", "condition"]

    def test_extracted_collection_dict(self):
        assert ExtractedCollection("Sale", "sale", "u").to_dict() == {"title": "Sale", "handle": "sale", "url": "u"}


class TestImportResults:
    def test_counts(self):
        results = ImportResults()
        results.record_success()
        results.record_failure("b", "Not Found")

        assert results.to_dict() == {
            "success": 1,
            "failed": 1,
            "errors": [{"handle": "b", "error": "Not Found"}],
        }

    def test_errors_not_shared(self):
        first = ImportResults()
        first.record_failure("a", "x")
        assert ImportResults().errors == []
