"""
Smart collection data models.

Shapes shared by the JSON creator, the importer and the extractor.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

SORT_ORDERS = (
    "best-selling",
    "alpha-asc",
    "alpha-desc",
    "price-asc",
    "price-desc",
    "created-desc",
)


@dataclass
class CollectionRule:
    """A smart collection condition."""
    condition: str
    column: str = "tag"
    relation: str = "equals"

    def to_dict(self) -> Dict[str, str]:
        return {"column": self.column, "relation": self.relation, "condition": self.condition}


@dataclass
class SmartCollection:
    """Smart collection definition as accepted by the Admin API."""
    handle: str
    title: str
    rules: List[CollectionRule]
    body_html: str = ""
    sort_order: str = "best-selling"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the Admin API's key order."""
        return {
            "handle": self.handle,
            "title": self.title,
            "body_html": self.body_html,
            "sort_order": self.sort_order,
            "rules": [rule.to_dict() for rule in self.rules],
        }


@dataclass
class ExtractedCollection:
    """A collection listed on a public storefront."""
    title: str
    handle: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class ImportResults:
    """Summary of a smart collection import batch."""
    success: int = 0
    failed: int = 0
    errors: List[Dict[str, str]] = field(default_factory=list)

    def record_success(self) -> None:
        self.success += 1

    def record_failure(self, handle: str, error: str) -> None:
        self.failed += 1
        self.errors.append({"handle": handle, "error": error})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
