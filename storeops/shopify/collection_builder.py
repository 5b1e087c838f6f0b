"""
Smart Collection JSON Creator

Accumulates smart collection definitions, each with a single
"tag equals <condition>" rule, and saves them as a JSON array that the
importer accepts.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from ..common.exceptions import InputMissingError
from ..models import SORT_ORDERS, CollectionRule, SmartCollection

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "smart_collections.json"


class SmartCollectionBuilder:
    """
    Builds a list of smart collection definitions.

    Usage:
        builder = SmartCollectionBuilder()
        builder.add(handle="summer-sale", title="Summer Sale",
                    condition_tag="cus-summer-sale")
        builder.save("smart_collections.json")
    """

    def __init__(self):
        self.collections: List[SmartCollection] = []

    def add(
        self,
        handle: str,
        title: str,
        condition_tag: str,
        body_html: str = "",
        sort_order: str = "best-selling",
    ) -> SmartCollection:
        """
        Append a collection definition.

        Raises:
            InputMissingError: If handle, title or condition tag is empty
            ValueError: If sort_order is not a Shopify sort order
        """
        if not handle or not title or not condition_tag:
            raise InputMissingError("Please fill in required fields (Handle, Title, Condition Tag).")
        if sort_order not in SORT_ORDERS:
            raise ValueError(
                f"Unknown sort order: {sort_order} (expected one of {', '.join(SORT_ORDERS)})"
            )

        collection = SmartCollection(
            handle=handle,
            title=title,
            body_html=body_html,
            sort_order=sort_order,
            rules=[CollectionRule(condition=condition_tag)],
        )
        self.collections.append(collection)
        logger.debug("Added collection %s (tag: %s)", handle, condition_tag)
        return collection

    def clear(self) -> None:
        self.collections = []

    def __len__(self) -> int:
        return len(self.collections)

    def to_list(self) -> List[Dict[str, Any]]:
        return [collection.to_dict() for collection in self.collections]

    def to_json(self) -> str:
        return json.dumps(self.to_list(), indent=2, ensure_ascii=False)

    def load(self, path: str | Path) -> int:
        """
        Append definitions from an existing JSON file.

        Returns:
            Number of definitions loaded
        """
        with open(path, "r", encoding="utf-8") as f:
            items = json.load(f)
        if not isinstance(items, list):
            raise ValueError("Invalid JSON format. Expected an array of collections.")

        for item in items:
            rules = [
                CollectionRule(
                    condition=rule.get("condition", ""),
                    column=rule.get("column", "tag"),
                    relation=rule.get("relation", "equals"),
                )
                for rule in item.get("rules", [])
            ]
            self.collections.append(SmartCollection(
                handle=item.get("handle", ""),
                title=item.get("title", ""),
                body_html=item.get("body_html", ""),
                sort_order=item.get("sort_order", "best-selling"),
                rules=rules,
            ))
        return len(items)

    def save(self, path: str | Path = DEFAULT_FILENAME) -> Path:
        """Write the collection list as indented JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info("Saved %d collections to %s", len(self), path)
        return path
