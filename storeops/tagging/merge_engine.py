"""
Tag Merge Engine

Merges collection-membership tags into a Shopify master product CSV.

Every ``.csv`` file in the collections archive is one collection export.
Each handle listed in such a file receives the tag ``prefix + file name``
(e.g. ``cus-new-arrivals`` for ``new-arrivals.csv``). Tags are appended to
the master rows without reordering, dropping or duplicating any row.
"""

from __future__ import annotations

import csv
import logging
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from ..common.archive import ZipArchiveReader
from ..common.csv_utils import CsvCodec
from ..common.exceptions import DecodeFailureError
from ..models import (
    AppliedTags,
    CollectionSource,
    MasterRow,
    SkippedEntry,
    TagAssignment,
)

logger = logging.getLogger(__name__)

COLLECTION_SUFFIX = ".csv"
MACOS_METADATA_PREFIX = "__MACOSX"
HANDLE_COLUMNS = ("Handle", "handle")
TAG_SEPARATOR = ", "


class TabularCodec(Protocol):
    def decode(self, text: str) -> List[Dict[str, str]]: ...

    def encode(self, rows: Iterable[Dict[str, str]], fieldnames: Optional[List[str]] = None) -> str: ...


class TextEntry(Protocol):
    def read_text(self) -> str: ...


class ArchiveReader(Protocol):
    def open_archive(self, data: bytes) -> Mapping[str, TextEntry]: ...


def parse_tags(tags_str: Optional[str]) -> List[str]:
    """
    Split a Shopify Tags cell into a list of unique tags.

    Splits on commas, trims whitespace, drops empty tokens and keeps the
    first occurrence of exact duplicates.
    """
    if not tags_str:
        return []
    tags: Dict[str, None] = {}
    for tag in tags_str.split(','):
        tag = tag.strip()
        if tag:
            tags.setdefault(tag, None)
    return list(tags)


def is_collection_entry(entry_name: str) -> bool:
    """True for CSV entries outside the macOS metadata folder."""
    return entry_name.endswith(COLLECTION_SUFFIX) and not entry_name.startswith(MACOS_METADATA_PREFIX)


def tag_for_entry(entry_name: str, prefix: str = "") -> str:
    """Derive the tag for an archive entry: prefix + base name without ``.csv``."""
    base_name = PurePosixPath(entry_name).name
    return f"{prefix}{base_name[:-len(COLLECTION_SUFFIX)]}"


def handle_of(row: Mapping[str, Optional[str]]) -> str:
    """Read the product handle from a collection row ("" if absent)."""
    for column in HANDLE_COLUMNS:
        value = row.get(column)
        if value:
            return value
    return ""


class TagMergeEngine:
    """
    Builds a handle -> tags mapping from a collections archive and applies
    it to master product rows.

    Usage:
        engine = TagMergeEngine()
        entries = engine.open_archive(zip_bytes)
        assignment = engine.build_tag_assignment(entries, prefix="cus-")
        rows, updated = engine.apply_tags(master_rows, assignment)
        csv_text = engine.export_csv(rows)
    """

    def __init__(
        self,
        codec: Optional[TabularCodec] = None,
        archive_reader: Optional[ArchiveReader] = None,
        require_title_or_tags: bool = True,
    ):
        """
        Args:
            codec: CSV decoder/encoder (default: stdlib csv codec)
            archive_reader: ZIP reader (default: stdlib zipfile reader)
            require_title_or_tags: Only tag rows that have a Title or
                already carry Tags. Variant and image continuation rows
                of a Shopify export have neither.
        """
        self.codec = codec or CsvCodec()
        self.archive_reader = archive_reader or ZipArchiveReader()
        self.require_title_or_tags = require_title_or_tags

    def decode_master(self, text: str) -> List[MasterRow]:
        return self.codec.decode(text)

    def open_archive(self, data: bytes) -> Mapping[str, TextEntry]:
        return self.archive_reader.open_archive(data)

    def build_tag_assignment(
        self,
        archive_entries: Mapping[str, TextEntry],
        prefix: str = "",
    ) -> TagAssignment:
        """
        Map every handle found in the collection files to its tags.

        Entries that fail to decode are reported in ``skipped`` and do not
        stop the remaining entries from being processed.

        Args:
            archive_entries: Entry path -> entry, in archive order
            prefix: Prepended to each collection name to form its tag

        Returns:
            Immutable TagAssignment
        """
        tags_by_handle: Dict[str, Dict[str, None]] = {}
        sources: List[CollectionSource] = []
        skipped: List[SkippedEntry] = []

        for entry_name, entry in archive_entries.items():
            if not is_collection_entry(entry_name):
                logger.debug("Ignoring archive entry: %s", entry_name)
                continue

            tag = tag_for_entry(entry_name, prefix)

            try:
                rows = self.codec.decode(entry.read_text())
            except (UnicodeDecodeError, csv.Error, DecodeFailureError) as e:
                logger.warning("Skipping %s: %s", entry_name, e)
                skipped.append(SkippedEntry(entry_name=entry_name, reason=str(e)))
                continue

            handles = 0
            for row in rows:
                handle = handle_of(row)
                if handle:
                    tags_by_handle.setdefault(handle, {})[tag] = None
                    handles += 1

            logger.info("Found collection: %s -> Tag: %s (%d handles)", entry_name, tag, handles)
            sources.append(CollectionSource(entry_name=entry_name, tag=tag, handle_count=handles))

        logger.info("Mapped tags for %d unique handles", len(tags_by_handle))
        return TagAssignment(
            tags_by_handle={handle: tuple(tags) for handle, tags in tags_by_handle.items()},
            sources=tuple(sources),
            skipped=tuple(skipped),
        )

    def _is_taggable(self, row: MasterRow) -> bool:
        if not self.require_title_or_tags:
            return True
        has_title = bool((row.get('Title') or '').strip())
        has_tags = bool((row.get('Tags') or '').strip())
        return has_title or has_tags

    def apply_tags(
        self,
        master_rows: Sequence[MasterRow],
        tag_assignment: TagAssignment,
    ) -> AppliedTags:
        """
        Append assigned tags to the matching master rows.

        Returns copies of all rows in their original order. Only the Tags
        cell of a row can change; rows without a handle, without an
        assignment, or failing the title-or-tags check are copied as is.

        Returns:
            AppliedTags(rows, updated_count)
        """
        updated_rows: List[MasterRow] = []
        updated_count = 0

        for row in master_rows:
            row = dict(row)
            updated_rows.append(row)

            handle = row.get('Handle')
            if not handle or handle not in tag_assignment:
                continue
            if not self._is_taggable(row):
                continue

            current_tags = parse_tags(row.get('Tags'))
            present = set(current_tags)
            changed = False
            for tag in tag_assignment.tags_for(handle):
                if tag not in present:
                    current_tags.append(tag)
                    present.add(tag)
                    changed = True

            if changed:
                row['Tags'] = TAG_SEPARATOR.join(current_tags)
                updated_count += 1

        logger.info("Updated tags in %d rows", updated_count)
        return AppliedTags(rows=updated_rows, updated_count=updated_count)

    def export_csv(
        self,
        master_rows: Sequence[MasterRow],
        fieldnames: Optional[List[str]] = None,
    ) -> str:
        """Encode the full row sequence, including passthrough columns."""
        return self.codec.encode(master_rows, fieldnames)
