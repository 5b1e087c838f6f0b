"""
Tag automation data models.

Pure data classes for the merge between a master product CSV and the
per-collection CSV exports bundled in a ZIP archive.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple

# A master CSV row: column name -> cell value
MasterRow = Dict[str, str]


class RunState(str, Enum):
    """Lifecycle of a single tag automation run."""
    IDLE = "idle"
    PARSING_MASTER = "parsing-master"
    SCANNING_ARCHIVE = "scanning-archive"
    APPLYING_TAGS = "applying-tags"
    EXPORTING = "exporting"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.DONE, RunState.FAILED)


@dataclass(frozen=True)
class CollectionSource:
    """An archive entry that contributed a tag."""
    entry_name: str
    tag: str
    handle_count: int


@dataclass(frozen=True)
class SkippedEntry:
    """An archive entry that could not be decoded."""
    entry_name: str
    reason: str


@dataclass(frozen=True)
class TagAssignment:
    """
    Handle -> tags to add, built once from all collection files.

    Tags per handle are unique and kept in archive processing order.
    """
    tags_by_handle: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    sources: Tuple[CollectionSource, ...] = ()
    skipped: Tuple[SkippedEntry, ...] = ()

    def tags_for(self, handle: str) -> Tuple[str, ...]:
        return self.tags_by_handle.get(handle, ())

    def __contains__(self, handle: object) -> bool:
        return handle in self.tags_by_handle

    def __len__(self) -> int:
        return len(self.tags_by_handle)


class AppliedTags(NamedTuple):
    """Result of applying a TagAssignment to the master rows."""
    rows: List[MasterRow]
    updated_count: int


@dataclass
class TagAutomationResult:
    """Outcome of a tag automation run."""
    state: RunState
    csv_text: str = ""
    rows_loaded: int = 0
    updated_count: int = 0
    handles_mapped: int = 0
    output_path: Optional[str] = None
    error: Optional[str] = None
    skipped_entries: List[SkippedEntry] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == RunState.DONE
