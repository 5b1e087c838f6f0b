"""
Data models for the console tools.

This module contains pure data classes with no business logic.
"""

from .collection import (
    SORT_ORDERS,
    CollectionRule,
    ExtractedCollection,
    ImportResults,
    SmartCollection,
)
from .tagging import (
    AppliedTags,
    CollectionSource,
    MasterRow,
    RunState,
    SkippedEntry,
    TagAssignment,
    TagAutomationResult,
)

__all__ = [
    'AppliedTags',
    'CollectionRule',
    'CollectionSource',
    'ExtractedCollection',
    'ImportResults',
    'MasterRow',
    'RunState',
    'SORT_ORDERS',
    'SkippedEntry',
    'SmartCollection',
    'TagAssignment',
    'TagAutomationResult',
]
