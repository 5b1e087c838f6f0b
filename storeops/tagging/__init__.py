"""
Tag automation modules.

Modules:
    merge_engine - Build handle -> tags from a collections ZIP, apply to master rows
    automation - One-shot run with state tracking and a process log
"""

from .automation import TagAutomationRun
from .merge_engine import TagMergeEngine, parse_tags, tag_for_entry

__all__ = [
    'TagAutomationRun',
    'TagMergeEngine',
    'parse_tags',
    'tag_for_entry',
]
