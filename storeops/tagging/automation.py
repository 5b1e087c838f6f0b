"""
Tag Automation Run

Drives one tag automation from input files to the updated master CSV:

    idle -> parsing-master -> scanning-archive -> applying-tags -> exporting -> done

Any error moves the run to ``failed``. ``run()`` never raises; the error is
reported on the result and in the process log.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..common.config_loader import load_tagging_settings
from ..common.csv_utils import decode_bytes, read_header
from ..common.exceptions import DecodeFailureError, InputMissingError
from ..models import RunState, TagAutomationResult
from .merge_engine import TagMergeEngine

logger = logging.getLogger(__name__)


class TagAutomationRun:
    """
    One-shot tag automation with an observable state and process log.

    Usage:
        run = TagAutomationRun()
        result = run.run(master_bytes, zip_bytes, prefix="cus-",
                         output_path="Master_Updated_With_Tags.csv")
        print(run.state, run.logs)
    """

    def __init__(
        self,
        engine: Optional[TagMergeEngine] = None,
        on_log: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            engine: Merge engine (default: built from config/console.yaml)
            on_log: Called with each process log line as it is added
        """
        if engine is None:
            settings = load_tagging_settings()
            engine = TagMergeEngine(require_title_or_tags=settings['require_title_or_tags'])
        self.engine = engine
        self.on_log = on_log
        self.state = RunState.IDLE
        self.logs: List[str] = []

    def reset(self) -> None:
        """Return to idle so the run can be started again."""
        self.state = RunState.IDLE
        self.logs = []

    def _log(self, message: str) -> None:
        self.logs.append(message)
        if self.on_log:
            self.on_log(message)

    def _enter(self, state: RunState) -> None:
        logger.debug("Tag automation: %s -> %s", self.state.value, state.value)
        self.state = state

    def run(
        self,
        master_csv: Optional[bytes | str],
        archive: Optional[bytes],
        prefix: str = "",
        output_path: Optional[str | Path] = None,
    ) -> TagAutomationResult:
        """
        Merge collection tags from ``archive`` into ``master_csv``.

        Args:
            master_csv: Master product CSV contents
            archive: ZIP archive of per-collection CSV exports
            prefix: Tag prefix (e.g. "cus-")
            output_path: If given, the updated CSV is written here once
                export has completed

        Returns:
            TagAutomationResult in state DONE or FAILED
        """
        self.reset()
        result = TagAutomationResult(state=self.state)
        self._log("Starting automation process...")

        try:
            self._execute(master_csv, archive, prefix, output_path, result)
        except (InputMissingError, DecodeFailureError) as e:
            self._fail(result, str(e))
        except Exception as e:
            logger.exception("Tag automation failed unexpectedly")
            self._fail(result, f"Unexpected error: {e}")

        result.state = self.state
        return result

    def _fail(self, result: TagAutomationResult, message: str) -> None:
        self._enter(RunState.FAILED)
        result.error = message
        result.csv_text = ""
        result.output_path = None
        self._log(f"ERROR: {message}")
        logger.error("Tag automation failed: %s", message)

    def _execute(
        self,
        master_csv: Optional[bytes | str],
        archive: Optional[bytes],
        prefix: str,
        output_path: Optional[str | Path],
        result: TagAutomationResult,
    ) -> None:
        if not master_csv or not archive:
            raise InputMissingError("Please provide both the Master CSV and the Collections ZIP.")

        # 1. Master CSV: every row is kept, in order
        self._enter(RunState.PARSING_MASTER)
        self._log("Parsing Master CSV...")
        try:
            master_text = decode_bytes(master_csv)
            fieldnames = read_header(master_text)
            master_rows = self.engine.decode_master(master_text)
        except (UnicodeDecodeError, csv.Error) as e:
            raise DecodeFailureError(f"Could not parse Master CSV: {e}") from e
        result.rows_loaded = len(master_rows)
        self._log(f"Loaded {len(master_rows)} rows from Master CSV.")

        # 2. Collections archive: handle -> tags
        self._enter(RunState.SCANNING_ARCHIVE)
        self._log("Scanning Collections ZIP...")
        entries = self.engine.open_archive(archive)
        assignment = self.engine.build_tag_assignment(entries, prefix)
        for source in assignment.sources:
            self._log(f"Found collection: {source.entry_name} -> Tag: {source.tag}")
        for skipped in assignment.skipped:
            self._log(f"Skipped unreadable collection: {skipped.entry_name} ({skipped.reason})")
        result.handles_mapped = len(assignment)
        result.skipped_entries = list(assignment.skipped)
        self._log(f"Mapped tags for {len(assignment)} unique handles.")

        # 3. Apply
        self._enter(RunState.APPLYING_TAGS)
        self._log("Applying tags to Master Data...")
        applied = self.engine.apply_tags(master_rows, assignment)
        result.updated_count = applied.updated_count
        self._log(f"Finished processing. Updated tags in {applied.updated_count} rows.")

        # 4. Export
        self._enter(RunState.EXPORTING)
        self._log("Generating final CSV...")
        csv_text = self.engine.export_csv(applied.rows, fieldnames or None)

        if output_path:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(csv_text)
            result.output_path = str(path)
            self._log(f"Saved {path}")

        result.csv_text = csv_text
        self._enter(RunState.DONE)
        self._log("Process complete!")
