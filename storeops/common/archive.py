"""
ZIP Archive Reader

Opens an in-memory ZIP archive (the bundle of per-collection CSV exports)
and exposes its entries by path, in archive order.
"""

import io
import logging
import zipfile
import zlib
from typing import Dict

from .csv_utils import decode_bytes
from .exceptions import DecodeFailureError

logger = logging.getLogger(__name__)


class ArchiveEntry:
    """A single file (or directory) inside an opened archive."""

    def __init__(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo):
        self._archive = archive
        self._info = info

    @property
    def name(self) -> str:
        return self._info.filename

    @property
    def is_dir(self) -> bool:
        return self._info.is_dir()

    def read_bytes(self) -> bytes:
        """
        Read the raw entry contents.

        Raises:
            DecodeFailureError: If the entry is corrupt, encrypted or
                uses an unsupported compression method
        """
        try:
            return self._archive.read(self._info)
        except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError) as e:
            raise DecodeFailureError(f"Unreadable archive entry {self.name}: {e}") from e

    def read_text(self, encoding: str = 'utf-8-sig') -> str:
        """
        Read the entry as text.

        Raises:
            UnicodeDecodeError: If the contents are not valid in ``encoding``
            DecodeFailureError: If the entry itself cannot be read
        """
        return decode_bytes(self.read_bytes(), encoding)

    def __repr__(self) -> str:
        return f"ArchiveEntry({self.name!r})"


class ZipArchiveReader:
    """
    Archive-reader capability backed by :mod:`zipfile`.

    Usage:
        entries = ZipArchiveReader().open_archive(zip_bytes)
        for path, entry in entries.items():
            text = entry.read_text()
    """

    def open_archive(self, data: bytes) -> Dict[str, ArchiveEntry]:
        """
        Open archive bytes.

        Args:
            data: Raw ZIP file contents

        Returns:
            Mapping from entry path to entry, in archive order

        Raises:
            DecodeFailureError: If the bytes are not a readable ZIP archive
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise DecodeFailureError(f"Not a readable ZIP archive: {e}") from e

        entries = {info.filename: ArchiveEntry(archive, info) for info in archive.infolist()}
        logger.debug("Opened archive with %d entries", len(entries))
        return entries
