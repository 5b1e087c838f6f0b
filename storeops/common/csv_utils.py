"""
CSV Utilities

Reading and writing Shopify CSV exports, both from files and from
in-memory text. Handles large field sizes, byte order marks and rows
whose cell count does not match the header.
"""

import csv
import io
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

# Surplus cells of a row longer than its header are kept under this key
EXTRA_FIELDS_KEY = "__extra_fields__"


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Shopify exports carry full HTML descriptions in a single cell.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


def decode_bytes(data: bytes | str, encoding: str = 'utf-8-sig') -> str:
    """Decode raw file contents, dropping a leading byte order mark."""
    if isinstance(data, str):
        return data[1:] if data.startswith('\ufeff') else data
    return data.decode(encoding)


class CsvCodec:
    """
    Header-indexed CSV decoder/encoder.

    ``decode`` turns CSV text into an ordered list of column-name-to-value
    dicts; ``encode`` turns such a list back into CSV text whose header is
    the union of all row keys in first-seen order.

    Usage:
        codec = CsvCodec()
        rows = codec.decode(text)
        text = codec.encode(rows)
    """

    def header(self, text: str) -> List[str]:
        return read_header(text)

    def decode(self, text: str) -> List[Dict[str, str]]:
        """
        Parse CSV text with a header row.

        Completely empty lines are skipped. Rows of blank cells (e.g. ",,")
        are kept so that no row of the document is lost.

        Raises:
            csv.Error: If the text is not valid CSV
        """
        reader = csv.DictReader(
            io.StringIO(decode_bytes(text), newline=''),
            restkey=EXTRA_FIELDS_KEY,
            restval='',
        )
        return list(reader)

    def encode(
        self,
        rows: Iterable[Dict[str, str]],
        fieldnames: Optional[List[str]] = None,
    ) -> str:
        """
        Serialize rows to CSV text.

        Args:
            rows: Column-name-to-value dicts
            fieldnames: Explicit column order; defaults to the union of
                row keys in first-seen order

        Returns:
            CSV text with a header row (empty string if there are no columns)
        """
        rows = list(rows)
        if fieldnames is None:
            fieldnames = union_fieldnames(rows)
        else:
            fieldnames = list(fieldnames)
            for name in union_fieldnames(rows):
                if name not in fieldnames:
                    fieldnames.append(name)

        if not fieldnames:
            return ''

        buffer = io.StringIO(newline='')
        writer = csv.writer(buffer)
        writer.writerow(fieldnames)
        for row in rows:
            cells = [_cell(row.get(name)) for name in fieldnames]
            cells.extend(_cell(value) for value in row.get(EXTRA_FIELDS_KEY) or [])
            writer.writerow(cells)
        return buffer.getvalue()


def read_header(text: bytes | str) -> List[str]:
    """Return the column names of a CSV document (empty if none)."""
    reader = csv.reader(io.StringIO(decode_bytes(text), newline=''))
    return next(reader, [])


def union_fieldnames(rows: Iterable[Dict[str, str]]) -> List[str]:
    """Collect row keys in first-seen order, excluding surplus cells."""
    seen: Dict[str, None] = {}
    for row in rows:
        for key in row:
            if key != EXTRA_FIELDS_KEY and key is not None:
                seen.setdefault(key, None)
    return list(seen)


def _cell(value) -> str:
    if value is None:
        return ''
    return str(value)


def read_csv(file_path: str | Path, encoding: str = 'utf-8-sig') -> Iterator[Dict[str, str]]:
    """
    Read CSV file and yield rows as dictionaries.

    Args:
        file_path: Path to CSV file
        encoding: File encoding (default: utf-8 with optional BOM)

    Yields:
        Dictionary for each row with column names as keys
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        reader = csv.DictReader(f, restkey=EXTRA_FIELDS_KEY, restval='')
        for row in reader:
            yield row


def write_csv(
    file_path: str | Path,
    rows: List[Dict[str, str]],
    fieldnames: Optional[List[str]] = None,
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    Args:
        file_path: Path to output CSV file
        rows: List of dictionaries to write
        fieldnames: Column names (if None, uses the union of row keys)
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    text = CsvCodec().encode(rows, fieldnames)

    path = Path(file_path)
    if path.parent != Path('.'):
        path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding=encoding, newline='') as f:
        f.write(text)

    return len(rows)


# Initialize CSV configuration on module import
configure_csv()
