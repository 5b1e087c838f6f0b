"""Shared test fixtures."""

import io
import zipfile

import pytest

MASTER_FIELDNAMES = ["Handle", "Title", "Body (HTML)", "Vendor", "Tags", "Variant SKU", "Image Src"]


def make_zip(files):
    """Build ZIP bytes from a {path: text or bytes} mapping, in order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def flip_byte(data, marker):
    """Corrupt the stored bytes of an entry so its CRC no longer matches."""
    index = data.index(marker) + len(marker) - 1
    return data[:index] + bytes([data[index] ^ 1]) + data[index + 1:]


def collection_csv(*handles, column="Handle"):
    """CSV text of a collection export listing the given handles."""
    lines = [f"{column},Title"]
    lines.extend(f"{handle},Product {handle}" for handle in handles)
    return "\n".join(lines) + "\n"


@pytest.fixture
def master_rows():
    """Master export: a product row, its variant and image rows, and an untagged product."""
    return [
        {
            "Handle": "mug-01", "Title": "Mug", "Body (HTML)": "<p>Stoneware, 350ml</p>",
            "Vendor": "Acme", "Tags": "featured", "Variant SKU": "MUG-01-S", "Image Src": "",
        },
        {
            "Handle": "mug-01", "Title": "", "Body (HTML)": "",
            "Vendor": "", "Tags": "", "Variant SKU": "MUG-01-L", "Image Src": "",
        },
        {
            "Handle": "mug-01", "Title": "", "Body (HTML)": "",
            "Vendor": "", "Tags": "", "Variant SKU": "", "Image Src": "https://cdn.example.com/mug.jpg",
        },
        {
            "Handle": "shirt-01", "Title": "Shirt", "Body (HTML)": "<p>Cotton, \"classic\" fit</p>",
            "Vendor": "Acme", "Tags": "", "Variant SKU": "SHIRT-01", "Image Src": "",
        },
        {
            "Handle": "", "Title": "", "Body (HTML)": "",
            "Vendor": "", "Tags": "", "Variant SKU": "", "Image Src": "https://cdn.example.com/orphan.jpg",
        },
    ]


@pytest.fixture
def collections_zip():
    """Collections archive with macOS metadata and a non-CSV file mixed in."""
    return make_zip({
        "new-arrivals.csv": collection_csv("mug-01", "shirt-01"),
        "Summer-Sale.csv": collection_csv("shirt-01", column="handle"),
        "__MACOSX/._new-arrivals.csv": b"\x00\x05\x16\x07",
        "notes.txt": "not a collection",
    })


@pytest.fixture
def zip_builder():
    return make_zip


@pytest.fixture
def collection_csv_builder():
    return collection_csv


@pytest.fixture
def corrupt_collections_zip():
    """A valid sale.csv next to broken.csv whose stored bytes fail the CRC check."""
    data = make_zip({
        "broken.csv": collection_csv("zz-broken-01"),
        "sale.csv": collection_csv("shirt-01"),
    })
    return flip_byte(data, b"zz-broken-01")
