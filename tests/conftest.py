"""
Pytest fixtures for barcode scanner tests.

Workbooks are built with openpyxl in a temporary directory for each test.
"""

import zipfile

import pytest
from openpyxl import Workbook


HEADER = ("Barcode", "Price")


@pytest.fixture
def make_workbook(tmp_path):
    """Return a factory writing rows (after a header) to a fresh .xlsx file."""
    counter = {'n': 0}

    def _make(rows, header=HEADER, extra_sheets=None, name=None):
        counter['n'] += 1
        path = tmp_path / (name or f"catalog_{counter['n']}.xlsx")
        wb = Workbook()
        ws = wb.active
        ws.title = "Prices"
        if header is not None:
            ws.append(list(header))
        for row in rows:
            ws.append(list(row))
        for title, sheet_rows in (extra_sheets or {}).items():
            other = wb.create_sheet(title)
            for row in sheet_rows:
                other.append(list(row))
        wb.save(path)
        return path

    return _make


@pytest.fixture
def sample_rows():
    """Rows from the end-to-end example: BC001 appears twice."""
    return [
        ("BC001", "2.50"),
        ("BC002", 3),
        ("BC001", "9,99"),
    ]


@pytest.fixture
def damage_sheet(tmp_path):
    """Return a function copying a workbook with its first sheet's XML cut in half."""

    def _damage(src):
        dst = tmp_path / f"damaged_{src.name}"
        with zipfile.ZipFile(src) as zin, zipfile.ZipFile(dst, "w", zipfile.ZIP_DEFLATED) as zout:
            for item in zin.infolist():
                data = zin.read(item.filename)
                if item.filename == "xl/worksheets/sheet1.xml":
                    data = data[: len(data) // 2]
                zout.writestr(item, data)
        return dst

    return _damage
