"""
Tests for the main window: loading a workbook, printing and deleting entries.

Runs Qt offscreen; message boxes and input dialogs are replaced so no window
ever blocks.
"""

import logging
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from barcodescanner.catalog import Catalog
from barcodescanner.settings import Settings
from barcodescanner.ui.main_window import MainWindow


@pytest.fixture(scope='session')
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def boxes(monkeypatch):
    """Record message boxes instead of showing them."""
    shown = []

    def _record(kind):
        def _box(parent, title, text, *args, **kwargs):
            shown.append((kind, title, text))
            return QtWidgets.QMessageBox.Ok
        return _box

    monkeypatch.setattr(QtWidgets.QMessageBox, "critical", _record("critical"))
    monkeypatch.setattr(QtWidgets.QMessageBox, "information", _record("information"))
    return shown


@pytest.fixture
def make_window(qapp):
    windows = []

    def _make(entries=None, strict=False):
        win = MainWindow(Settings(STRICT_PRICES=strict), Catalog(entries))
        windows.append(win)
        return win

    yield _make
    for win in windows:
        win.close()
        win.deleteLater()


class TestLoadFile:
    """Test importing a workbook into the window's catalog."""

    def test_success_replaces_catalog_and_logs(self, make_window, make_workbook, sample_rows, boxes, caplog):
        caplog.set_level(logging.INFO, logger="barcodescanner.ui.main_window")
        win = make_window({"OLD": 1.0})
        path = make_workbook(sample_rows)

        assert win.load_file(path) is True

        assert win.catalog == {"BC001": pytest.approx(9.99), "BC002": 3.0}
        messages = [r.getMessage() for r in caplog.records]
        assert any("Selected file" in m and str(path) in m for m in messages)
        assert any("Barcode map size: 2" in m for m in messages)
        assert boxes == []

    def test_missing_file_keeps_catalog_and_shows_error(self, make_window, tmp_path, boxes):
        win = make_window({"OLD": 1.0})

        assert win.load_file(tmp_path / "missing.xlsx") is False

        assert win.catalog == {"OLD": 1.0}
        assert len(boxes) == 1
        assert boxes[0][0] == "critical"

    def test_damaged_file_keeps_catalog_and_shows_error(self, make_window, make_workbook, sample_rows, damage_sheet, boxes):
        win = make_window({"OLD": 1.0})
        path = damage_sheet(make_workbook(sample_rows))

        assert win.load_file(path) is False

        assert win.catalog == {"OLD": 1.0}
        assert [b[0] for b in boxes] == ["critical"]

    def test_strict_malformed_price_keeps_catalog(self, make_window, make_workbook, boxes):
        win = make_window({"OLD": 1.0}, strict=True)
        path = make_workbook([("BC001", 2), ("BC002", "abc")])

        assert win.load_file(path) is False

        assert win.catalog == {"OLD": 1.0}
        assert boxes[0][0] == "critical"
        assert "abc" in boxes[0][2]


class TestPrintList:
    """Test the text panel contents."""

    def test_empty_catalog(self, make_window):
        win = make_window()

        win.print_list()

        assert win.text_area.toPlainText() == "No data available.\n"

    def test_lists_entries(self, make_window):
        win = make_window({"BC001": 9.99})

        win.print_list()

        assert win.text_area.toPlainText().splitlines() == [
            "Here are all the products imported:",
            "",
            "BC001 - 9.99",
        ]


class TestDeleteEntry:
    """Test the delete prompt."""

    def _answer(self, monkeypatch, text, accepted=True):
        monkeypatch.setattr(
            QtWidgets.QInputDialog,
            "getText",
            lambda *args, **kwargs: (text, accepted),
        )

    def test_deletes_entered_barcode(self, make_window, monkeypatch, boxes):
        win = make_window({"BC001": 9.99, "BC002": 3.0})
        self._answer(monkeypatch, "BC001")

        win.delete_entry()

        assert win.catalog == {"BC002": 3.0}
        assert boxes == [("information", "Delete Entry", "Entry deleted.")]

    def test_unknown_barcode_reports_not_found(self, make_window, monkeypatch, boxes):
        win = make_window({"BC001": 9.99})
        self._answer(monkeypatch, " BC001")

        win.delete_entry()

        assert win.catalog == {"BC001": 9.99}
        assert boxes == [("information", "Delete Entry", "Barcode not found.")]

    def test_cancelled_prompt_deletes_nothing(self, make_window, monkeypatch, boxes):
        win = make_window({"BC001": 9.99})
        self._answer(monkeypatch, "BC001", accepted=False)

        win.delete_entry()

        assert win.catalog == {"BC001": 9.99}
        assert boxes[0][2] == "Barcode not found."
