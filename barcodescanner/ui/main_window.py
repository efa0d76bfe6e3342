from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6 import QtGui, QtWidgets

from barcodescanner.catalog import Catalog
from barcodescanner.excel_import import ExcelImporter, ExcelImportError
from barcodescanner.settings import Settings
from barcodescanner.ui.formatting import listing_text

logger = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, settings: Settings, catalog: Catalog | None = None):
        super().__init__()
        self._settings = settings
        self.catalog = catalog if catalog is not None else Catalog()

        self.setWindowTitle(settings.APP_NAME)
        self.resize(500, 400)
        self._build_ui()

    def _build_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(central)

        self.text_area = QtWidgets.QPlainTextEdit()
        self.text_area.setReadOnly(True)
        layout.addWidget(self.text_area, 1)

        buttons = QtWidgets.QHBoxLayout()
        self.upload_btn = QtWidgets.QPushButton("Select Excel File")
        self.upload_btn.clicked.connect(self.select_file)
        self.print_btn = QtWidgets.QPushButton("Print List")
        self.print_btn.clicked.connect(self.print_list)
        self.delete_btn = QtWidgets.QPushButton("Delete Entry")
        self.delete_btn.clicked.connect(self.delete_entry)

        buttons.addStretch(1)
        buttons.addWidget(self.upload_btn)
        buttons.addWidget(self.print_btn)
        buttons.addWidget(self.delete_btn)
        buttons.addStretch(1)
        layout.addLayout(buttons)

        self.setCentralWidget(central)

    def load_file(self, path: Path) -> bool:
        logger.info("Selected file: %s", path)
        try:
            importer = ExcelImporter(path, strict=self._settings.STRICT_PRICES)
            entries = importer.read_catalog()
        except ExcelImportError as e:
            logger.error("%s", e)
            QtWidgets.QMessageBox.critical(self, "Import error", str(e))
            return False
        self.catalog.replace(entries)
        logger.info("Barcode map size: %s", len(self.catalog))
        return True

    def select_file(self) -> None:
        file_name, _ = QtWidgets.QFileDialog.getOpenFileName(
            self,
            "Select Excel File",
            str(Path.cwd()),
            "Excel (*.xlsx)",
        )
        if not file_name:
            return
        self.load_file(Path(file_name).resolve())

    def print_list(self) -> None:
        self.text_area.setPlainText(listing_text(self.catalog.listing()))

    def delete_entry(self) -> None:
        key, accepted = QtWidgets.QInputDialog.getText(self, "Delete Entry", "Enter the barcode to delete:")
        res = self.catalog.delete(key if accepted else None)
        if res.ok:
            logger.info("Deleted barcode %s", res.key)
            QtWidgets.QMessageBox.information(self, "Delete Entry", "Entry deleted.")
        else:
            QtWidgets.QMessageBox.information(self, "Delete Entry", res.error or "Barcode not found.")


def _try_set_app_icon(app: QtWidgets.QApplication) -> None:
    # Optional: repoRoot/assets/app.ico (or the PyInstaller bundle equivalent).
    candidates: list[Path] = []

    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        candidates.append(Path(str(meipass)) / "assets" / "app.ico")
    candidates.append(Path(__file__).resolve().parents[2] / "assets" / "app.ico")

    for p in candidates:
        if p.exists():
            app.setWindowIcon(QtGui.QIcon(str(p)))
            return


def run_app(settings: Settings) -> int:
    app = QtWidgets.QApplication(sys.argv)
    _try_set_app_icon(app)
    win = MainWindow(settings)

    preload = settings.import_path()
    if preload is not None:
        if preload.exists():
            win.load_file(preload)
        else:
            logger.warning("EXCEL_IMPORT_PATH does not exist: %s", preload)

    win.show()
    return app.exec()
