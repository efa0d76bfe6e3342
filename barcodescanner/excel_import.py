from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
import logging
import math
from pathlib import Path
from typing import Any, Iterator
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.datetime import to_excel
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

BARCODE_COL = 0
PRICE_COL = 1


class ExcelImportError(RuntimeError):
    pass


class CatalogFileError(ExcelImportError):
    """The workbook is missing, unreadable, or not a valid .xlsx file."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not read Excel file {path}: {reason}")
        self.path = path
        self.reason = reason


class MalformedPriceError(ExcelImportError):
    """Raised in strict mode for a price cell whose text is not a number."""

    def __init__(self, row: int, text: str):
        super().__init__(f"Invalid price format in row {row}: {text!r}")
        self.row = row
        self.text = text


@dataclass(frozen=True)
class PriceParse:
    value: float
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ImportedEntry:
    row: int  # 1-based, as shown by Excel
    barcode: str
    price: float
    error: str | None = None


def parse_price_text(text: str) -> PriceParse:
    """Parse a price typed as text. Commas count as decimal separators.

    Blank text is a valid zero. Anything that does not give a finite float
    comes back as ``0.0`` with the offending text in ``error``.
    """
    s = text.strip()
    if not s:
        return PriceParse(0.0)

    # float() would also accept digit-group underscores; a spreadsheet never means that.
    normalized = s.replace(",", ".")
    if "_" in normalized:
        return PriceParse(0.0, error=s)
    try:
        value = float(normalized)
    except ValueError:
        return PriceParse(0.0, error=s)
    if not math.isfinite(value):
        return PriceParse(0.0, error=s)
    return PriceParse(value)


def parse_price(value: Any, *, data_type: str = "n", epoch: datetime | None = None) -> PriceParse:
    """Turn the raw value of a price cell into a price.

    Numbers are used as-is, dates are turned back into the serial number the
    cell stores, text goes through :func:`parse_price_text`. Booleans and error
    cells give ``0.0`` without being reported as malformed.
    """
    if data_type == "e" or isinstance(value, bool):
        logger.debug("Non-numeric price cell %r treated as 0.0", value)
        return PriceParse(0.0)
    if isinstance(value, (int, float)):
        return PriceParse(float(value))
    if isinstance(value, (datetime, date, time, timedelta)):
        serial = to_excel(value, epoch) if epoch is not None else to_excel(value)
        return PriceParse(float(serial))
    if isinstance(value, str):
        return parse_price_text(value)

    logger.debug("Unsupported price cell %r treated as 0.0", value)
    return PriceParse(0.0)


def barcode_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        # 4006381333931 typed into a numeric cell comes back as a float
        return str(int(value))
    return str(value).strip()


class ExcelImporter:
    """Reads barcode/price pairs from the first sheet of an .xlsx workbook.

    Column A holds the barcode and column B the price; the first row is a
    header and is always skipped. Rows missing either cell are ignored.
    """

    def __init__(self, xlsx_path: Path, *, strict: bool = False):
        self.xlsx_path = Path(xlsx_path)
        self.strict = bool(strict)

    def _open(self):
        if not self.xlsx_path.exists():
            raise CatalogFileError(self.xlsx_path, "file not found")
        if not self.xlsx_path.is_file():
            raise CatalogFileError(self.xlsx_path, "not a file")
        try:
            # read_only keeps memory flat; data_only yields cached formula results.
            return load_workbook(filename=self.xlsx_path, read_only=True, data_only=True)
        except (OSError, BadZipFile, InvalidFileException, KeyError) as e:
            raise CatalogFileError(self.xlsx_path, str(e) or type(e).__name__) from e

    def _rows(self, ws) -> Iterator[tuple]:
        # Read-only sheets are parsed while iterating, so a damaged sheet fails here.
        rows = ws.iter_rows(min_row=1)
        while True:
            try:
                row = next(rows)
            except StopIteration:
                return
            except (SyntaxError, ValueError, KeyError) as e:
                # SyntaxError covers ElementTree's and lxml's XML parse errors.
                raise CatalogFileError(self.xlsx_path, str(e) or type(e).__name__) from e
            yield row

    def iter_entries(self) -> Iterator[ImportedEntry]:
        """Yield one entry per usable data row, in sheet order.

        The workbook is opened when iteration starts and closed when it ends,
        including when the caller stops early or an exception is raised.
        """
        wb = self._open()
        try:
            if not wb.worksheets:
                raise CatalogFileError(self.xlsx_path, "workbook has no sheets")
            ws = wb.worksheets[0]
            epoch = getattr(wb, "epoch", None)

            for idx, row in enumerate(self._rows(ws)):
                if idx == 0:
                    continue

                # Guard against short rows
                def at(i: int):
                    return row[i] if i < len(row) else None

                code_cell = at(BARCODE_COL)
                price_cell = at(PRICE_COL)
                if code_cell is None or price_cell is None:
                    continue
                if code_cell.value is None or price_cell.value is None:
                    continue

                row_num = idx + 1
                barcode = barcode_text(code_cell.value)
                parsed = parse_price(
                    price_cell.value,
                    data_type=getattr(price_cell, "data_type", "n"),
                    epoch=epoch,
                )
                if not parsed.ok:
                    if self.strict:
                        raise MalformedPriceError(row_num, parsed.error or "")
                    logger.warning("Invalid price format: %s (row %s)", parsed.error, row_num)

                yield ImportedEntry(row=row_num, barcode=barcode, price=parsed.value, error=parsed.error)
        finally:
            wb.close()

    def read_catalog(self) -> dict[str, float]:
        out: dict[str, float] = {}
        for entry in self.iter_entries():
            # Duplicate barcodes: the last occurrence in the sheet wins.
            out[entry.barcode] = entry.price
        return out


def read_barcodes_from_excel(file_path: str | Path) -> dict[str, float]:
    """Best-effort ingestion: never raises for a bad file, returns ``{}`` instead.

    Malformed prices are substituted with ``0.0`` and logged.
    """
    try:
        return ExcelImporter(Path(file_path)).read_catalog()
    except CatalogFileError:
        logger.exception("Failed to read barcodes from %s", file_path)
        return {}
