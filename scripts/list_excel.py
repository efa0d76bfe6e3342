from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from barcodescanner.catalog import Catalog
from barcodescanner.excel_import import ExcelImporter, ExcelImportError
from barcodescanner.settings import Settings
from barcodescanner.ui.formatting import listing_text


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    parser = argparse.ArgumentParser(description="Print the barcode/price list of a workbook")
    parser.add_argument("xlsx", nargs="?", default=settings.EXCEL_IMPORT_PATH or None)
    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=settings.STRICT_PRICES,
        help="fail on the first malformed price instead of importing it as 0.0 (default: STRICT_PRICES)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if not args.xlsx:
        parser.error("no workbook given and EXCEL_IMPORT_PATH is not set")

    xlsx = Path(args.xlsx)
    if not xlsx.is_absolute():
        xlsx = xlsx.resolve()

    try:
        catalog = Catalog(ExcelImporter(xlsx, strict=args.strict).read_catalog())
    except ExcelImportError as e:
        print("ERROR:", e, file=sys.stderr)
        return 1

    sys.stdout.write(listing_text(catalog.listing()))
    print("entries", len(catalog))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
