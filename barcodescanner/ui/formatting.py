from __future__ import annotations

from barcodescanner.catalog import ListResult

LISTING_HEADER = "Here are all the products imported:"


def listing_text(result: ListResult) -> str:
    if not result.ok:
        return f"{result.error}\n"
    return LISTING_HEADER + "\n\n" + "".join(f"{line}\n" for line in result.lines)
