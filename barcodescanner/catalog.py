from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

NO_DATA = "No data available."
NOT_FOUND = "Barcode not found."


def format_entry(barcode: str, price: float) -> str:
    return f"{barcode} - {price}"


def delete_entry(entries: Mapping[str, float], key: str | None) -> tuple[dict[str, float], bool]:
    """Return a copy of ``entries`` without ``key`` and whether it was there.

    Keys are compared exactly: ``" BC001"`` does not match ``"BC001"``.
    The input mapping is never modified.
    """
    out = dict(entries)
    if key is None or key not in out:
        return out, False
    del out[key]
    return out, True


@dataclass(frozen=True)
class ListResult:
    ok: bool
    lines: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class DeleteResult:
    ok: bool
    key: str | None = None
    error: str | None = None


class Catalog:
    """Barcode to price mapping for one session.

    Owned by whoever loads the workbook; replaced wholesale on every import
    and otherwise only changed by :meth:`delete`. Not thread safe.
    """

    def __init__(self, entries: Mapping[str, float] | None = None):
        self._entries: dict[str, float] = dict(entries or {})

    def replace(self, entries: Mapping[str, float]) -> None:
        self._entries = dict(entries)

    def entries(self) -> dict[str, float]:
        return dict(self._entries)

    def price(self, barcode: str) -> float | None:
        return self._entries.get(barcode)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, barcode: object) -> bool:
        return barcode in self._entries

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Catalog):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Catalog({self._entries!r})"

    def listing(self) -> ListResult:
        if not self._entries:
            return ListResult(ok=False, error=NO_DATA)
        return ListResult(ok=True, lines=[format_entry(k, v) for k, v in self._entries.items()])

    def delete(self, key: str | None) -> DeleteResult:
        self._entries, found = delete_entry(self._entries, key)
        if not found:
            return DeleteResult(ok=False, key=key, error=NOT_FOUND)
        return DeleteResult(ok=True, key=key)
