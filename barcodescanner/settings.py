from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # App
    APP_NAME: str = os.environ.get("APP_NAME", "Barcode Scanner")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Excel import
    # Workbook loaded at start-up; empty means start with an empty catalog.
    EXCEL_IMPORT_PATH: str = os.environ.get("EXCEL_IMPORT_PATH", "")
    # Raise on the first malformed price instead of importing it as 0.0.
    STRICT_PRICES: bool = _env_flag("STRICT_PRICES")

    def __post_init__(self) -> None:
        level = str(self.LOG_LEVEL or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        object.__setattr__(self, "LOG_LEVEL", level)

        path = str(self.EXCEL_IMPORT_PATH or "").strip()
        if path:
            p = Path(path).expanduser()
            if not p.is_absolute():
                # Relative to the project root, not the process working directory.
                project_root = Path(__file__).resolve().parents[1]
                p = (project_root / p).resolve()
            path = str(p)
        object.__setattr__(self, "EXCEL_IMPORT_PATH", path)

    @property
    def log_level(self) -> int:
        return logging.getLevelName(self.LOG_LEVEL)

    def import_path(self) -> Path | None:
        return Path(self.EXCEL_IMPORT_PATH) if self.EXCEL_IMPORT_PATH else None
