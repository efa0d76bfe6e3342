from __future__ import annotations

import logging

from barcodescanner.settings import Settings


def main() -> int:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from barcodescanner.ui.main_window import run_app

    return run_app(settings)


if __name__ == "__main__":
    raise SystemExit(main())
