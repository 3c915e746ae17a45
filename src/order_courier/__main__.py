from __future__ import annotations

import sys

from .config import DEFAULT_CONFIG
from .coordinator import run
from .logging import configure_logging


def main() -> int:
    configure_logging()
    report = run(DEFAULT_CONFIG)
    return 130 if report.interrupted else 0


if __name__ == "__main__":
    sys.exit(main())
