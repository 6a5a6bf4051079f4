"""
My Money Entry Point.

Runs the command-line interface.  Every subsystem is wired per command
through ``AppContext``; there are no module-level globals.

Usage::

    python main.py deploy --site my-money-site
    python main.py seed-categories --email me@example.com
"""

from __future__ import annotations

import sys
import traceback

from mymoney.cli import app
from mymoney.logger import get_logger


def _report_fatal_error(exc: BaseException) -> None:
    """Log and print an unexpected failure so it is never silent."""
    detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    get_logger("main").critical("Unhandled error: %s", exc, extra={"event": "FATAL"})
    sys.stderr.write(f"FATAL: {type(exc).__name__}: {exc}\n{detail}")


def main() -> None:
    app()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        _report_fatal_error(exc)
        sys.exit(1)
