"""Logging configuration for the CLI and the web UI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: str | int = "INFO",
    *,
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> None:
    """Install a Rich console handler (and optionally a file handler) on the root logger.

    Call once, before the first log record is emitted.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers when called again (e.g. from tests).
    for h in list(root.handlers):
        root.removeHandler(h)

    ch = RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
    ch.setLevel(level if isinstance(level, int) else level.upper())
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(fh)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
