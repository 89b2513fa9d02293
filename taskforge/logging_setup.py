from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the terminal readable: our own records pass, others only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskforge" or record.name.startswith("taskforge."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskforge",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    file_logging: bool = True,
) -> None:
    """Install a stderr handler and, optionally, a taskforge.log file handler.

    Call once, before the first record is emitted.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if file_logging:
        log_dir = Path(log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_dir / "taskforge.log"), encoding="utf-8")
        except OSError:
            logging.getLogger(__name__).warning("Cannot write logs under %s; file logging disabled.", log_dir)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(fmt)
            root.addHandler(fh)

    logging.captureWarnings(True)
