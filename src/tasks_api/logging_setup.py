from __future__ import annotations

import logging
import sys


def setup_logging(level: str = "info") -> None:
    """
    Configure root logging with a single stderr handler.

    Call this ONCE, before the server starts.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
