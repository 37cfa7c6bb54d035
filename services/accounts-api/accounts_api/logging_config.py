"""Root logger configuration for the accounts service."""

from __future__ import annotations

import logging


def setup_logging(level: str = "INFO") -> None:
    """Attach a console handler to the root logger unless one is already configured.

    Parameters
    ----------
    level:
        Logging level name (e.g. ``"DEBUG"``), case insensitive. Unknown names
        fall back to ``INFO``.
    """
    root = logging.getLogger()
    if root.handlers:
        # uvicorn or the test runner got there first
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
