"""
Logging setup shared by the API process and the maintenance scripts.

Usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.warning("Remote backend disabled", extra={"operation": "create_user"})
"""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    numeric = getattr(logging, (level or "INFO").upper(), logging.INFO)
    if not any(getattr(h, "_swdsms", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._swdsms = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(numeric)
