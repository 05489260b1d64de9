"""
Run the API with uvicorn.

Usage:
    python -m swdsms

If PORT is taken the next ports are tried, up to PORT_RETRIES times.
"""

from __future__ import annotations

import logging
import socket
import sys
from typing import Optional

import uvicorn

from swdsms.core.config import get_settings
from swdsms.core.logging import setup_logging

logger = logging.getLogger("swdsms")


def port_is_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def pick_port(host: str, port: int, retries: int) -> Optional[int]:
    for candidate in range(port, port + max(0, retries) + 1):
        if port_is_free(host, candidate):
            return candidate
        logger.warning("Port %s in use, trying %s", candidate, candidate + 1)
    return None


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)
    port = pick_port(settings.host, settings.port, settings.port_retries)
    if port is None:
        logger.error("No free port in %s-%s", settings.port, settings.port + settings.port_retries)
        return 1
    if port != settings.port:
        logger.info("Bound to fallback port %s", port)
    uvicorn.run("swdsms.app:create_app", factory=True, host=settings.host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
