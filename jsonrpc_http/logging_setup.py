"""Console logging configuration for the jsonrpc_http namespace.

Usage:
    configure_logging(logging.INFO)
    configure_logging(trace=True)  # also print rendered requests
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from jsonrpc_http.rpc.diagnostics import TRACE

LOGGER_NAME = "jsonrpc_http"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class _ConsoleHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Marker subclass so reconfiguration can find and replace our handler."""


def configure_logging(
    level: int = logging.WARNING,
    trace: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a stderr handler to the jsonrpc_http logger.

    Calling this again replaces the previous handler instead of adding a
    second one.

    Args:
        level: Minimum level printed.
        trace: Lower the level to TRACE so rendered requests are printed.
        stream: Output stream (default sys.stderr).

    Returns:
        The configured package logger.
    """
    effective = TRACE if trace else level

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            package_logger.removeHandler(handler)

    console_handler = _ConsoleHandler(stream or sys.stderr)
    console_handler.setLevel(effective)
    console_handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))

    package_logger.addHandler(console_handler)
    package_logger.setLevel(effective)
    # Don't propagate to root logger
    package_logger.propagate = False
    return package_logger
