"""Logging setup shared by applications embedding jsend_envelope."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def configure_root(level: int = logging.INFO) -> logging.Logger:
    """Reset the root logger to a single stream handler.

    Existing handlers are replaced so repeated calls (tests, reloads) do not
    stack duplicate output.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    root = logging.getLogger()
    root.setLevel(level)
    return root


__all__ = ["LOG_FORMAT", "configure_root"]
