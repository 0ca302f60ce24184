"""
mkvsubs.logging - Logging setup for the command line.

Warnings (unsupported codecs, failed tracks) always reach stderr. Verbose mode
adds the ffprobe/ffmpeg/mkvextract command lines and the raw probe output.
"""

from __future__ import annotations

import logging
import sys

logger = logging.getLogger("mkvsubs")

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route mkvsubs log records to stderr.

    Args:
        verbose: Log at DEBUG with module names; otherwise WARNING only
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=VERBOSE_FORMAT if verbose else DEFAULT_FORMAT,
        stream=sys.stderr,
    )
    # basicConfig is a no-op once the root logger has handlers
    logger.setLevel(level)
