from __future__ import annotations

import logging
import sys


LOGGER_NAME = "idstree"
CONSOLE_FMT = "%(levelname)s | %(name)s | %(message)s"

# Tags handlers installed here so reconfiguring replaces them instead of stacking.
_HANDLER_TAG_ATTR = "_idstree_handler"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send the package's log records to stderr.

    WARNING and above by default (soft variant fallbacks, skipped source lines),
    everything from DEBUG with ``verbose``. Safe to call more than once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            logger.removeHandler(h)

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(CONSOLE_FMT))
    setattr(sh, _HANDLER_TAG_ATTR, True)
    logger.addHandler(sh)
    return logger
