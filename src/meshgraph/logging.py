"""Package-wide logging for MeshGraph.

Every module logs through a child of the ``meshgraph`` logger. Records go
to stderr so the CLI report on stdout stays clean.
"""

import logging
import sys

_ROOT_LOGGER_NAME = "meshgraph"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root() -> logging.Logger:
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, attached under the 'meshgraph' root."""
    _configure_root()
    return logging.getLogger(name)


def enable_debug_logging() -> None:
    """Switch the whole package to DEBUG (the CLI's --verbose)."""
    root_logger = _configure_root()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers:
        handler.setLevel(logging.DEBUG)
