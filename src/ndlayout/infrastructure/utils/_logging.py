"""
Logger setup for ndlayout modules.

Library modules log through `logging.getLogger(__name__)` and never attach
handlers on their own. When `NDLAYOUT_DEBUG` is enabled, the first call to
`get_logger` attaches a single console handler to the package root logger
so reshape-path decisions and buffer releases become visible.
"""

from __future__ import annotations

import logging

from .._config import get_config

_ROOT_NAME = "ndlayout"
_FORMAT = "%(filename)s:%(lineno)d - [%(levelname)s]: %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    _configured = True

    if not get_config().debug:
        return

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(logging.DEBUG)
    root.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the `ndlayout` namespace.

    Parameters
    ----------
    name : str
        Usually the caller's `__name__`.

    Returns
    -------
    logging.Logger
        The module logger.
    """
    if not _configured:
        _configure_root()

    # imports go through `src.ndlayout...` in the test suite
    if not name.startswith(_ROOT_NAME):
        idx = name.find(_ROOT_NAME + ".")
        name = name[idx:] if idx >= 0 else f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
