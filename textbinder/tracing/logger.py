"""Module logger helpers.

Every module grabs its logger the same way::

    from textbinder.tracing.logger import get_module_logger
    logger = get_module_logger()

The logger is named after the calling module, so records from the library
all live under the ``textbinder`` hierarchy and can be tuned in one place.
"""

from __future__ import annotations

import inspect
import logging
from typing import Optional, Union

LIBRARY_LOGGER_NAME = "textbinder"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def get_module_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger named after the calling module.

    Args:
        name: Explicit logger name. When omitted the ``__name__`` of the
            caller's module is used.
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        name = caller.f_globals.get("__name__", LIBRARY_LOGGER_NAME) if caller else LIBRARY_LOGGER_NAME
        del frame, caller
    return logging.getLogger(name)


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(level: Optional[Union[int, str]] = None, force: bool = False) -> logging.Logger:
    """Attach a stream handler to the library logger.

    Args:
        level: Log level name or number. Defaults to ``binder_settings.log_level``.
        force: Reconfigure even if logging was already set up.

    Returns:
        The configured ``textbinder`` logger.
    """
    global _configured

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    if _configured and not force:
        if level is not None:
            library_logger.setLevel(_coerce_level(level))
        return library_logger

    if level is None:
        from ..config.binder_settings import binder_settings
        level = binder_settings.log_level
    numeric_level = _coerce_level(level)

    for handler in list(library_logger.handlers):
        if getattr(handler, "_textbinder_handler", False):
            library_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    handler._textbinder_handler = True
    library_logger.addHandler(handler)
    library_logger.setLevel(numeric_level)
    _configured = True
    return library_logger
