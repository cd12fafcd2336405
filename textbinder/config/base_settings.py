"""Base settings primitives shared by every settings class.

Provides:
- ``EnvParser``: typed lookup of the first set environment variable among
  several candidate names
- ``BaseSettings``: common ``.env`` loading for frozen dataclass settings
- ``SettingsError``: raised for values that cannot be parsed or validated
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from dotenv import find_dotenv, load_dotenv

from ..exceptions import ConfigurationError
from ..tracing.logger import get_module_logger

logger = get_module_logger()

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class SettingsError(ConfigurationError):
    """Raised when a setting is missing, malformed or invalid."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, error_type="INVALID_SETTING", details=details)


class EnvParser:
    """Helpers for reading typed values from the environment."""

    @staticmethod
    def parse_bool(raw: str) -> bool:
        """Parse the usual truthy/falsy spellings into a bool."""
        value = raw.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {raw!r}")

    @staticmethod
    def get_env(
        *names: str,
        default: Any = None,
        env_type: Callable[[str], Any] = str,
    ) -> Any:
        """Return the first non-empty environment variable among ``names``.

        Args:
            *names: Candidate variable names, checked in order.
            default: Value returned when none of the names is set.
            env_type: Conversion applied to the raw string (``bool`` is
                handled with :meth:`parse_bool`).

        Raises:
            SettingsError: If the raw value cannot be converted.
        """
        for name in names:
            raw = os.environ.get(name)
            if raw is None or raw.strip() == "":
                continue
            converter = EnvParser.parse_bool if env_type is bool else env_type
            try:
                return converter(raw)
            except (TypeError, ValueError) as exc:
                raise SettingsError(
                    f"Invalid value for {name}: {raw!r}",
                    details={"variable": name, "value": raw, "expected": getattr(env_type, "__name__", str(env_type))},
                ) from exc
        return default


@dataclass(frozen=True)
class BaseSettings:
    """Base class for frozen dataclass settings."""

    @staticmethod
    def _load_dotenv_if_requested(
        load: bool,
        dotenv_paths: Optional[List[Union[str, Path]]] = None,
    ) -> None:
        """Load ``.env`` files without overriding variables already set.

        When ``dotenv_paths`` is given every existing file is loaded in
        order; otherwise the nearest ``.env`` from the working directory is
        used, if any.
        """
        if not load:
            return

        if dotenv_paths:
            for path in dotenv_paths:
                path = Path(path)
                if path.is_file():
                    load_dotenv(dotenv_path=str(path), override=False)
                    logger.debug("Loaded environment from %s", path)
                else:
                    logger.debug("Skipping missing .env file %s", path)
            return

        found = find_dotenv(usecwd=True)
        if found:
            load_dotenv(dotenv_path=found, override=False)
            logger.debug("Loaded environment from %s", found)

    def validate(self) -> None:
        """Validate settings. Subclasses override when they have rules."""
        return None
