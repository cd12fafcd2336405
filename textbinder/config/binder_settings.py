"""
Text binder configuration module.

Provides rendering defaults loaded from environment variables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .base_settings import BaseSettings, EnvParser, SettingsError


@dataclass(frozen=True)
class BinderSettings(BaseSettings):
    """Rendering defaults for :class:`~textbinder.binder.TextBinder`."""

    # Replace unknown variables with "" (True) or keep the placeholder (False)
    default_for_missing: bool = True

    # Resolve unregistered chain functions against the built-in table
    builtin_fallback: bool = True

    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        load_dotenv: bool = True,
        dotenv_paths: Optional[List[Union[str, Path]]] = None,
        **overrides
    ) -> "BinderSettings":
        """Create binder settings from environment variables.

        Environment variables:
            TEXTBINDER_DEFAULT_FOR_MISSING: Substitute "" for unknown variables (default: true)
            TEXTBINDER_BUILTIN_FALLBACK: Use the built-in function table (default: true)
            TEXTBINDER_LOG_LEVEL: Level for ``setup_logging`` (default: WARNING)
        """
        cls._load_dotenv_if_requested(load_dotenv, dotenv_paths)

        settings_dict = {
            "default_for_missing": EnvParser.get_env(
                "TEXTBINDER_DEFAULT_FOR_MISSING", default=True, env_type=bool
            ),
            "builtin_fallback": EnvParser.get_env(
                "TEXTBINDER_BUILTIN_FALLBACK", default=True, env_type=bool
            ),
            "log_level": EnvParser.get_env(
                "TEXTBINDER_LOG_LEVEL", "LOG_LEVEL", default="WARNING"
            ).upper(),
        }

        settings_dict.update(overrides)
        settings = cls(**settings_dict)
        settings.validate()
        return settings

    def validate(self) -> None:
        """Validate binder configuration."""
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise SettingsError(
                f"Unknown log level: {self.log_level}",
                details={"log_level": self.log_level},
            )

    def as_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "default_for_missing": self.default_for_missing,
            "builtin_fallback": self.builtin_fallback,
            "log_level": self.log_level,
        }


# Singleton used by binder modules
binder_settings: BinderSettings = BinderSettings.from_env(load_dotenv=False)
