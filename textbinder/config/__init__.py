"""Configuration for textbinder.

Settings are frozen dataclasses read from environment variables, optionally
after loading ``.env`` files::

    from textbinder.config import BinderSettings, binder_settings
    settings = BinderSettings.from_env(default_for_missing=False)
"""

from .base_settings import BaseSettings, EnvParser, SettingsError
from .binder_settings import BinderSettings, binder_settings

__all__ = [
    "BaseSettings",
    "EnvParser",
    "SettingsError",
    "BinderSettings",
    "binder_settings",
]
