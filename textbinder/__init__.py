"""textbinder - placeholder text rendering with function chains.

Convenience imports for the ``textbinder`` package::

    from textbinder import TextBinder
    binder = TextBinder()
    binder.render("Hello {name.ucfirst}!", {"name": "world"})  # "Hello World!"

The package re-exports only the primary API to keep the public surface
small and predictable.
"""

from .tracing.logger import get_module_logger, setup_logging
from .exceptions import ConfigurationError, InvalidFunctionError, TextBinderError
from .config.binder_settings import BinderSettings, binder_settings
from .binder import DEFAULT_FUNCTIONS, TextBinder, normalize_output

__version__ = "0.1.0"

__all__ = [
    "TextBinder",
    "DEFAULT_FUNCTIONS",
    "normalize_output",
    "BinderSettings",
    "binder_settings",
    "TextBinderError",
    "InvalidFunctionError",
    "ConfigurationError",
    "get_module_logger",
    "setup_logging",
]
