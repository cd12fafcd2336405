"""Placeholder text binding.

    from textbinder.binder import TextBinder, DEFAULT_FUNCTIONS
"""

from .builtins import DEFAULT_FUNCTIONS, PlaceholderFunction
from .normalize import is_empty, is_truthy, normalize_output
from .text_binder import PLACEHOLDER_PATTERN, TextBinder

__all__ = [
    "TextBinder",
    "PLACEHOLDER_PATTERN",
    "DEFAULT_FUNCTIONS",
    "PlaceholderFunction",
    "normalize_output",
    "is_empty",
    "is_truthy",
]
