"""Lightweight text binding engine with function chaining.

Placeholders look like ``{name}`` or ``{name.func1.func2}``. The variable is
looked up in the bindings passed to :meth:`TextBinder.render` and the
functions are applied left to right, each result normalized to text before
the next one runs::

    binder = TextBinder()
    binder.add_func("shout", lambda value: f"{value}!")
    binder.render("Hello {name.upper.shout}", {"name": "world"})
    # "Hello WORLD!"

Functions are resolved against the instance registry first and the
fallback table second. Names found in neither are skipped.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Mapping, Optional

from ..config.binder_settings import binder_settings
from ..exceptions import InvalidFunctionError
from ..tracing.logger import get_module_logger
from .builtins import DEFAULT_FUNCTIONS
from .normalize import is_empty, is_truthy, normalize_output

logger = get_module_logger()

# {name} or {name.func1.func2}, optional inner whitespace
PLACEHOLDER_PATTERN = re.compile(r"\{\s*([a-zA-Z0-9_-]+(?:\.[^.\s}]+)*)\s*}")


def _exists(value: Any) -> str:
    return "0" if is_empty(value) else "1"


def _ok(value: Any) -> str:
    return "1" if is_truthy(value) else "0"


class TextBinder:
    """Render text by binding variables into placeholders.

    Args:
        fallback_functions: Functions consulted when a chain name is not
            registered on the instance. ``None`` selects the built-in table
            (or nothing when ``TEXTBINDER_BUILTIN_FALLBACK`` is disabled).
            The mapping is copied.

    Instances are not thread-safe; use one binder per thread or serialize
    access when functions are added or removed concurrently.
    """

    def __init__(self, fallback_functions: Optional[Mapping[str, Callable[[Any], Any]]] = None):
        if fallback_functions is None:
            fallback_functions = DEFAULT_FUNCTIONS if binder_settings.builtin_fallback else {}
        self._fallback: Dict[str, Callable[[Any], Any]] = dict(fallback_functions)
        self._functions: Dict[str, Callable[[Any], Any]] = {}
        self._define_functions()

    def _define_functions(self) -> None:
        """Install the built-in placeholder functions."""
        self._functions.setdefault("exists", _exists)
        self._functions.setdefault("ok", _ok)

    def add_func(self, name: str, func: Callable[[Any], Any]) -> None:
        """Register a function, replacing any existing one with that name.

        Raises:
            InvalidFunctionError: If ``name`` is empty or ``func`` is not callable.
        """
        if not isinstance(name, str) or not name:
            raise InvalidFunctionError("Function name must be a non-empty string.", name=name)
        if not callable(func):
            raise InvalidFunctionError(f"Function '{name}' must be callable.", name=name)
        self._functions[name] = func

    def has_func(self, name: str) -> bool:
        """Check whether ``name`` is registered on this binder."""
        return name in self._functions

    def del_func(self, name: str) -> bool:
        """Remove a registered function.

        Returns:
            True if the function was removed, False if it was not registered.
        """
        if name in self._functions:
            del self._functions[name]
            return True
        return False

    def _resolve(self, name: str) -> Optional[Callable[[Any], Any]]:
        func = self._functions.get(name)
        if func is None:
            func = self._fallback.get(name)
        return func

    def render(self, text: str, variables: Mapping[str, Any], default: Optional[bool] = None) -> str:
        """Replace placeholders in ``text`` with bound, transformed values.

        Args:
            text: Input text.
            variables: Variable bindings. When empty, ``text`` is returned untouched.
            default: Substitute ``""`` for unknown variables (True) or leave
                their placeholders verbatim (False). ``None`` uses
                ``binder_settings.default_for_missing``.

        Returns:
            The rendered text. Substituted values are not scanned again.
        """
        if not variables:
            return text

        if default is None:
            default = binder_settings.default_for_missing

        def replace(match: re.Match) -> str:
            key, *chain = match.group(1).split(".")

            if key in variables:
                value = variables[key]
            elif default:
                value = ""
            else:
                logger.debug("Variable '%s' not bound, keeping %s", key, match.group(0))
                return match.group(0)

            for name in chain:
                func = self._resolve(name)
                if func is None:
                    logger.debug("Unknown function '%s' in %s, skipped", name, match.group(0))
                    continue
                value = normalize_output(func(value))

            return value if isinstance(value, str) else normalize_output(value)

        return PLACEHOLDER_PATTERN.sub(replace, text)
