"""Built-in fallback functions for placeholder chains.

When a chain names a function the binder has no registration for, the
binder looks it up in a fallback table before skipping it. This module
provides the default table. Every entry takes exactly one argument, the
working value, and converts it to text first with
:func:`~textbinder.binder.normalize.normalize_output`.

Example::

    binder = TextBinder()
    binder.render("{name.trim.ucfirst}", {"name": "  ada "})  # "Ada"
"""

from __future__ import annotations

import base64
import hashlib
import html
import json
import math
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Union
from urllib.parse import quote, quote_plus

from .normalize import is_structured, is_truthy, normalize_output, to_json

PlaceholderFunction = Callable[[Any], Any]

_FUNCTIONS: Dict[str, PlaceholderFunction] = {}

# Characters stripped by trim/ltrim/rtrim
_TRIM_CHARS = " \t\n\r\0\x0b"

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_TAG_PATTERN = re.compile(r"<[^>]*>")
_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


def _builtin(name: str) -> Callable[[PlaceholderFunction], PlaceholderFunction]:
    def decorator(func: PlaceholderFunction) -> PlaceholderFunction:
        _FUNCTIONS[name] = func
        return func
    return decorator


def _text(value: Any) -> str:
    return normalize_output(value)


def _parse_number(value: Any) -> Union[int, float]:
    """Read the leading number of a value, 0 when there is none."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None or is_structured(value):
        return int(is_truthy(value))

    match = _NUMBER_PREFIX.match(_text(value))
    if not match:
        return 0
    number = match.group(0).strip()
    if any(marker in number for marker in (".", "e", "E")):
        return float(number)
    try:
        return int(number)
    except ValueError:
        # digit runs past the int string conversion limit
        return float(number)


@_builtin("upper")
def upper(value: Any) -> str:
    return _text(value).upper()


@_builtin("lower")
def lower(value: Any) -> str:
    return _text(value).lower()


@_builtin("title")
def title(value: Any) -> str:
    return _text(value).title()


@_builtin("capitalize")
def capitalize(value: Any) -> str:
    return _text(value).capitalize()


@_builtin("ucfirst")
def ucfirst(value: Any) -> str:
    """Uppercase the first character, leave the rest alone."""
    text = _text(value)
    return text[:1].upper() + text[1:]


@_builtin("lcfirst")
def lcfirst(value: Any) -> str:
    text = _text(value)
    return text[:1].lower() + text[1:]


@_builtin("trim")
def trim(value: Any) -> str:
    return _text(value).strip(_TRIM_CHARS)


@_builtin("ltrim")
def ltrim(value: Any) -> str:
    return _text(value).lstrip(_TRIM_CHARS)


@_builtin("rtrim")
def rtrim(value: Any) -> str:
    return _text(value).rstrip(_TRIM_CHARS)


@_builtin("strlen")
def strlen(value: Any) -> int:
    """Number of characters in the text form of the value."""
    return len(_text(value))


@_builtin("strrev")
def strrev(value: Any) -> str:
    return _text(value)[::-1]


@_builtin("md5")
def md5(value: Any) -> str:
    return hashlib.md5(_text(value).encode("utf-8")).hexdigest()


@_builtin("sha1")
def sha1(value: Any) -> str:
    return hashlib.sha1(_text(value).encode("utf-8")).hexdigest()


@_builtin("htmlspecialchars")
def htmlspecialchars(value: Any) -> str:
    return html.escape(_text(value), quote=True)


@_builtin("urlencode")
def urlencode(value: Any) -> str:
    """Form encoding: spaces become ``+``."""
    return quote_plus(_text(value), safe="-_.")


@_builtin("rawurlencode")
def rawurlencode(value: Any) -> str:
    """RFC 3986 encoding: spaces become ``%20``."""
    return quote(_text(value), safe="-_.~")


@_builtin("base64_encode")
def base64_encode(value: Any) -> str:
    return base64.b64encode(_text(value).encode("utf-8")).decode("ascii")


@_builtin("nl2br")
def nl2br(value: Any) -> str:
    """Insert ``<br />`` before every line break."""
    return re.sub(r"(\r\n|\n\r|\n|\r)", r"<br />\1", _text(value))


@_builtin("strip_tags")
def strip_tags(value: Any) -> str:
    return _TAG_PATTERN.sub("", _text(value))


@_builtin("slug")
def slug(value: Any) -> str:
    """Lowercase ASCII slug, runs of other characters collapse to ``-``."""
    return _SLUG_PATTERN.sub("-", _text(value).lower()).strip("-")


@_builtin("json")
def json_encode(value: Any) -> str:
    """JSON for the raw value: strings come out quoted."""
    if is_structured(value):
        return to_json(value)
    return json.dumps(value, ensure_ascii=False, default=str)


@_builtin("intval")
def intval(value: Any) -> int:
    """Integer part of the value. Infinite and NaN results become 0."""
    number = _parse_number(value)
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return int(number)


@_builtin("floatval")
def floatval(value: Any) -> float:
    number = _parse_number(value)
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


@_builtin("abs")
def absolute(value: Any) -> Union[int, float]:
    return abs(_parse_number(value))


@_builtin("zeroone")
def zeroone(value: Any) -> int:
    return 1 if is_truthy(value) else 0


DEFAULT_FUNCTIONS: Mapping[str, PlaceholderFunction] = MappingProxyType(_FUNCTIONS)

__all__ = ["DEFAULT_FUNCTIONS", "PlaceholderFunction"]
