"""Utility functions for keyline-config.

Values are stored as strings. These helpers turn them into typed scalars and
lists on read, and back into strings on write.
"""

from collections.abc import Iterable
from typing import Any

import yaml

from .exceptions import ConfigValidationError

ARRAY_SEPARATOR = ","
ARRAY_JOINER = ", "


class ParseError(ValueError):
    """Raw string does not represent the requested type."""


def _resolve_scalar(raw: str) -> Any:
    """Resolve a raw string the way a YAML reader would see it."""
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def parse_bool(raw: str) -> bool:
    """Parse a boolean.

    Accepts the YAML 1.1 spellings: true/false, yes/no, on/off in any case.

    Raises:
        ParseError: If the value is not a boolean
    """
    value = _resolve_scalar(raw.strip().lower())
    if isinstance(value, bool):
        return value
    raise ParseError(f"{raw!r} is not a boolean")


def parse_int(raw: str) -> int:
    """Parse a base-10 integer.

    Examples:
        >>> parse_int("42")
        42
        >>> parse_int(" -7 ")
        -7
    """
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ParseError(f"{raw!r} is not an integer") from e


def parse_float(raw: str) -> float:
    """Parse a floating-point number (anything ``float()`` accepts).

    Raises:
        ParseError: If the value is not a number
    """
    try:
        return float(raw.strip())
    except ValueError as e:
        raise ParseError(f"{raw!r} is not a number") from e


def parse_str(raw: str) -> str:
    """Return the raw value unchanged; strings never fail to parse."""
    return raw


def format_value(value: Any) -> str:
    """Format a scalar for storage.

    Booleans use the lowercase YAML spelling; everything else uses ``str()``.

    Examples:
        >>> format_value(True)
        'true'
        >>> format_value(2.5)
        '2.5'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def join_array(values: Iterable[Any]) -> str:
    """Join scalars into a single stored value.

    Elements must read back unchanged through ``split_array``, so an element
    may not contain the separator or surrounding whitespace, and a lone empty
    element is not allowed (it would read back as an empty array).

    Examples:
        >>> join_array([1, 2, 3])
        '1, 2, 3'
        >>> join_array([])
        ''

    Raises:
        ConfigValidationError: If an element would not survive the round trip
    """
    elements = [format_value(v) for v in values]
    for element in elements:
        if ARRAY_SEPARATOR in element:
            raise ConfigValidationError(f"Array element {element!r} must not contain {ARRAY_SEPARATOR!r}")
        if element != element.strip():
            raise ConfigValidationError(f"Array element {element!r} must not have surrounding whitespace")
    if elements == [""]:
        raise ConfigValidationError("Array with a single empty element cannot be stored")
    return ARRAY_JOINER.join(elements)


def split_array(raw: str) -> list[str]:
    """Split a stored array value into element strings.

    Accepts both ``a,b`` and ``a, b``. Elements are stripped of surrounding
    whitespace. An empty or blank value is an empty array.

    Examples:
        >>> split_array("a, b,c")
        ['a', 'b', 'c']
        >>> split_array("")
        []
    """
    if not raw.strip():
        return []
    return [part.strip() for part in raw.split(ARRAY_SEPARATOR)]
