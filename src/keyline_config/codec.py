"""Line codec for ``key: value`` configuration files.

A line is one of:
- a comment: first non-blank characters are ``#``, ``//`` or ``;``
- a key line: ``<key>: <value>`` split on the first delimiter, key non-empty
- anything else (blank, no delimiter): ignored, but kept verbatim on save
"""

from collections.abc import Iterable

from .exceptions import ConfigValidationError

DELIMITER = ": "
COMMENT_PREFIXES = ("#", "//", ";")
LINE_BREAKS = ("\n", "\r")


def strip_terminator(line: str) -> str:
    """Remove a trailing ``\\n`` or ``\\r\\n`` from a line."""
    return line.rstrip("\r\n")


def line_terminator(line: str) -> str:
    """Return the line's terminator (``\\r\\n``, ``\\n`` or empty)."""
    return line[len(strip_terminator(line)) :]


def is_comment(line: str) -> bool:
    """Check if a line is a comment."""
    return line.lstrip().startswith(COMMENT_PREFIXES)


def decode_line(line: str) -> tuple[str, str] | None:
    """Decode one line into a key/value pair.

    Args:
        line: Raw line, with or without its terminator

    Returns:
        (key, value) for a key line, None for comments and malformed lines
    """
    text = strip_terminator(line)
    if is_comment(text):
        return None

    key, sep, value = text.partition(DELIMITER)
    if not sep or not key:
        return None
    return key, value


def decode_lines(lines: Iterable[str]) -> dict[str, str]:
    """Decode lines into an ordered mapping.

    Later duplicates overwrite earlier values; the key keeps the position of
    its first occurrence.
    """
    values: dict[str, str] = {}
    for line in lines:
        pair = decode_line(line)
        if pair is not None:
            values[pair[0]] = pair[1]
    return values


def encode_line(key: str, value: str) -> str:
    """Encode a pair as a line, without terminator."""
    return f"{key}{DELIMITER}{value}"


def validate_entry(key: str, value: str) -> None:
    """Check that a pair survives an encode/decode round trip.

    Raises:
        ConfigValidationError: If the key or value cannot be stored
    """
    if not key:
        raise ConfigValidationError("Configuration key must not be empty")
    if DELIMITER in key:
        raise ConfigValidationError(f"Configuration key {key!r} must not contain {DELIMITER!r}")
    if any(ch in key for ch in LINE_BREAKS):
        raise ConfigValidationError(f"Configuration key {key!r} must not contain line breaks")
    if key != key.lstrip():
        raise ConfigValidationError(f"Configuration key {key!r} must not start with whitespace")
    if is_comment(key):
        raise ConfigValidationError(f"Configuration key {key!r} must not start with a comment marker")
    if any(ch in value for ch in LINE_BREAKS):
        raise ConfigValidationError(f"Value for {key!r} must not contain line breaks")
