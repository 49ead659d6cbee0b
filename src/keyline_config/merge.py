"""Merge engine: reconcile a value map with the lines already on disk."""

import logging
import os
import shutil
import tempfile
from collections.abc import Mapping
from pathlib import Path

from .codec import decode_line
from .codec import encode_line
from .codec import line_terminator
from .exceptions import ConfigFileError

logger = logging.getLogger(__name__)

NEWLINE = "\n"


def merge_lines(lines: list[str], values: Mapping[str, str]) -> list[str]:
    """Merge current values into existing file lines.

    Only key lines whose value changed are rewritten, keeping their original
    terminator. Comments, blank lines, malformed lines and keys absent from
    ``values`` stay byte-identical. For duplicate key lines the first one is
    reconciled and the rest are left alone. Keys with no line are appended in
    mapping order.

    Args:
        lines: Existing lines, terminators included
        values: Current key -> raw value mapping

    Returns:
        New list of lines, terminators included
    """
    merged: list[str] = []
    matched: set[str] = set()

    for line in lines:
        pair = decode_line(line)
        if pair is None:
            merged.append(line)
            continue

        key, old_value = pair
        if key not in values or key in matched:
            merged.append(line)
            continue

        matched.add(key)
        new_value = values[key]
        if new_value == old_value:
            merged.append(line)
        else:
            merged.append(encode_line(key, new_value) + line_terminator(line))

    appended = [key for key in values if key not in matched]
    if appended:
        if merged and not line_terminator(merged[-1]):
            merged[-1] += NEWLINE
        merged.extend(encode_line(key, values[key]) + NEWLINE for key in appended)
        logger.debug(f"Appending {len(appended)} new key(s): {', '.join(appended)}")

    return merged


def render_lines(values: Mapping[str, str]) -> list[str]:
    """Render every entry as one line, in mapping order."""
    return [encode_line(key, value) + NEWLINE for key, value in values.items()]


def read_lines(path: Path) -> list[str]:
    """Read a config file as lines with terminators.

    Raises:
        ConfigFileError: If the file cannot be read or is not UTF-8
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Failed to read configuration from {path}: {e}") from e


def write_lines(path: Path, lines: list[str]) -> None:
    """Replace a config file's contents.

    Writes to a temporary file in the same directory, then renames it over the
    target so readers never see a partial file.

    Raises:
        ConfigFileError: If write fails or the text cannot be encoded as UTF-8
    """
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.writelines(lines)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, UnicodeError) as e:
        raise ConfigFileError(f"Failed to write configuration to {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


def merge_file(path: Path, values: Mapping[str, str], *, fallback_to_rewrite: bool = False) -> None:
    """Merge values into the file at ``path``.

    A missing file is created with one line per entry.

    Args:
        path: Target configuration file
        values: Current key -> raw value mapping
        fallback_to_rewrite: Rewrite the file from scratch if it cannot be read

    Raises:
        ConfigFileError: If the file cannot be read (and no fallback) or written
    """
    if not path.exists():
        write_lines(path, render_lines(values))
        return

    try:
        lines = read_lines(path)
    except ConfigFileError as e:
        if not fallback_to_rewrite:
            raise
        logger.warning(f"{e}; rewriting {path} from memory")
        write_lines(path, render_lines(values))
        return

    merged = merge_lines(lines, values)
    if merged == lines:
        logger.debug(f"No changes to write to {path}")
        return
    write_lines(path, merged)
