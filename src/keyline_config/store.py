"""File-backed typed key-value configuration store."""

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from typing import TypeVar

from .codec import decode_lines
from .codec import validate_entry
from .exceptions import ConfigFileError
from .merge import merge_file
from .merge import read_lines
from .merge import render_lines
from .merge import write_lines
from .models import CONFIG_SUFFIX
from .models import DEFAULT_CONFIG_DIR
from .models import ConfigEntry
from .models import SaveMode
from .utils import ParseError
from .utils import format_value
from .utils import join_array
from .utils import parse_bool
from .utils import parse_float
from .utils import parse_int
from .utils import parse_str
from .utils import split_array

logger = logging.getLogger(__name__)

T = TypeVar("T")

Reporter = Callable[[str], None]


class ConfigStore:
    """Typed settings backed by a ``key: value`` file.

    Values are kept as raw strings and interpreted on read. Reads never
    raise on bad data: a value that does not parse falls back to the type's
    zero value or to the caller's default.

    Reading with a default has a side effect. If the key is missing, the
    default is written into the store so the next ``save()`` persists it.
    A present but unparseable value is left as is.

    Saving merges into the existing file: only changed lines are rewritten,
    new keys are appended, and everything else (comments, blank lines,
    unknown content) stays byte-identical.

    Not thread-safe; callers sharing a store must serialize access.

    Args:
        path: Backing file, or None for an in-memory store that never persists
        reporter: Receives human-readable diagnostics (default: logs a warning)
    """

    def __init__(self, path: Path | str | None = None, *, reporter: Reporter | None = None):
        self.path = Path(path) if path is not None else None
        self._report = reporter or logger.warning
        self._values: dict[str, str] = {}

        if self.path is not None:
            self._ensure_file(self.path)
            self._load(self.path)

    @classmethod
    def for_name(
        cls, name: str, directory: Path | str = DEFAULT_CONFIG_DIR, *, reporter: Reporter | None = None
    ) -> "ConfigStore":
        """Open the store for a named configuration at ``<directory>/<name>.cfg``.

        Args:
            name: Configuration name
            directory: Directory holding named configurations (default: etc/configs)
            reporter: Diagnostic sink passed to the store
        """
        return cls(Path(directory) / f"{name}{CONFIG_SUFFIX}", reporter=reporter)

    # ===== Scalar Accessors =====

    def get_bool(self, key: str, default: bool | None = None) -> bool:
        """Get a boolean (true/false, yes/no, on/off). Zero value: False."""
        return self._get_scalar(key, parse_bool, False, default)

    def get_int(self, key: str, default: int | None = None) -> int:
        """Get an integer. Zero value: 0."""
        return self._get_scalar(key, parse_int, 0, default)

    def get_float(self, key: str, default: float | None = None) -> float:
        """Get a floating-point number. Zero value: 0.0."""
        return self._get_scalar(key, parse_float, 0.0, default)

    def get_str(self, key: str, default: str | None = None) -> str:
        """Get the raw string value. Zero value: empty string."""
        return self._get_scalar(key, parse_str, "", default)

    def get_raw(self, key: str) -> str | None:
        """Get the stored string without defaults or side effects."""
        return self._values.get(key)

    # ===== Array Accessors =====

    def get_bool_list(self, key: str, default: list[bool] | None = None) -> list[bool]:
        """Get an array of booleans. Zero value: empty list."""
        return self._get_list(key, parse_bool, default)

    def get_int_list(self, key: str, default: list[int] | None = None) -> list[int]:
        """Get an array of integers. Zero value: empty list."""
        return self._get_list(key, parse_int, default)

    def get_float_list(self, key: str, default: list[float] | None = None) -> list[float]:
        """Get an array of floating-point numbers. Zero value: empty list."""
        return self._get_list(key, parse_float, default)

    def get_str_list(self, key: str, default: list[str] | None = None) -> list[str]:
        """Get an array of strings. Zero value: empty list."""
        return self._get_list(key, parse_str, default)

    # ===== Mutation and Lookup =====

    def set(self, key: str, value: Any) -> None:
        """Set a value, overwriting any previous one.

        Booleans are stored as ``true``/``false``, other values via ``str()``.

        Raises:
            ConfigValidationError: If the key or value cannot be stored on one line
        """
        self._put(key, format_value(value))

    def set_list(self, key: str, values: Iterable[Any]) -> None:
        """Set an array value, stored as a comma-separated line.

        Raises:
            ConfigValidationError: If an element contains a comma, has
                surrounding whitespace, or is the array's only element and empty
        """
        self._put(key, join_array(values))

    def has(self, key: str) -> bool:
        """Check if a key is present. Never changes the store."""
        return key in self._values

    def keys(self) -> Iterator[str]:
        """Iterate over keys in insertion order."""
        return iter(list(self._values))

    def entries(self) -> list[ConfigEntry]:
        """Get a snapshot of all settings as ConfigEntry objects, in insertion order."""
        return [ConfigEntry(key, value) for key, value in self._values.items()]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __len__(self) -> int:
        return len(self._values)

    # ===== Persistence =====

    def save(self, mode: SaveMode = SaveMode.MERGE) -> bool:
        """Persist the store to its file.

        Args:
            mode: MERGE (default) rewrites only changed lines and appends new
                keys. FORCE does the same but rewrites the whole file if it
                cannot be read. REWRITE always replaces the file, dropping
                comments and ordering.

        Returns:
            True on success (or when there is no backing file), False if the
            file could not be read or written. Failures go to the reporter.
        """
        if self.path is None:
            return True

        try:
            if mode is SaveMode.REWRITE:
                write_lines(self.path, render_lines(self._values))
            else:
                merge_file(self.path, self._values, fallback_to_rewrite=mode is SaveMode.FORCE)
        except ConfigFileError as e:
            self._report(f"Could not save configuration '{self.path}': {e}")
            return False

        logger.info(f"Saved {len(self._values)} setting(s) to {self.path} ({mode.value})")
        return True

    def reload(self) -> bool:
        """Discard in-memory changes and re-read the backing file.

        Returns:
            True if the file was read (or there is nothing to read), False on I/O failure
        """
        self._values.clear()
        if self.path is None:
            return True
        return self._load(self.path)

    # ===== Private Helpers =====

    def _put(self, key: str, raw: str) -> None:
        """Store a raw value after checking it fits on one line.

        Args:
            key: Setting name
            raw: Already formatted string value

        Raises:
            ConfigValidationError: If the pair cannot be stored
        """
        validate_entry(key, raw)
        self._values[key] = raw

    def _get_scalar(self, key: str, parse: Callable[[str], T], zero: T, default: T | None) -> T:
        """Read a typed scalar with zero-value and default-write semantics.

        Args:
            key: Setting name
            parse: Converts the raw string, raising ParseError on bad input
            zero: Returned when there is no default
            default: Written and returned for a missing key; returned for a bad value

        Returns:
            Parsed value, the default, or the zero value
        """
        raw = self._values.get(key)
        if raw is None:
            if default is None:
                return zero
            self._put(key, format_value(default))
            return default

        try:
            return parse(raw)
        except ParseError:
            return zero if default is None else default

    def _get_list(self, key: str, parse: Callable[[str], T], default: list[T] | None) -> list[T]:
        """Read a typed array with zero-value and default-write semantics.

        One bad element makes the whole array unparseable; the reporter is
        told which element failed.

        Args:
            key: Setting name
            parse: Converts one element, raising ParseError on bad input
            default: Written and returned for a missing key; returned for a bad value

        Returns:
            A new list: parsed elements, a copy of the default, or empty
        """
        raw = self._values.get(key)
        if raw is None:
            if default is None:
                return []
            self._put(key, join_array(default))
            return list(default)

        try:
            return [parse(element) for element in split_array(raw)]
        except ParseError as e:
            self._report(f"Could not read array '{key}': {e}")
            return [] if default is None else list(default)

    def _ensure_file(self, path: Path) -> None:
        """Create the backing file and its parent directories if missing.

        Args:
            path: Backing file
        """
        if path.exists():
            return
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            self._report(f"Could not create configuration file '{path}': {e}")

    def _load(self, path: Path) -> bool:
        """Replace the in-memory values with the file's contents.

        Args:
            path: Backing file

        Returns:
            True if loaded (a missing file counts as empty), False on read failure
        """
        if not path.exists():
            return True

        try:
            lines = read_lines(path)
        except ConfigFileError as e:
            self._report(f"Could not load configuration: {e}")
            return False

        self._values = decode_lines(lines)
        logger.debug(f"Loaded {len(self._values)} setting(s) from {path}")
        return True
