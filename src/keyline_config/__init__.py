"""keyline-config: File-backed typed key-value configuration.

Settings live in a plain text file of ``key: value`` lines. Lines starting
with ``#``, ``//`` or ``;`` are comments. Saving merges into the existing
file, so comments, blank lines and hand-written ordering survive.

Public API:
    ConfigStore: Typed accessors, default-on-read, save/reload
    ConfigEntry: A single key/value pair
    SaveMode: MERGE/FORCE/REWRITE save strategies
    ConfigError, ConfigFileError, ConfigValidationError: Exception types

Example:
    ```python
    from pathlib import Path
    from keyline_config import ConfigStore

    config = ConfigStore(Path("etc") / "configs" / "game.cfg")

    # Missing keys are filled in with the default on first read
    width = config.get_int("window.width", 1280)
    fullscreen = config.get_bool("window.fullscreen", False)

    config.set("player.name", "anna")
    if not config.save():
        ...  # reported through the store's reporter
    ```
"""

from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .models import ConfigEntry
from .models import SaveMode
from .store import ConfigStore

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "ConfigEntry",
    "SaveMode",
    "ConfigError",
    "ConfigFileError",
    "ConfigValidationError",
]
