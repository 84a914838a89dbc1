import os
import tomllib
from pathlib import Path
from typing import Any

from ..errors import ConfigError
from ..utils.processor import DEFAULT_HASH_ALGORITHM

# Name of the settings file looked up in the scan root. Being hidden, it is never
# scanned itself under the default filter.
SETTINGS_FILE_NAME = '.treedup.toml'

# Environment variable naming a settings file to use when none is given explicitly
SETTINGS_ENVIRONMENT_VARIABLE = 'TREEDUP_CONFIG'

SETTING_EXCLUDE = 'scan.exclude'
SETTING_INCLUDE = 'scan.include'
SETTING_INCLUDE_HIDDEN = 'scan.include_hidden'
SETTING_HASH_ALGORITHM = 'scan.hash_algorithm'
SETTING_CONCURRENCY = 'scan.concurrency'
SETTING_LOG_PATH = 'logging.path'
SETTING_LOG_LEVEL = 'logging.level'

_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ScanSettings:
    """Read-only settings loaded from a TOML file.

    Provides dotted-key access to the raw TOML data (e.g. 'scan.exclude' reads
    data['scan']['exclude']) plus typed accessors that validate the keys treedup
    understands. An instance created without data behaves as an empty file: every
    accessor returns its default.

    Example:
        settings = ScanSettings.discover(Path('/photos'))
        patterns = settings.exclude_patterns
    """

    def __init__(self, data: dict[str, Any] | None = None, source: Path | None = None):
        self._settings: dict[str, Any] = data or {}
        self.source = source

    @classmethod
    def load(cls, path: str | os.PathLike) -> 'ScanSettings':
        """Load settings from an explicit file.

        Raises:
            ConfigError: The file cannot be read or is not valid TOML
        """
        path = Path(path)
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"cannot read settings file {path}: {e.strerror or e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"invalid settings file {path}: {e}") from e

        return cls(data, path)

    @classmethod
    def discover(cls, root: str | os.PathLike) -> 'ScanSettings':
        """Load settings from $TREEDUP_CONFIG, else from the root's settings file if present."""
        configured = os.environ.get(SETTINGS_ENVIRONMENT_VARIABLE)
        if configured:
            return cls.load(configured)

        candidate = Path(root) / SETTINGS_FILE_NAME
        if candidate.is_file():
            return cls.load(candidate)

        return cls()

    def get(self, key: str, default=None):
        """Get a setting by dotted key path, or default if any part is missing."""
        value = self._settings

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def exclude_patterns(self) -> list[str]:
        return self._get_string_list(SETTING_EXCLUDE)

    @property
    def include_patterns(self) -> list[str]:
        return self._get_string_list(SETTING_INCLUDE)

    @property
    def include_hidden(self) -> bool:
        value = self.get(SETTING_INCLUDE_HIDDEN, False)
        if not isinstance(value, bool):
            raise self._type_error(SETTING_INCLUDE_HIDDEN, "a boolean", value)
        return value

    @property
    def hash_algorithm(self) -> str:
        value = self.get(SETTING_HASH_ALGORITHM, DEFAULT_HASH_ALGORITHM)
        if not isinstance(value, str):
            raise self._type_error(SETTING_HASH_ALGORITHM, "a string", value)
        return value

    @property
    def concurrency(self) -> int | None:
        value = self.get(SETTING_CONCURRENCY)
        if value is None:
            return None
        # bool is a subclass of int
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise self._type_error(SETTING_CONCURRENCY, "a positive integer", value)
        return value

    @property
    def log_path(self) -> str | None:
        value = self.get(SETTING_LOG_PATH)
        if value is not None and not isinstance(value, str):
            raise self._type_error(SETTING_LOG_PATH, "a string", value)
        return value

    @property
    def log_level(self) -> str | None:
        value = self.get(SETTING_LOG_LEVEL)
        if value is None:
            return None
        if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
            raise self._type_error(SETTING_LOG_LEVEL, f"one of {', '.join(_LOG_LEVELS)}", value)
        return value.upper()

    def _get_string_list(self, key: str) -> list[str]:
        value = self.get(key, [])
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise self._type_error(key, "a list of strings", value)
        return list(value)

    def _type_error(self, key: str, expected: str, value) -> ConfigError:
        where = f" in {self.source}" if self.source is not None else ""
        return ConfigError(f"setting {key}{where} must be {expected}, got {value!r}")
