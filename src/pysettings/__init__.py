"""pysettings - Typed key/value settings loaded from line-oriented text files."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysettings")
except PackageNotFoundError:
    __version__ = "0+local"
from pysettings.config import ParserConfig
from pysettings.exceptions import (
    DuplicateKeyError,
    KeyNotFoundError,
    SettingsConfigError,
    SettingsError,
    SettingsSourceError,
    SettingUnsetError,
    TypeMismatchError,
    UnsupportedValueError,
)
from pysettings.models import Setting, SettingType, SettingValue
from pysettings.parsing import infer_value, parse_lines, split_line
from pysettings.store import SettingsStore

__all__ = [
    "__version__",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "ParserConfig",
    "Setting",
    "SettingType",
    "SettingUnsetError",
    "SettingValue",
    "SettingsConfigError",
    "SettingsError",
    "SettingsSourceError",
    "SettingsStore",
    "TypeMismatchError",
    "UnsupportedValueError",
    "infer_value",
    "parse_lines",
    "split_line",
]
