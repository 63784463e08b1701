"""Custom exception hierarchy for pysettings."""

from __future__ import annotations

from typing import Any


class SettingsError(Exception):
    """Base exception for all pysettings errors."""


class SettingsConfigError(SettingsError, ValueError):
    """Invalid parser configuration (e.g. an empty separator)."""


class SettingsSourceError(SettingsError, OSError):
    """The settings source could not be opened or read.

    Raised at construction time; no store is created.  The underlying
    ``OSError`` or ``UnicodeDecodeError`` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, source: str = "") -> None:
        self.source = source
        super().__init__(message)


class DuplicateKeyError(SettingsError, KeyError):
    """``add`` was called with a key that already exists."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key already exists in collection: {self.key!r}"


class KeyNotFoundError(SettingsError, KeyError):
    """Lookup of a key that is not in the store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"No setting with key {self.key!r}"


class TypeMismatchError(SettingsError, TypeError):
    """Typed lookup found a value of a different type."""

    def __init__(self, key: str, *, expected: Any, actual: Any) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"Setting {key!r} holds {actual}, not {expected}")


class SettingUnsetError(SettingsError, LookupError):
    """A :class:`~pysettings.models.setting.Setting` was read before any value was set."""


class UnsupportedValueError(SettingsError, TypeError):
    """Value is not one of float, int, bool or str."""
