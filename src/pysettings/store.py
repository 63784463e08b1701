"""Key → Setting store built from a line-oriented settings file.

A settings file holds one entry per line::

    // comment lines and blank lines are ignored
    port: 8080
    ratio: 0.75
    verbose: t
    name: example

Every entry's value is type-inferred (see :mod:`pysettings.parsing`).
When a key repeats within a file the last line wins.  Programmatic
:meth:`SettingsStore.add` is stricter and rejects existing keys.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from typing import IO, Any, TypeVar, overload

from pysettings.config import ParserConfig, resolve_config
from pysettings.exceptions import (
    DuplicateKeyError,
    KeyNotFoundError,
    SettingsSourceError,
    TypeMismatchError,
    UnsupportedValueError,
)
from pysettings.models.setting import Setting, SettingType, SettingValue
from pysettings.parsing import parse_lines

_logger = logging.getLogger(__name__)

T = TypeVar("T", bool, int, float, str)


class SettingsStore:
    """Unordered mapping from key to :class:`Setting`.

    The store owns its settings: anything passed in is copied and
    anything handed out (:meth:`get_setting`, :meth:`to_dict`) is a copy.

    Parameters
    ----------
    settings : Mapping[str, Setting], optional
        Pre-built entries to copy into the new store.
    """

    def __init__(self, settings: Mapping[str, Setting] | None = None) -> None:
        self._settings: dict[str, Setting] = {}
        if settings:
            self._settings = {key: setting.copy() for key, setting in settings.items()}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Setting]) -> SettingsStore:
        return cls(settings)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        separator: str | None = None,
        *,
        config: ParserConfig | None = None,
    ) -> SettingsStore:
        """Parse an iterable of text lines.  Nothing is closed."""
        store = cls()
        store._load(lines, resolve_config(separator, config))
        return store

    @classmethod
    def from_stream(
        cls,
        stream: IO[str],
        separator: str | None = None,
        *,
        config: ParserConfig | None = None,
    ) -> SettingsStore:
        """Parse an open text stream, closing it when done or on failure."""
        source = str(getattr(stream, "name", "<stream>"))
        store = cls()
        with stream:
            cfg = resolve_config(separator, config)
            try:
                store._load(stream, cfg)
            except (OSError, UnicodeDecodeError) as exc:
                raise SettingsSourceError(f"Failed to read settings from {source}: {exc}", source=source) from exc
        return store

    @classmethod
    def from_path(
        cls,
        path: str | os.PathLike[str],
        separator: str | None = None,
        *,
        config: ParserConfig | None = None,
    ) -> SettingsStore:
        """Read and parse the settings file at *path*.

        Raises
        ------
        SettingsSourceError
            If the file is missing, is a directory or cannot be read.
        """
        cfg = resolve_config(separator, config)
        source = os.fspath(path)
        try:
            stream = open(source, encoding=cfg.encoding)  # noqa: SIM115 - closed by from_stream
        except OSError as exc:
            raise SettingsSourceError(f"Cannot open settings file {source}: {exc}", source=source) from exc
        _logger.debug("Loading settings from %s", source)
        return cls.from_stream(stream, config=cfg)

    def _load(self, lines: Iterable[str], config: ParserConfig) -> None:
        loaded = 0
        for key, setting in parse_lines(lines, config):
            if key in self._settings:
                _logger.debug("Duplicate key %r overwritten by later line", key)
            self._settings[key] = setting
            loaded += 1
        _logger.debug("Parsed %d entries into %d settings", loaded, len(self._settings))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, key: str, setting: Setting) -> None:
        """Add *setting* under *key*.

        Raises
        ------
        DuplicateKeyError
            If *key* is already present; the store is left unchanged.
        """
        if key in self._settings:
            raise DuplicateKeyError(key)
        self._settings[key] = setting.copy()

    def remove(self, key: str) -> None:
        """Remove *key* if present; missing keys are ignored."""
        self._settings.pop(key, None)

    def clear(self) -> None:
        self._settings.clear()

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @overload
    def get(self, key: str) -> SettingValue: ...

    @overload
    def get(self, key: str, expected_type: type[T]) -> T: ...

    @overload
    def get(self, key: str, expected_type: SettingType) -> SettingValue: ...

    def get(self, key: str, expected_type: Any = None) -> Any:
        """Return the value stored under *key*.

        Parameters
        ----------
        key : str
            Setting key.
        expected_type : type or SettingType, optional
            When given, the stored value must be exactly this type
            (``bool`` does not satisfy ``int``, ``int`` does not
            satisfy ``float``).

        Raises
        ------
        KeyNotFoundError
            If *key* is not present.
        TypeMismatchError
            If *expected_type* does not match the stored value.
        SettingUnsetError
            If the setting under *key* holds no value.
        """
        setting = self._lookup(key)
        value = setting.get()
        if expected_type is None:
            return value
        expected = expected_type if isinstance(expected_type, SettingType) else _tag_for(expected_type)
        if setting.kind is not expected:
            raise TypeMismatchError(key, expected=expected, actual=setting.kind)
        return value

    def get_setting(self, key: str) -> Setting:
        """Return a copy of the :class:`Setting` stored under *key*."""
        return self._lookup(key).copy()

    def _lookup(self, key: str) -> Setting:
        try:
            return self._settings[key]
        except KeyError:
            raise KeyNotFoundError(key) from None

    def size(self) -> int:
        return len(self._settings)

    def to_dict(self) -> dict[str, Setting]:
        """Full mapping as an independent copy."""
        return {key: setting.copy() for key, setting in self._settings.items()}

    def describe(self) -> str:
        """``"key: <type>: value"`` for every entry, joined by ``", "``.

        Entries are ordered by key.  An empty store describes as ``""``.
        """
        return ", ".join(f"{key}: {self._settings[key].describe()}" for key in sorted(self._settings))

    # ------------------------------------------------------------------
    # Dunder protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._settings)

    def __contains__(self, key: object) -> bool:
        return key in self._settings

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._settings))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SettingsStore):
            return NotImplemented
        return self._settings == other._settings

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"SettingsStore({self.describe()!r})"


def _tag_for(expected_type: Any) -> SettingType:
    for tag in SettingType:
        if tag.python_type is expected_type:
            return tag
    raise UnsupportedValueError(f"Unsupported setting type: {expected_type!r}")
