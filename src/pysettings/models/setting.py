"""Single typed setting value.

A :class:`Setting` holds exactly one scalar of one of four variants,
tracked by an explicit :class:`SettingType` tag:

* ``FLOAT``   → :class:`float`
* ``INTEGER`` → :class:`int`
* ``BOOLEAN`` → :class:`bool`
* ``STRING``  → :class:`str`

``bool`` is its own variant even though Python treats it as an ``int``
subclass, so ``Setting(True)`` and ``Setting(1)`` never compare equal.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pysettings.exceptions import SettingUnsetError, UnsupportedValueError

SettingValue = bool | int | float | str
"""Union of the scalar types a setting may hold."""


class SettingType(StrEnum):
    FLOAT = "float"
    INTEGER = "int"
    BOOLEAN = "bool"
    STRING = "str"

    @property
    def python_type(self) -> type:
        """The Python type stored under this tag."""
        return _PYTHON_TYPES[self]

    @classmethod
    def of(cls, value: Any) -> SettingType:
        """Return the tag for *value*.

        Raises
        ------
        UnsupportedValueError
            If *value* is not a float, int, bool or str.
        """
        # Exact type lookup: bool must not resolve to INTEGER.
        tag = _TAGS.get(type(value))
        if tag is None:
            raise UnsupportedValueError(
                f"Unsupported setting value {value!r} of type {type(value).__name__}"
            )
        return tag


_PYTHON_TYPES: dict[SettingType, type] = {
    SettingType.FLOAT: float,
    SettingType.INTEGER: int,
    SettingType.BOOLEAN: bool,
    SettingType.STRING: str,
}
_TAGS: dict[type, SettingType] = {py_type: tag for tag, py_type in _PYTHON_TYPES.items()}

_UNSET: Any = object()


class Setting:
    """A named value holder whose type is fixed by the value it stores.

    Parameters
    ----------
    value : float, int, bool or str, optional
        Initial value.  When omitted the setting is *unset* and
        :meth:`get` raises :class:`SettingUnsetError` until :meth:`set`
        is called.
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, value: SettingValue = _UNSET) -> None:
        self._kind: SettingType | None = None
        self._value: Any = None
        if value is not _UNSET:
            self.set(value)

    @property
    def kind(self) -> SettingType | None:
        """Variant tag of the stored value, ``None`` while unset."""
        return self._kind

    @property
    def is_set(self) -> bool:
        return self._kind is not None

    def get(self) -> SettingValue:
        """Return the stored value."""
        if self._kind is None:
            raise SettingUnsetError("Setting has no value")
        return self._value  # type: ignore[no-any-return]

    def set(self, value: SettingValue) -> None:
        """Replace the stored value; the tag follows the new value."""
        self._kind = SettingType.of(value)
        self._value = value

    @property
    def value(self) -> SettingValue:
        return self.get()

    @value.setter
    def value(self, value: SettingValue) -> None:
        self.set(value)

    def copy(self) -> Setting:
        clone = Setting()
        clone._kind = self._kind
        clone._value = self._value
        return clone

    def describe(self) -> str:
        """Human-readable ``"<type-name>: <value>"`` form."""
        if self._kind is None:
            return "unset"
        return f"{self._kind.value}: {self._value}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        if self._kind is None:
            return "Setting()"
        return f"Setting({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Setting):
            return NotImplemented
        if self._kind != other._kind:
            return False
        if self._kind is SettingType.FLOAT and math.isnan(self._value):
            return math.isnan(other._value)
        return bool(self._value == other._value)

    __hash__ = None  # type: ignore[assignment]
