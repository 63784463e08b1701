"""Value models for pysettings."""

from pysettings.models.setting import Setting, SettingType, SettingValue

__all__ = [
    "Setting",
    "SettingType",
    "SettingValue",
]
