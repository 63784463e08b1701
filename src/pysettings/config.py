"""Parser configuration for pysettings."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pysettings.exceptions import SettingsConfigError

DEFAULT_SEPARATOR = ":"
DEFAULT_COMMENT_PREFIX = "//"
DEFAULT_ENCODING = "utf-8-sig"


class ParserConfig(BaseModel):
    """How a settings source is split into entries.

    Parameters
    ----------
    separator : str
        Literal token dividing key from value.  Only the first
        occurrence on a line is significant.
    comment_prefix : str
        Lines starting with this marker are ignored.
    encoding : str
        Text encoding used when opening a settings file by path.  The
        default decodes UTF-8 and drops a leading byte-order mark.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    separator: str = Field(default=DEFAULT_SEPARATOR, description="Key/value separator")
    comment_prefix: str = Field(default=DEFAULT_COMMENT_PREFIX, description="Comment line marker")
    encoding: str = Field(default=DEFAULT_ENCODING, description="File encoding")

    @field_validator("separator", "comment_prefix")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value

    @classmethod
    def build(cls, **overrides: Any) -> ParserConfig:
        """Create a config, raising :class:`SettingsConfigError` on invalid input.

        ``None`` overrides are ignored so callers can forward optional
        arguments untouched.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as exc:
            raise SettingsConfigError(str(exc)) from exc


def resolve_config(separator: str | None, config: ParserConfig | None) -> ParserConfig:
    """Merge an explicit *separator* argument into *config*.

    The separator argument wins over ``config.separator`` when both are given.
    """
    if config is None:
        return ParserConfig.build(separator=separator)
    if separator is None or separator == config.separator:
        return config
    return ParserConfig.build(**{**config.model_dump(), "separator": separator})
