"""Line splitting and value type inference.

Each non-comment line holding the separator becomes one entry::

    key <separator> value

The value is classified in a fixed order: a number that is whole
becomes an ``int``, any other number a ``float``; otherwise
``true``/``t``/``false``/``f`` (any case) become a ``bool`` and
everything else is kept as a stripped ``str``.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Iterator

from pysettings.config import ParserConfig
from pysettings.models.setting import Setting, SettingValue

_logger = logging.getLogger(__name__)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Padding trimmed around a number: ASCII control characters and space.
_NUMBER_PADDING = "".join(chr(code) for code in range(0x21))
_FLOAT_RE = re.compile(r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INT_RE = re.compile(r"[+-]?[0-9]+")

_TRUE_TOKENS = frozenset({"true", "t"})
_FALSE_TOKENS = frozenset({"false", "f"})


def split_line(line: str, config: ParserConfig | None = None) -> tuple[str, str] | None:
    """Split *line* into ``(key, raw_value)``.

    Returns ``None`` for lines that carry no entry: lines without the
    separator (blank lines included) and comment lines.  Only the first
    separator splits; later occurrences stay in the value.
    """
    cfg = config or ParserConfig()
    line = line.rstrip("\r\n")
    key, sep, value = line.partition(cfg.separator)
    if not sep:
        return None
    if line.startswith(cfg.comment_prefix):
        return None
    return key.strip(), value


def _parse_float(text: str) -> float | None:
    # ASCII only; float() alone would take "inf", "nan", "1_000" and non-ASCII digits.
    token = text.strip(_NUMBER_PADDING)
    if _FLOAT_RE.fullmatch(token) is None:
        return None
    return float(token)


def _parse_int(text: str) -> int | None:
    token = text.strip(_NUMBER_PADDING)
    if _INT_RE.fullmatch(token) is None:
        return None
    whole = int(token)
    if _INT64_MIN <= whole <= _INT64_MAX:
        return whole
    return None


def infer_value(raw: str) -> SettingValue:
    """Classify *raw* as int, float, bool or str."""
    whole = _parse_int(raw)
    if whole is not None:
        return whole

    number = _parse_float(raw)
    if number is not None:
        if math.isfinite(number) and number == math.floor(number):
            whole = round(number)
            if _INT64_MIN <= whole <= _INT64_MAX:
                return whole
        return number

    text = raw.strip()
    lowered = text.lower()
    if lowered in _TRUE_TOKENS:
        return True
    if lowered in _FALSE_TOKENS:
        return False
    return text


def parse_lines(lines: Iterable[str], config: ParserConfig | None = None) -> Iterator[tuple[str, Setting]]:
    """Yield ``(key, Setting)`` for every entry line in *lines*."""
    cfg = config or ParserConfig()
    for lineno, line in enumerate(lines, start=1):
        parts = split_line(line, cfg)
        if parts is None:
            _logger.debug("Skipping line %d (no entry)", lineno)
            continue
        key, raw = parts
        yield key, Setting(infer_value(raw))
