#!/usr/bin/env python3
"""Dump the settings pysettings parses from a file.

Prints every entry with its inferred type so you can check how a
settings file is interpreted.

Usage
-----
::

    python scripts/dump_settings.py path/to/settings.txt

Options::

    --separator SEP      Key/value separator (default ":")
    --json               Output as machine-readable JSON
    --verbose, -v        Enable debug logging (shows skipped lines)
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysettings import SettingsError, SettingsStore  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _json_value(value: Any) -> Any:
    """Spell non-finite floats the way settings files do; JSON has no NaN or Infinity."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    return value


def _as_json(store: SettingsStore) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, setting in sorted(store.to_dict().items()):
        result[key] = {"type": str(setting.kind), "value": _json_value(setting.get())}
    return result


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Show how pysettings parses a settings file.",
    )
    parser.add_argument("path", help="Settings file to parse")
    parser.add_argument("--separator", default=None, help='Key/value separator (default ":")')
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        store = SettingsStore.from_path(args.path, args.separator)
    except SettingsError as exc:
        print(f"!! {exc}", file=sys.stderr)
        return 1

    if args.json_mode:
        print(json.dumps(_as_json(store), indent=2, ensure_ascii=False, allow_nan=False))
        return 0

    out: list[str] = [_section(f"{args.path}  ({store.size()} settings)")]
    for key, setting in sorted(store.to_dict().items()):
        out.append(f"  {key}: {setting.describe()}")
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
