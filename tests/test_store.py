"""Tests for SettingsStore construction, mutation and access."""

from __future__ import annotations

import io
from collections.abc import Iterator
from pathlib import Path

import pytest

from pysettings.config import ParserConfig
from pysettings.exceptions import (
    DuplicateKeyError,
    KeyNotFoundError,
    SettingsConfigError,
    SettingsError,
    SettingsSourceError,
    TypeMismatchError,
)
from pysettings.models.setting import Setting, SettingType
from pysettings.store import SettingsStore

SAMPLE = "one:50\ntwo:true\nTHREE:3TS\n"


def _write(tmp_path: Path, content: str, name: str = "settings.txt") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


class _FailingStream(io.StringIO):
    """Text stream that raises after yielding its first line."""

    def __iter__(self) -> Iterator[str]:
        yield "one:1\n"
        raise OSError("disk went away")


# ------------------------------------------------------------------
# Construction
# ------------------------------------------------------------------


class TestConstruction:
    def test_empty_store(self) -> None:
        store = SettingsStore()
        assert store.size() == 0
        assert len(store) == 0

    def test_from_path_scenario(self, tmp_path: Path) -> None:
        store = SettingsStore.from_path(_write(tmp_path, SAMPLE))

        assert store.size() == 3
        assert store.get("one") == 50
        assert type(store.get("one")) is int
        assert store.get("two") is True
        assert store.get("THREE") == "3TS"

    def test_blank_line_does_not_count(self, tmp_path: Path) -> None:
        store = SettingsStore.from_path(_write(tmp_path, "one:50\n\ntwo:true\n"))
        assert store.size() == 2

    def test_empty_file(self, tmp_path: Path) -> None:
        assert SettingsStore.from_path(_write(tmp_path, "")).size() == 0

    def test_comment_and_blank_only_file(self, tmp_path: Path) -> None:
        content = "// settings\n\n//key:value\n   \n"
        assert SettingsStore.from_path(_write(tmp_path, content)).size() == 0

    def test_duplicate_keys_last_line_wins(self, tmp_path: Path) -> None:
        store = SettingsStore.from_path(_write(tmp_path, "a:1\nb:2\na:three\n"))
        assert store.size() == 2
        assert store.get("a") == "three"

    def test_parsing_twice_gives_equal_stores(self, tmp_path: Path) -> None:
        path = _write(tmp_path, SAMPLE + "ratio:0.5\nlimit:Infinity\nmissing:NaN\n")
        assert SettingsStore.from_path(path) == SettingsStore.from_path(path)

    def test_from_path_custom_separator(self, tmp_path: Path) -> None:
        store = SettingsStore.from_path(_write(tmp_path, "host = example.com:80\nport = 80\n"), "=")
        assert store.get("host") == "example.com:80"
        assert store.get("port") == 80

    def test_value_with_separator_kept_whole(self) -> None:
        store = SettingsStore.from_lines(["url:http://example.com:8080/x"])
        assert store.get("url") == "http://example.com:8080/x"

    def test_large_integer_id_is_exact(self) -> None:
        store = SettingsStore.from_lines(["id:9007199254740993"])
        assert store.get("id", int) == 9007199254740993

    def test_byte_order_mark_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbfone:1\ntwo:2\n")
        store = SettingsStore.from_path(path)
        assert sorted(store) == ["one", "two"]

    def test_byte_order_mark_before_comment(self, tmp_path: Path) -> None:
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbf// note: header\none:1\n")
        store = SettingsStore.from_path(path)
        assert store.to_dict() == {"one": Setting(1)}

    def test_from_path_accepts_str(self, tmp_path: Path) -> None:
        store = SettingsStore.from_path(str(_write(tmp_path, SAMPLE)))
        assert store.size() == 3

    def test_missing_file_raises_source_error(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsSourceError) as exc_info:
            SettingsStore.from_path(tmp_path / "nope.txt")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.source.endswith("nope.txt")

    def test_directory_raises_source_error(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsSourceError):
            SettingsStore.from_path(tmp_path)

    def test_undecodable_file_raises_source_error(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.txt"
        path.write_bytes(b"name:caf\xe9\n")
        with pytest.raises(SettingsSourceError):
            SettingsStore.from_path(path)

    def test_encoding_from_config(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.txt"
        path.write_bytes(b"name:caf\xe9\n")
        store = SettingsStore.from_path(path, config=ParserConfig(encoding="latin-1"))
        assert store.get("name") == "café"

    def test_from_stream_closes_stream(self) -> None:
        stream = io.StringIO(SAMPLE)
        store = SettingsStore.from_stream(stream)
        assert store.size() == 3
        assert stream.closed

    def test_from_stream_closes_stream_on_failure(self) -> None:
        stream = _FailingStream()
        with pytest.raises(SettingsSourceError):
            SettingsStore.from_stream(stream)
        assert stream.closed

    def test_from_stream_closes_stream_on_bad_separator(self) -> None:
        stream = io.StringIO(SAMPLE)
        with pytest.raises(SettingsConfigError):
            SettingsStore.from_stream(stream, "")
        assert stream.closed

    def test_separator_argument_overrides_config(self) -> None:
        config = ParserConfig(separator=":", comment_prefix="#")
        store = SettingsStore.from_lines(["a=1", "#b=2"], "=", config=config)
        assert store.to_dict() == {"a": Setting(1)}

    def test_from_mapping_copies(self) -> None:
        source = {"a": Setting(1)}
        store = SettingsStore.from_mapping(source)
        source["a"].set(2)
        source["b"] = Setting(3)

        assert store.get("a") == 1
        assert "b" not in store

    def test_errors_share_root(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsError):
            SettingsStore.from_path(tmp_path / "missing")


# ------------------------------------------------------------------
# Mutation
# ------------------------------------------------------------------


class TestMutation:
    def test_add(self) -> None:
        store = SettingsStore()
        store.add("a", Setting(1.5))
        assert store.get("a") == 1.5

    def test_add_existing_key_rejected(self) -> None:
        store = SettingsStore.from_lines(["a:1"])
        with pytest.raises(DuplicateKeyError) as exc_info:
            store.add("a", Setting("other"))

        assert exc_info.value.key == "a"
        assert store.get("a") == 1
        assert store.size() == 1

    def test_add_copies_setting(self) -> None:
        setting = Setting("x")
        store = SettingsStore()
        store.add("a", setting)
        setting.set("y")
        assert store.get("a") == "x"

    def test_remove(self) -> None:
        store = SettingsStore.from_lines(SAMPLE.splitlines())
        store.remove("one")
        assert "one" not in store
        assert store.size() == 2

    def test_remove_absent_key_is_noop(self) -> None:
        store = SettingsStore.from_lines(SAMPLE.splitlines())
        before = store.to_dict()
        store.remove("missing")
        assert store.size() == 3
        assert store.to_dict() == before

    def test_clear(self) -> None:
        store = SettingsStore.from_lines(SAMPLE.splitlines())
        store.clear()
        assert store.size() == 0


# ------------------------------------------------------------------
# Access
# ------------------------------------------------------------------


class TestAccess:
    def test_get_missing_key_raises(self) -> None:
        store = SettingsStore()
        with pytest.raises(KeyNotFoundError):
            store.get("missing")
        with pytest.raises(KeyError):
            store.get("missing")

    def test_typed_get(self) -> None:
        store = SettingsStore.from_lines(["n:5", "r:0.5", "b:f", "s:text"])
        assert store.get("n", int) == 5
        assert store.get("r", float) == 0.5
        assert store.get("b", bool) is False
        assert store.get("s", str) == "text"
        assert store.get("n", SettingType.INTEGER) == 5

    @pytest.mark.parametrize(
        ("line", "expected_type"),
        [("b:true", int), ("n:5", float), ("n:5", bool), ("s:text", int), ("r:0.5", int)],
    )
    def test_typed_get_mismatch(self, line: str, expected_type: type) -> None:
        store = SettingsStore.from_lines([line])
        key = line.split(":", 1)[0]
        with pytest.raises(TypeMismatchError) as exc_info:
            store.get(key, expected_type)
        assert exc_info.value.key == key

    def test_get_setting_returns_copy(self) -> None:
        store = SettingsStore.from_lines(["a:1"])
        setting = store.get_setting("a")
        setting.set(99)
        assert store.get("a") == 1

    def test_to_dict_is_defensive_copy(self) -> None:
        store = SettingsStore.from_lines(["a:1"])
        mapping = store.to_dict()
        mapping["a"].set(2)
        mapping["b"] = Setting(3)

        assert store.get("a") == 1
        assert store.size() == 1

    def test_contains_and_iter(self) -> None:
        store = SettingsStore.from_lines(SAMPLE.splitlines())
        assert "two" in store
        assert sorted(store) == ["THREE", "one", "two"]

    def test_describe(self) -> None:
        store = SettingsStore.from_lines(["b:true", "a:50", "c:0.5"])
        assert store.describe() == "a: int: 50, b: bool: True, c: float: 0.5"
        assert str(store) == store.describe()

    def test_describe_empty_store(self) -> None:
        assert SettingsStore().describe() == ""

    def test_stores_compare_by_content(self) -> None:
        left = SettingsStore.from_lines(["a:1"])
        right = SettingsStore({"a": Setting(1)})
        assert left == right
        right.remove("a")
        right.add("a", Setting(True))
        assert left != right
