"""Tests for run file naming rules."""

from pathlib import Path

import pytest

from xhprof_runs.errors import InvalidRunIdError
from xhprof_runs.storage.file.naming import (
    generate_run_id,
    is_managed,
    parse_basename,
    run_basename,
    run_path,
    sanitize,
    validate_identifier,
)


class TestRunBasename:
    def test_includes_namespace(self):
        assert run_basename("abc", "app", "xhprof") == "abc.app.xhprof"

    def test_empty_namespace_is_omitted(self):
        assert run_basename("abc", "", "xhprof") == "abc.xhprof"

    def test_namespace_equal_to_suffix_is_omitted(self):
        assert run_basename("abc", "xhprof", "xhprof") == "abc.xhprof"

    @pytest.mark.parametrize(
        "run_id",
        ["a/b", "a\\b", "a\0b", "/a/b/", "\\\\a\0\0/b"],
    )
    def test_strips_unsafe_characters(self, run_id: str):
        name = run_basename(run_id, "app", "xhprof")
        assert name == "ab.app.xhprof"
        assert "/" not in name
        assert "\\" not in name
        assert "\0" not in name

    def test_sanitizes_namespace_too(self):
        assert run_basename("abc", "ev/il", "xhprof") == "abc.evil.xhprof"


def test_sanitize_leaves_other_characters():
    assert sanitize("run-1_x y") == "run-1_x y"


def test_run_path_joins_root(tmp_path: Path):
    assert run_path(tmp_path, "abc", "app", "xhprof") == tmp_path / "abc.app.xhprof"


def test_run_path_without_root():
    assert run_path(None, "abc", "", "xhprof") == Path("abc.xhprof")


class TestIsManaged:
    @pytest.mark.parametrize("name", ["a.xhprof", "a.app.xhprof", ".xhprof", "a.b.c.xhprof"])
    def test_managed(self, name: str):
        assert is_managed(name, "xhprof")

    @pytest.mark.parametrize("name", ["xhprof", "a.xhprof.bak", "a.XHPROF", "a.xhproff", "notes.txt", ".a.xhprof.1.tmp"])
    def test_not_managed(self, name: str):
        assert not is_managed(name, "xhprof")


class TestParseBasename:
    def test_with_namespace(self):
        assert parse_basename("abc.app.xhprof", "xhprof") == ("abc", "app")

    def test_without_namespace(self):
        assert parse_basename("abc.xhprof", "xhprof") == ("abc", "")

    def test_extra_segments_use_first_two(self):
        assert parse_basename("a.b.c.xhprof", "xhprof") == ("a", "b")


def test_generated_ids_are_unique_and_dot_free():
    ids = {generate_run_id() for _ in range(1000)}
    assert len(ids) == 1000
    for run_id in ids:
        assert run_id
        assert "." not in run_id
        assert sanitize(run_id) == run_id


class TestValidateIdentifier:
    def test_accepts_plain_id(self):
        assert validate_identifier("run-1", "run_id") == "run-1"

    def test_accepts_empty_when_allowed(self):
        assert validate_identifier("", "namespace", allow_empty=True) == ""

    def test_rejects_empty(self):
        with pytest.raises(InvalidRunIdError):
            validate_identifier("", "run_id")

    def test_rejects_dots(self):
        with pytest.raises(InvalidRunIdError, match="must not contain"):
            validate_identifier("v1.2", "run_id")

    def test_rejects_id_that_sanitizes_to_nothing(self):
        with pytest.raises(InvalidRunIdError):
            validate_identifier("//\0", "run_id")

    def test_rejects_non_string(self):
        with pytest.raises(InvalidRunIdError):
            validate_identifier(42, "run_id")  # type: ignore[arg-type]
