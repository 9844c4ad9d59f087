"""Tests for session path helpers."""

import os
from pathlib import Path

import pytest

from sessionkeeper.sessions.paths import (
    absolute_dir,
    cwd_session_name,
    session_path,
    strip_extension,
)


class TestAbsoluteDir:
    """Tests for absolute_dir()."""

    def test_absolute_path_is_normalized(self) -> None:
        assert absolute_dir("/home/me/project/") == "/home/me/project"
        assert absolute_dir("/home/me/./other/../project") == "/home/me/project"

    def test_relative_path_uses_given_cwd(self) -> None:
        assert absolute_dir("./sub", cwd="/work") == "/work/sub"
        assert absolute_dir("../sibling", cwd="/work/here") == "/work/sibling"

    def test_relative_path_defaults_to_process_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert absolute_dir("sub") == os.path.join(os.getcwd(), "sub")

    def test_expands_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/tester")
        assert absolute_dir("~/code") == "/home/tester/code"

    def test_accepts_path_objects(self) -> None:
        assert absolute_dir(Path("/a/b/")) == "/a/b"

    def test_relative_and_absolute_forms_agree(self) -> None:
        assert absolute_dir("./sub", cwd="/x") == absolute_dir("/x/sub", cwd="/y")


class TestStripExtension:
    def test_strips_trailing_extension(self) -> None:
        assert strip_extension("mysession.json") == "mysession"

    def test_strips_only_once(self) -> None:
        assert strip_extension("a.json.json") == "a.json"

    def test_leaves_other_names_alone(self) -> None:
        assert strip_extension("mysession") == "mysession"
        assert strip_extension("json") == "json"
        assert strip_extension("my.jsonl") == "my.jsonl"

    def test_bare_extension_is_kept(self) -> None:
        assert strip_extension(".json") == ".json"

    def test_custom_extension(self) -> None:
        assert strip_extension("work.vim", ".vim") == "work"


class TestSessionPath:
    def test_joins_name_and_extension(self, tmp_path: Path) -> None:
        assert session_path(tmp_path, "work") == tmp_path / "work.json"


class TestCwdSessionName:
    def test_replaces_separators(self) -> None:
        assert cwd_session_name("/home/me/project") == "%home%me%project"

    def test_uses_process_cwd_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        expected = os.getcwd().replace(os.sep, "%")
        assert cwd_session_name() == expected
