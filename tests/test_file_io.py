"""Tests for file and directory formatting through DartFormatter."""

import os
import stat

import pytest

from freezed_go_style.formatter import DartFormatter
from freezed_go_style.user_config import UserConfig


class TestTargets:

    pytestmark = pytest.mark.fast

    @pytest.mark.parametrize("name, expected", [
        ("lib/models/user.dart", True),
        ("lib/models/User.DART", True),
        ("lib/models/user.g.dart", False),
        ("lib/models/user.freezed.dart", False),
        ("app/.dart_tool/gen/user.dart", False),
        ("app/build/user.dart", False),
        ("build/user.dart", False),
        ("lib/models/user.py", False),
    ])
    def test_is_target(self, formatter, tmp_path, name, expected):
        assert formatter.is_target(tmp_path / name, tmp_path) is expected

    def test_directories_above_root_are_not_matched(self, formatter, tmp_path):
        root = tmp_path / "build" / "myapp"
        assert formatter.is_target(root / "lib" / "user.dart", root)
        assert not formatter.is_target(root / "build" / "user.dart", root)

    def test_without_root_only_the_name_is_matched(self, formatter, tmp_path):
        assert formatter.is_target(tmp_path / "build" / "user.dart")
        assert not formatter.is_target(tmp_path / "build" / "user.g.dart")

    def test_non_dart_file_is_reported(self, formatter, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("@FreezedGoStyle()\n")

        result = formatter.format_file(path)

        assert not result.formatted
        assert "not a target file" in result.error
        assert path.read_text() == "@FreezedGoStyle()\n"

    def test_missing_file_is_reported(self, formatter, tmp_path):
        result = formatter.format_file(tmp_path / "missing.dart")
        assert not result.formatted
        assert result.error.startswith("read failed")


class TestFormatFile:

    def test_rewrites_marked_file(self, formatter, dart_project):
        path = dart_project / "user.dart"
        result = formatter.format_file(path)

        assert result.changed
        assert result.constructors_formatted == 1
        assert "    @JsonKey(name: 'email')" + " " * 13 + "required String email,\n" in path.read_text()

    def test_second_pass_writes_nothing(self, formatter, dart_project):
        path = dart_project / "user.dart"
        formatter.format_file(path)
        before = path.stat().st_mtime_ns

        result = formatter.format_file(path)

        assert not result.changed
        assert result.error is None
        assert path.stat().st_mtime_ns == before

    def test_unchanged_file_is_not_rewritten(self, formatter, dart_project):
        path = dart_project / "unmarked.dart"
        original = path.read_bytes()

        result = formatter.format_file(path)

        assert not result.changed
        assert path.read_bytes() == original

    def test_file_mode_is_kept(self, formatter, dart_project):
        path = dart_project / "user.dart"
        os.chmod(path, 0o640)

        formatter.format_file(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o640
        assert not list(dart_project.glob(".user.dart.*.tmp"))

    def test_crlf_file_keeps_crlf(self, formatter, dart_project):
        path = dart_project / "user.dart"
        path.write_bytes(path.read_bytes().replace(b"\n", b"\r\n"))

        formatter.format_file(path)

        data = path.read_bytes()
        assert data.count(b"\n") == data.count(b"\r\n")

    def test_invalid_utf8_is_reported(self, formatter, tmp_path):
        path = tmp_path / "broken.dart"
        path.write_bytes(b"@FreezedGoStyle()\nclass \xff {}\n")

        result = formatter.format_file(path)

        assert not result.formatted
        assert "read failed" in result.error


class TestFormatDirectory:

    def test_formats_each_target_once(self, formatter, dart_project):
        generated = dart_project / "user.g.dart"
        generated.write_text((dart_project / "user.dart").read_text())

        summary = formatter.format_directory(dart_project)

        assert summary.files_visited == 4
        assert summary.files_changed == 2
        changed = sorted(os.path.basename(r.path) for r in summary.results if r.changed)
        assert changed == ["mixed.dart", "user.dart"]
        assert "@JsonKey(name: 'id') @Default(0) int id," in generated.read_text()

    def test_nested_directories(self, formatter, dart_project):
        nested = dart_project / "lib" / "models"
        nested.mkdir(parents=True)
        (dart_project / "user.dart").rename(nested / "user.dart")

        summary = formatter.format_path(dart_project)

        assert any(r.path.endswith(os.path.join("models", "user.dart")) and r.changed for r in summary.results)

    def test_format_path_on_file(self, formatter, dart_project):
        summary = formatter.format_path(dart_project / "mixed.dart")
        assert summary.files_visited == 1
        assert summary.files_changed == 1

    def test_custom_marker_from_config(self, tmp_path, dart_project, monkeypatch):
        monkeypatch.setenv("FREEZED_GO_STYLE_MARKER", "@freezed")
        formatter = DartFormatter(UserConfig(project_root=tmp_path))

        result = formatter.format_file(dart_project / "unmarked.dart")

        assert result.changed

    def test_project_below_an_ignored_directory_name(self, formatter, tmp_path, dart_project):
        lib = tmp_path / "build" / "myapp" / "lib"
        lib.mkdir(parents=True)
        (dart_project / "user.dart").rename(lib / "user.dart")

        summary = formatter.format_directory(lib)

        assert summary.files_visited == 1
        assert summary.files_changed == 1
