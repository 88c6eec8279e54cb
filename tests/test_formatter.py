"""
End-to-end tests for the formatting pipeline (tree-sitter Dart grammar required).
"""

from pathlib import Path

import pytest

from freezed_go_style.formatter import CompilationUnitFormatter, format_source

TEST_FILES_DIR = Path(__file__).parent / "test_files"

USER_EXPECTED = (
    "import 'package:freezed_annotation/freezed_annotation.dart';\n"
    "import 'package:freezed_go_style/freezed_go_style.dart';\n"
    "\n"
    "part 'user.freezed.dart';\n"
    "part 'user.g.dart';\n"
    "\n"
    "@FreezedGoStyle()\n"
    "@freezed\n"
    "class User with _$User {\n"
    "  const factory User({\n"
    + "    @JsonKey(name: 'id')" + " " * 4 + "@Default(0) int" + " " * 13 + "id,\n"
    + "    @JsonKey(name: 'email')" + " " * 13 + "required String email,\n"
    + " " * 40 + "String?" + " " * 9 + "nickname,\n"
    "  }) = _User;\n"
    "\n"
    "  factory User.fromJson(Map<String, dynamic> json) => _$UserFromJson(json);\n"
    "}\n"
)


def read_source(name: str) -> str:
    return (TEST_FILES_DIR / name).read_bytes().decode("utf-8")


class TestPrimaryConstructor:

    def test_user_model_is_aligned(self):
        text, changed = format_source(read_source("user.dart"))
        assert changed
        assert text == USER_EXPECTED

    def test_formatting_is_idempotent(self):
        once, _ = format_source(read_source("user.dart"))
        twice, changed = format_source(once)
        assert not changed
        assert twice == once

    def test_counts(self):
        outcome = CompilationUnitFormatter().format(read_source("user.dart"))
        assert outcome.constructors_formatted == 1
        assert outcome.constructors_skipped == 0

    def test_type_and_name_columns_line_up(self):
        text, _ = format_source(read_source("user.dart"))
        lines = text.splitlines()
        block = lines[lines.index("  const factory User({") + 1:lines.index("  }) = _User;")]
        assert len(block) == 3
        assert len({line.index(name) for line, name in zip(block, ("id,", "email,", "nickname,"))}) == 1

    def test_positional_list_keeps_no_braces(self):
        text, changed = format_source(read_source("mixed.dart"))
        assert changed
        assert (
            "  const factory Point(\n"
            "    int    x,\n"
            "    double y,\n"
            "  ) = _Point;\n"
        ) in text

    def test_only_marked_classes_change(self):
        text, _ = format_source(read_source("mixed.dart"))
        assert "  const factory Size(double width, double height) = _Size;\n" in text
        assert "  const factory Empty() = _Empty;\n" in text

    def test_untyped_parameter_becomes_dynamic(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Loose with _$Loose {\n"
            "  const factory Loose(name, int age) = _Loose;\n"
            "}\n"
        )
        text, changed = format_source(source)
        assert changed
        assert "    dynamic name,\n    int     age,\n" in text

    def test_comment_in_redirect_clause_is_kept(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Value with _$Value {\n"
            "  const factory Value(int a, double bb) /* c */ = _Value;\n"
            "}\n"
        )
        text, changed = format_source(source)
        assert changed
        assert "    int    a,\n    double bb,\n  ) /* c */ = _Value;\n" in text

    def test_decorator_text_is_kept_verbatim(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Tag with _$Tag {\n"
            "  const factory Tag({@Default('a  b') String label, int? n}) = _Tag;\n"
            "}\n"
        )
        text, _ = format_source(source)
        assert "    @Default('a  b') String label,\n" in text
        assert "    " + " " * 16 + " int?   n,\n" in text

    def test_optional_positional_list(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Maybe with _$Maybe {\n"
            "  const factory Maybe([int? a, String? label]) = _Maybe;\n"
            "}\n"
        )
        text, _ = format_source(source)
        assert (
            "  const factory Maybe([\n"
            "    int?    a,\n"
            "    String? label,\n"
            "  ]) = _Maybe;\n"
        ) in text


class TestUntouched:

    def test_unmarked_file_is_unchanged(self):
        source = read_source("unmarked.dart")
        text, changed = format_source(source)
        assert not changed
        assert text == source

    def test_named_factories_are_left_alone(self):
        source = read_source("union.dart")
        text, changed = format_source(source)
        assert not changed
        assert text == source

    def test_marker_with_other_name_is_ignored(self):
        source = read_source("user.dart")
        text, changed = format_source(source, marker_name="GoStyle")
        assert not changed

    def test_fast_path_skips_parsing(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("parser must not run")

        monkeypatch.setattr("freezed_go_style.formatter.facade.parse_source", fail)
        source = "class Plain {\n  const Plain();\n}\n"
        assert format_source(source) == (source, False)

    def test_default_value_skips_only_that_constructor(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Config with _$Config {\n"
            "  const factory Config({int retries = 3, bool verbose}) = _Config;\n"
            "}\n"
            "\n"
            "@FreezedGoStyle()\n"
            "class Pair with _$Pair {\n"
            "  const factory Pair(int a, String b) = _Pair;\n"
            "}\n"
        )
        outcome = CompilationUnitFormatter().format(source)
        assert outcome.constructors_skipped == 1
        assert outcome.constructors_formatted == 1
        assert "  const factory Config({int retries = 3, bool verbose}) = _Config;\n" in outcome.text
        assert "    int    a,\n    String b,\n" in outcome.text


class TestComments:

    SOURCE = (
        "@FreezedGoStyle()\n"
        "class Note with _$Note {\n"
        "  const factory Note({\n"
        "    // The title.\n"
        "    required String title, // shown in lists\n"
        "    String? body,\n"
        "  }) = _Note;\n"
        "}\n"
    )

    EXPECTED = (
        "@FreezedGoStyle()\n"
        "class Note with _$Note {\n"
        "  const factory Note({\n"
        "    // The title.\n"
        "    // shown in lists\n"
        "    required String title,\n"
        "    String?         body,\n"
        "  }) = _Note;\n"
        "}\n"
    )

    def test_comments_move_above_their_parameter(self):
        text, changed = format_source(self.SOURCE)
        assert changed
        assert text == self.EXPECTED

    def test_comment_layout_is_stable(self):
        text, changed = format_source(self.EXPECTED)
        assert not changed
        assert text == self.EXPECTED

    def test_comment_between_decorator_and_type(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Tagged with _$Tagged {\n"
            "  const factory Tagged({\n"
            "    @JsonKey(name: 'a') /* why */ required String a,\n"
            "    int? b,\n"
            "  }) = _Tagged;\n"
            "}\n"
        )
        expected = (
            "@FreezedGoStyle()\n"
            "class Tagged with _$Tagged {\n"
            "  const factory Tagged({\n"
            "    /* why */\n"
            "    @JsonKey(name: 'a') required String a,\n"
            "                        int?            b,\n"
            "  }) = _Tagged;\n"
            "}\n"
        )
        text, changed = format_source(source)
        assert changed
        assert text == expected

        again, changed = format_source(text)
        assert not changed
        assert again == expected


class TestEncoding:

    def test_crlf_line_endings_are_preserved(self):
        source = read_source("user.dart").replace("\n", "\r\n")
        text, changed = format_source(source)
        assert changed
        assert text == USER_EXPECTED.replace("\n", "\r\n")

    def test_widths_count_characters_not_bytes(self):
        source = (
            "@FreezedGoStyle()\n"
            "class Person with _$Person {\n"
            "  const factory Person({\n"
            "    @JsonKey(name: 'prénom') required String firstName,\n"
            "    @JsonKey(name: 'age') int age,\n"
            "  }) = _Person;\n"
            "}\n"
        )
        text, changed = format_source(source)
        assert changed
        assert "    @JsonKey(name: 'prénom') required String firstName,\n" in text
        assert "    @JsonKey(name: 'age')" + " " * 4 + "int" + " " * 13 + "age,\n" in text

    def test_custom_indent_unit(self):
        text, _ = format_source(read_source("mixed.dart"), indent_unit="\t")
        assert "  const factory Point(\n  \tint    x,\n  \tdouble y,\n  ) = _Point;\n" in text
