"""Tests for line normalisation."""

from coderoast.scanning.languages import LANGUAGES
from coderoast.scanning.normalizer import normalize_content, split_lines, strip_comments

TS = LANGUAGES["typescript"]
PY = LANGUAGES["python"]


class TestSplitLines:
    """Test LF/CRLF splitting."""

    def test_crlf_and_lf(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_trailing_newline_gives_empty_entry(self):
        assert split_lines("a\n") == ["a", ""]


class TestStripComments:
    """Comments go away, line count stays."""

    def test_block_comment_keeps_newlines(self):
        content = "a();\n/* one\ntwo\nthree */\nb();"
        stripped = strip_comments(content, TS)
        assert stripped.count("\n") == content.count("\n")
        assert "two" not in stripped

    def test_line_comment(self):
        assert strip_comments("x = 1; // note", TS).strip() == "x = 1;"

    def test_python_hash_comment(self):
        assert strip_comments("x = 1  # note\n", PY) == "x = 1  \n"


class TestNormalizeContent:
    """Test the normalized corpus and its line-number mapping."""

    def test_collapses_whitespace_and_drops_blanks(self):
        content = "function  f() {\n\n    return   1;\n}\n"
        lines, numbers = normalize_content(content, TS)
        assert lines == ["function f() {", "return 1;", "}"]
        assert numbers == [1, 3, 4]

    def test_comment_only_lines_dropped(self):
        content = "// header\nconst a = 1;\n/*\n * doc\n */\nconst b = 2;\n"
        lines, numbers = normalize_content(content, TS)
        assert lines == ["const a = 1;", "const b = 2;"]
        assert numbers == [2, 6]

    def test_lengths_match_and_numbers_increase(self):
        content = "a\n\n  b  \n// c\nd /* e */ f\n\r\ng\n"
        lines, numbers = normalize_content(content, TS)
        assert len(lines) == len(numbers)
        assert all(x < y for x, y in zip(numbers, numbers[1:]))
        assert lines[-1] == "g"

    def test_empty_content(self):
        assert normalize_content("", TS) == ([], [])
