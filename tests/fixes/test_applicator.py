"""Tests for in-memory patch application."""

import pytest

from coderoast.exceptions import FileAccessError, HunkContextMismatchError, HunkRangeError
from coderoast.fixes.applicator import apply_file_patch, build_overlay
from coderoast.fixes.diff_parser import parse_unified_diff

CONTENT = "one\ntwo\nthree\nfour\nfive\n"


def single(diff_text):
    return parse_unified_diff(diff_text)[0]


class TestApplyFilePatch:
    def test_replace_line(self):
        patch = single("--- a/f\n+++ b/f\n@@ -2,2 +2,2 @@\n-two\n+TWO\n three\n")
        assert apply_file_patch(CONTENT, patch) == "one\nTWO\nthree\nfour\nfive\n"

    def test_multiple_hunks_in_old_coordinates(self):
        patch = single(
            "--- a/f\n+++ b/f\n"
            "@@ -1,1 +1,2 @@\n-one\n+uno\n+dos\n"
            "@@ -4,1 +5,0 @@\n-four\n"
        )
        assert apply_file_patch(CONTENT, patch) == "uno\ndos\ntwo\nthree\nfive\n"

    def test_pure_insertion_after_line(self):
        patch = single("--- a/f\n+++ b/f\n@@ -2,0 +3,1 @@\n+inserted\n")
        assert apply_file_patch(CONTENT, patch) == "one\ntwo\ninserted\nthree\nfour\nfive\n"

    def test_insertion_at_top(self):
        patch = single("--- a/f\n+++ b/f\n@@ -0,0 +1,1 @@\n+first\n")
        assert apply_file_patch("a\n", patch) == "first\na\n"

    def test_crlf_content_joined_with_lf(self):
        patch = single("--- a/f\n+++ b/f\n@@ -1 +1 @@\n-a\n+b\n")
        assert apply_file_patch("a\r\nc\r\n", patch) == "b\nc\n"

    def test_trailing_whitespace_ignored_in_context(self):
        patch = single("--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n one\n-two\n+2\n")
        assert apply_file_patch("one   \ntwo\n", patch) == "one   \n2\n"

    def test_start_past_end(self):
        patch = single("--- a/f\n+++ b/f\n@@ -40,1 +40,1 @@\n-x\n+y\n")
        with pytest.raises(HunkRangeError):
            apply_file_patch(CONTENT, patch)

    def test_overlapping_hunks(self):
        patch = single(
            "--- a/f\n+++ b/f\n"
            "@@ -2,2 +2,2 @@\n-two\n-three\n+2\n+3\n"
            "@@ -3,1 +3,1 @@\n-three\n+3\n"
        )
        with pytest.raises(HunkRangeError, match="overlaps"):
            apply_file_patch(CONTENT, patch)

    def test_body_past_end_of_file(self):
        patch = single("--- a/f\n+++ b/f\n@@ -2,3 +2,3 @@\n b\n-c\n-d\n")
        with pytest.raises(HunkRangeError, match="past the end"):
            apply_file_patch("a\nb", patch)

    def test_context_mismatch(self):
        patch = single("--- a/f\n+++ b/f\n@@ -1,1 +1,1 @@\n-not one\n+x\n")
        with pytest.raises(HunkContextMismatchError):
            apply_file_patch(CONTENT, patch)


class TestBuildOverlay:
    def test_same_file_patched_sequentially(self):
        patches = parse_unified_diff(
            "--- a/f\n+++ b/f\n@@ -1 +1 @@\n-one\n+ONE\n"
            "--- a/f\n+++ b/f\n@@ -1 +1 @@\n-ONE\n+1\n"
        )
        reads = []

        def read(path):
            reads.append(path)
            return CONTENT

        overlay = build_overlay(read, patches)
        assert overlay == {"f": "1\ntwo\nthree\nfour\nfive\n"}
        assert reads == ["f"]

    def test_read_errors_propagate(self, tmp_path):
        from coderoast.scanning.indexer import SourceIndexer

        patches = parse_unified_diff("--- a/gone.ts\n+++ b/gone.ts\n@@ -1 +1 @@\n-a\n+b\n")
        with pytest.raises(FileAccessError):
            build_overlay(SourceIndexer(tmp_path, visitors={}).read_text, patches)
