"""Tests for duplicate-block detection."""

from coderoast.scanning.models import NormalizedFile
from coderoast.signals.duplicates import detect_duplicate_blocks, fingerprint


def corpus(path, lines, line_numbers=None):
    numbers = line_numbers or list(range(1, len(lines) + 1))
    return NormalizedFile(path=path, extension=".ts", normalized_lines=lines, line_numbers=numbers)


BLOCK = [f"const v{i} = compute({i});" for i in range(10)]


class TestDetectDuplicateBlocks:
    """Window-then-extend detection."""

    def test_two_identical_blocks_in_one_file(self):
        lines = ["head();"] + BLOCK + ["middle();", "other();"] + BLOCK + ["tail();"]
        blocks = detect_duplicate_blocks([corpus("a.ts", lines)])

        assert len(blocks) == 1
        block = blocks[0]
        assert block.length == 10
        assert [(o.file, o.start_line, o.end_line) for o in block.occurrences] == [
            ("a.ts", 2, 11),
            ("a.ts", 14, 23),
        ]

    def test_extension_is_maximal(self):
        shared = BLOCK + ["extra_one();", "extra_two();"]
        a = corpus("a.ts", ["a_only();"] + shared + ["a_end();"])
        b = corpus("b.ts", ["b_only();"] + shared + ["b_end();"])
        blocks = detect_duplicate_blocks([a, b])

        assert len(blocks) == 1
        assert blocks[0].length == 12
        occurrences = {(o.file, o.start_line, o.end_line) for o in blocks[0].occurrences}
        assert occurrences == {("a.ts", 2, 13), ("b.ts", 2, 13)}

    def test_extension_capped_at_max_lines(self):
        shared = [f"line_{i}();" for i in range(30)]
        blocks = detect_duplicate_blocks(
            [corpus("a.ts", shared), corpus("b.ts", shared)], min_lines=10, max_lines=20
        )
        assert blocks
        assert max(block.length for block in blocks) == 20

    def test_occurrences_map_to_original_lines(self):
        a = corpus("a.ts", BLOCK, line_numbers=[3 * i + 1 for i in range(10)])
        b = corpus("b.ts", BLOCK)
        blocks = detect_duplicate_blocks([a, b])
        assert {(o.file, o.start_line, o.end_line) for o in blocks[0].occurrences} == {
            ("a.ts", 1, 28),
            ("b.ts", 1, 10),
        }

    def test_below_window_not_reported(self):
        short = BLOCK[:9]
        assert detect_duplicate_blocks([corpus("a.ts", short), corpus("b.ts", short)]) == []

    def test_single_occurrence_not_reported(self):
        assert detect_duplicate_blocks([corpus("a.ts", BLOCK)]) == []

    def test_three_occurrences(self):
        files = [corpus(f"{name}.ts", [f"{name}();"] + BLOCK) for name in ("a", "b", "c")]
        blocks = detect_duplicate_blocks(files)
        assert len(blocks) == 1
        assert len(blocks[0].occurrences) == 3

    def test_hash_is_fingerprint_of_block_text(self):
        blocks = detect_duplicate_blocks([corpus("a.ts", BLOCK), corpus("b.ts", BLOCK)])
        assert blocks[0].hash == fingerprint("\n".join(BLOCK))
