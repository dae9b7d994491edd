"""End-to-end tests for the signal engine over real files."""

from coderoast.config import AnalysisConfig, ThresholdConfig
from coderoast.signals.engine import SignalEngine


class TestSignalEngine:
    """Scenarios run through indexing, parsing and every detector."""

    def test_duplicate_blocks_in_one_file(self, make_project, records, duplicated_ts_source):
        root = make_project({"src/dup.ts": duplicated_ts_source})
        result = SignalEngine().analyze(root, records("src/dup.ts"))

        blocks = result.signals.duplicate_blocks
        assert len(blocks) == 1
        assert blocks[0].length >= 10
        assert len(blocks[0].occurrences) == 2
        assert all(o.file == "src/dup.ts" for o in blocks[0].occurrences)
        assert result.metrics.duplicate_blocks == 1

    def test_long_function_of_55_lines(self, make_project, records, long_ts_function):
        source = "\n".join(long_ts_function("big", 55) + ["", "export const x = 1;"]) + "\n"
        root = make_project({"src/big.ts": source})
        result = SignalEngine().analyze(root, records("src/big.ts"))

        assert len(result.signals.long_functions) == 1
        fn = result.signals.long_functions[0]
        assert (fn.name, fn.start_line, fn.end_line) == ("big", 1, 55)
        assert fn.end_line - fn.start_line + 1 == 55
        assert result.metrics.max_function_length == 55

    def test_mutual_imports_reported_as_cycle(self, make_project, records):
        root = make_project(
            {
                "src/a.ts": 'import { b } from "./b";\nexport const a = () => b();\n',
                "src/b.ts": 'export const b = () => 1;\n\nimport { a } from "./a";\n',
            }
        )
        result = SignalEngine().analyze(root, records("src/a.ts", "src/b.ts"))

        assert len(result.signals.circular_dependencies) == 1
        cycle = result.signals.circular_dependencies[0]
        assert (cycle.from_file, cycle.to_file) == ("src/a.ts", "src/b.ts")
        assert (cycle.from_start_line, cycle.from_end_line) == (1, 1)
        assert (cycle.to_start_line, cycle.to_end_line) == (3, 3)
        assert result.dependency_summary.cycles == 1

    def test_overlay_changes_result(self, make_project, records, long_ts_function):
        source = "\n".join(long_ts_function("big", 60)) + "\n"
        root = make_project({"big.ts": source})
        engine = SignalEngine()

        before = engine.analyze(root, records("big.ts"))
        after = engine.analyze(
            root, records("big.ts"), overlay={"big.ts": "function big() {\n  return 1;\n}\n"}
        )

        assert len(before.signals.long_functions) == 1
        assert after.signals.long_functions == []
        assert after.metrics.max_function_length == 3

    def test_thresholds_from_config(self, make_project, records, long_ts_function):
        source = "\n".join(long_ts_function("mid", 20)) + "\n"
        root = make_project({"mid.ts": source})
        config = AnalysisConfig(thresholds=ThresholdConfig(long_function_threshold=20))
        result = SignalEngine(config).analyze(root, records("mid.ts"))
        assert [fn.length for fn in result.signals.long_functions] == [20]

    def test_test_presence_and_skipped_files(self, make_project, records):
        root = make_project({"src/a.ts": "let a;\n", "src/a.test.ts": "let t;\n"})
        result = SignalEngine().analyze(root, records("src/a.ts", "src/a.test.ts", "src/gone.ts"))

        assert result.signals.test_presence.has_tests
        assert result.signals.test_presence.test_files == ["src/a.test.ts"]
        assert result.skipped_files == ["src/gone.ts"]

    def test_to_dict_uses_camel_case(self, make_project, records):
        root = make_project({"a.ts": "function f() {\n}\n"})
        data = SignalEngine().analyze(root, records("a.ts")).to_dict()
        assert data["metrics"]["totalFunctions"] == 1
        assert set(data["signals"]) == {
            "longFunctions",
            "duplicateBlocks",
            "circularDependencies",
            "testPresence",
        }
