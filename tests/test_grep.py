from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from grrs.config.models import AppSettings, MatchSettings, WalkSettings
from grrs.errors import FileReadError, InvalidRootError
from grrs.fs.probe import is_text_file
from grrs.grep.driver import SearchDriver
from grrs.grep.matcher import LineMatcher, SearchMatch
from grrs.runtime_logging import configure_runtime_logging


class LineMatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_one_match_per_line_with_line_numbers(self) -> None:
        path = self.root / "notes.txt"
        path.write_text("lorem ipsum\ndolor dolor sit amet\nquick brown fox\ndolor\n", encoding="utf-8")

        matches = list(LineMatcher("dolor").search(path))

        self.assertEqual(
            matches,
            [
                SearchMatch(path=path, line_number=2, line="dolor dolor sit amet"),
                SearchMatch(path=path, line_number=4, line="dolor"),
            ],
        )

    def test_ignore_case(self) -> None:
        path = self.root / "notes.txt"
        path.write_text("Hello\nhello\nHELLO there\nbye\n", encoding="utf-8")

        self.assertEqual(len(list(LineMatcher("hello").search(path))), 1)
        self.assertEqual(len(list(LineMatcher("hello", ignore_case=True).search(path))), 3)

    def test_windows_line_endings_are_stripped(self) -> None:
        path = self.root / "crlf.txt"
        path.write_bytes(b"first\r\nsecond match\r\n")

        matches = list(LineMatcher("match").search(path))

        self.assertEqual([(m.line_number, m.line) for m in matches], [(2, "second match")])

    def test_bare_carriage_return_does_not_split_lines(self) -> None:
        path = self.root / "progress.txt"
        path.write_bytes(b"10%\r50%\r100%\nneedle\n")

        matches = list(LineMatcher("needle").search(path))

        self.assertEqual([(m.line_number, m.line) for m in matches], [(2, "needle")])
        self.assertEqual(
            [m.line for m in LineMatcher("50%").search(path)],
            ["10%\r50%\r100%"],
        )

    def test_undecodable_file_raises(self) -> None:
        path = self.root / "latin1.txt"
        path.write_bytes(b"caf\xe9 au lait\n")

        with self.assertRaises(FileReadError) as ctx:
            list(LineMatcher("lait").search(path))
        self.assertEqual(ctx.exception.path, path)

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(FileReadError):
            list(LineMatcher("x").search(self.root / "missing.txt"))


class ProbeTests(unittest.TestCase):
    def test_detects_binary_and_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            text = root / "text.txt"
            text.write_text("plain ascii\n", encoding="utf-8")
            binary = root / "blob.bin"
            binary.write_bytes(b"\x89PNG\x00\x00")
            # A multi-byte character split by the probe boundary is still text.
            split = root / "split.txt"
            split.write_bytes(b"a" * 1023 + "é".encode("utf-8"))

            self.assertTrue(is_text_file(text))
            self.assertFalse(is_text_file(binary))
            self.assertTrue(is_text_file(split))


class SearchDriverTests(unittest.TestCase):
    def setUp(self) -> None:
        configure_runtime_logging(level="off")
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_end_to_end_gitignore_scenario(self) -> None:
        (self.root / "a.txt").write_text("hello world\n", encoding="utf-8")
        (self.root / "b.log").write_text("hello from the log\n", encoding="utf-8")
        (self.root / ".gitignore").write_text("*.log\n", encoding="utf-8")

        report = SearchDriver().run(self.root, "hello")

        self.assertEqual(report.matches, [SearchMatch(path=self.root / "a.txt", line_number=1, line="hello world")])
        self.assertEqual(report.errors, [])
        self.assertEqual(report.files_searched, 2)

    def test_unreadable_file_is_reported_and_search_continues(self) -> None:
        (self.root / "a.txt").write_text("needle one\n", encoding="utf-8")
        (self.root / "b.txt").write_bytes(b"needle two\n" + b"x" * 2000 + b"\n\xff\xfe\n")
        (self.root / "c.txt").write_text("needle three\n", encoding="utf-8")

        report = SearchDriver().run(self.root, "needle")

        self.assertEqual([match.path.name for match in report.matches], ["a.txt", "c.txt"])
        self.assertEqual([failure.path.name for failure in report.errors], ["b.txt"])
        self.assertEqual(report.files_searched, 2)

    def test_binary_files_are_skipped_unless_requested(self) -> None:
        (self.root / "blob.bin").write_bytes(b"\x00\x01needle\n")

        report = SearchDriver().run(self.root, "needle")
        self.assertEqual(report.matches, [])
        self.assertEqual(report.skipped_binary, [self.root / "blob.bin"])

        settings = AppSettings(match=MatchSettings(skip_binary=False))
        report = SearchDriver(settings).run(self.root, "needle")
        self.assertEqual(len(report.matches), 1)
        self.assertEqual(report.skipped_binary, [])

    def test_settings_drive_depth_and_case(self) -> None:
        (self.root / "top.txt").write_text("Needle\n", encoding="utf-8")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "deep.txt").write_text("needle\n", encoding="utf-8")

        settings = AppSettings(walk=WalkSettings(max_depth=1), match=MatchSettings(ignore_case=True))
        report = SearchDriver(settings).run(self.root, "needle")

        self.assertEqual([(m.path.name, m.line) for m in report.matches], [("top.txt", "Needle")])

        report = SearchDriver(settings).run(self.root, "needle", max_depth=2)
        self.assertEqual(len(report.matches), 2)

    def test_by_file_groups_in_traversal_order(self) -> None:
        (self.root / "a.txt").write_text("x\nx\n", encoding="utf-8")
        (self.root / "b.txt").write_text("x\n", encoding="utf-8")

        grouped = SearchDriver().run(self.root, "x").by_file()

        self.assertEqual([(path.name, len(matches)) for path, matches in grouped], [("a.txt", 2), ("b.txt", 1)])

    def test_pattern_warnings_surface_in_report(self) -> None:
        (self.root / ".gitignore").write_text("[nope\n", encoding="utf-8")

        report = SearchDriver().run(self.root, "anything")

        self.assertEqual(len(report.warnings), 1)
        self.assertIn("unterminated character class", report.warnings[0])

    def test_invalid_class_range_is_a_warning_not_a_crash(self) -> None:
        (self.root / ".gitignore").write_text("[z-a]\n*.log\n", encoding="utf-8")
        (self.root / "a.txt").write_text("hello\n", encoding="utf-8")
        (self.root / "b.log").write_text("hello\n", encoding="utf-8")

        report = SearchDriver().run(self.root, "hello")

        self.assertEqual([m.path.name for m in report.matches], ["a.txt"])
        self.assertEqual(len(report.warnings), 1)
        self.assertIn("[z-a]", report.warnings[0])

    def test_missing_root_is_fatal(self) -> None:
        with self.assertRaises(InvalidRootError):
            SearchDriver().run(self.root / "nope", "x")


if __name__ == "__main__":
    unittest.main()
