"""
Unit tests for the course repository scanner.

Scanner contract:
- only real directories count (files and the pointer symlink are skipped)
- missing directories give an empty result instead of an exception
- duplicate course names: the later semester wins
"""

import tempfile
import unittest
from pathlib import Path

from course_tree import make_settings, make_tree, point_to

from coursemgr.model import Course
from coursemgr.scan import iter_courses, list_folders, scan_courses


class TestListFolders(unittest.TestCase):
    def test_only_directories_sorted(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            base = Path(d)
            (base / "b").mkdir()
            (base / "a").mkdir()
            (base / "notes.txt").write_text("x", encoding="utf-8")
            self.assertEqual(list_folders(base), ["a", "b"])

    def test_missing_directory_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertLogs("coursemgr.scan", level="ERROR"):
                self.assertEqual(list_folders(Path(d) / "missing"), [])

    def test_symlink_is_not_a_folder(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            settings = make_settings(Path(d))
            make_tree(settings, {"S1": ["Math"]})
            point_to(settings, "S1", "Math")
            self.assertEqual(list_folders(settings.root), ["S1"])


class TestScanCourses(unittest.TestCase):
    def test_two_levels(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            settings = make_settings(Path(d))
            make_tree(settings, {"S1": ["Math", "Bio"], "S2": ["Phys"]})
            point_to(settings, "S1", "Math")

            self.assertEqual(scan_courses(settings.root), {"Math": "S1", "Bio": "S1", "Phys": "S2"})
            self.assertEqual(
                list(iter_courses(settings.root)),
                [Course("S1", "Bio"), Course("S1", "Math"), Course("S2", "Phys")],
            )

    def test_empty_semester(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            settings = make_settings(Path(d))
            (settings.root / "S1").mkdir()
            self.assertEqual(scan_courses(settings.root), {})

    def test_missing_root(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertLogs("coursemgr.scan", level="ERROR"):
                self.assertEqual(scan_courses(Path(d) / "nope"), {})

    def test_duplicate_name_last_semester_wins(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            settings = make_settings(Path(d))
            make_tree(settings, {"S1": ["Math"], "S2": ["Math"]})
            with self.assertLogs("coursemgr.scan", level="WARNING") as logs:
                mapping = scan_courses(settings.root)
            self.assertEqual(mapping, {"Math": "S2"})
            self.assertIn("Math", logs.output[0])


if __name__ == "__main__":
    unittest.main()
