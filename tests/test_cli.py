import os
import tempfile
import unittest

from openpyxl import Workbook, load_workbook

from sheetcompare.cli import build_results, load_config, run
from sheetcompare.errors import SourceUnavailable


def _write(path, rows):
    wb = Workbook()
    for row in rows:
        wb.active.append(row)
    wb.save(path)
    return path


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        self.source = _write(self._path("file.xlsx"), [["Id", "Amount"], [1, 10.5], [2, 20]])
        self.mapping = _write(self._path("mapping.xlsx"), [["Id", "Key"], ["Amount", "Total"]])
        self.out = self._path("reports", "mismatches.xlsx")

    def tearDown(self):
        self._tmp.cleanup()

    def _path(self, *parts):
        return os.path.join(self.tmp, *parts)

    def _args(self, target, *extra):
        return ["--source", self.source, "--target", target, "--mapping", self.mapping, "--out", self.out, *extra]

    def test_identical_writes_no_report(self):
        target = _write(self._path("target.xlsx"), [["Total", "Key"], [10.5, 1], [20, 2]])
        self.assertEqual(run(self._args(target)), 0)
        self.assertFalse(os.path.exists(self.out))

    def test_differences_write_report(self):
        target = _write(self._path("target.xlsx"), [["Key", "Total"], [1, 10.5], [2, 21]])
        self.assertEqual(run(self._args(target)), 1)
        rows = [[c.value for c in row] for row in load_workbook(self.out).active.iter_rows()]
        self.assertEqual(rows, [
            ["Tag ID", "Field Name", "Value in File 1", "Value in File 2"],
            [2, "Amount", "20.0", "21.0"],
        ])

    def test_unresolved_mapping_is_not_identical(self):
        target = _write(self._path("target.xlsx"), [["Key", "Sum"], [1, 10.5], [2, 20]])
        result, diagnostics = build_results({}, self.source, target, self.mapping)
        self.assertFalse(result.identical)
        self.assertEqual(result.mismatches, [])
        self.assertEqual([e.match.target_name for e in diagnostics.unresolved()], ["Total"])
        self.assertEqual(run(self._args(target)), 1)
        self.assertTrue(os.path.exists(self.out))

    def test_mapping_header_row_from_config(self):
        mapping = _write(self._path("mapping2.xlsx"), [["File 1", "File 2"], ["Id", "Key"]])
        target = _write(self._path("target.xlsx"), [["Key"], [1], [2]])
        result, _ = build_results({"mapping": {"skip_header": True}}, self.source, target, mapping)
        self.assertTrue(result.identical)

    def test_missing_input_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            run(self._args(self._path("absent.xlsx")))
        self.assertIn("absent.xlsx", str(ctx.exception.code))
        self.assertFalse(os.path.exists(self.out))

    def test_malformed_header_exits(self):
        target = _write(self._path("target.xlsx"), [["Key", 2024], [1, 10.5]])
        with self.assertRaises(SystemExit) as ctx:
            run(self._args(target))
        self.assertIn("column 2", str(ctx.exception.code))

    def test_config_file(self):
        path = self._path("settings.yaml")
        with open(path, "w", encoding="utf-8") as file:
            file.write("report:\n  sheet_title: Diffs\n")
        self.assertEqual(load_config(path), {"report": {"sheet_title": "Diffs"}})
        self.assertEqual(load_config(None), {})
        with self.assertRaises(SourceUnavailable):
            load_config(self._path("missing.yaml"))


if __name__ == "__main__":
    unittest.main()
