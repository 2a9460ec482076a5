import unittest

from sheetcompare.diagnostics import Diagnostics, UnresolvedMapping
from sheetcompare.match import match_columns
from sheetcompare.models import HeaderIndex, ResolvedMatch, UnresolvedMatch


class MatchTests(unittest.TestCase):
    def test_missing_target_leaves_placeholder(self):
        header1 = HeaderIndex([("A", 0), ("B", 1)])
        header2 = HeaderIndex([("X", 0)])
        diagnostics = Diagnostics()
        out = match_columns(header1, header2, {"A": "X", "B": "Z"}, diagnostics)

        self.assertEqual(len(out), 2)
        self.assertEqual(out[0], ResolvedMatch(1, "A", "X", 0, 0))
        self.assertIsInstance(out[1], UnresolvedMatch)
        self.assertEqual(out[1].tag_id, 2)
        self.assertFalse(out[1].missing_source)
        self.assertTrue(out[1].missing_target)
        self.assertEqual(diagnostics.unresolved(), [UnresolvedMapping(out[1])])

    def test_order_follows_mapping_not_headers(self):
        header1 = HeaderIndex([("A", 0), ("B", 1), ("C", 2)])
        header2 = HeaderIndex([("x", 0), ("y", 1), ("z", 2)])
        out = match_columns(header1, header2, {"C": "x", "Missing": "y", "A": "z"})
        self.assertEqual([m.tag_id for m in out], [1, 2, 3])
        self.assertEqual([m.source_name for m in out], ["C", "Missing", "A"])
        self.assertEqual((out[0].source_index, out[0].target_index), (2, 0))
        self.assertTrue(out[1].missing_source)
        self.assertEqual((out[2].source_index, out[2].target_index), (0, 2))

    def test_unresolved_logs_warning(self):
        with self.assertLogs("sheetcompare.diagnostics", level="WARNING") as logs:
            match_columns(HeaderIndex(), HeaderIndex(), {"A": "X"})
        self.assertIn("'A' in file 1", logs.output[0])
        self.assertIn("'X' in file 2", logs.output[0])

    def test_empty_mapping(self):
        self.assertEqual(match_columns(HeaderIndex([("A", 0)]), HeaderIndex([("A", 0)]), {}), [])


if __name__ == "__main__":
    unittest.main()
