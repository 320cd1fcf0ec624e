import unittest
import json
import os
import sys
import tempfile
from unittest.mock import patch

# Ensure chordmap package is importable
sys.path.insert(0, os.getcwd())

from chordmap.export import chord_map_as_dict, export_all_keys

class TestExport(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_chord_map_as_dict(self):
        data = chord_map_as_dict(3)
        self.assertEqual(data["key_label"], "D# / Eb")
        self.assertEqual([c["id"] for c in data["columns"]], ["iv", "v", "iii", "pass1", "pass2", "vi"])
        self.assertIsNone(data["columns"][0]["cells"][12])
        self.assertEqual(data["columns"][0]["cells"][0]["display_name"], "G#")

    def test_out_of_range_key_wraps(self):
        self.assertEqual(chord_map_as_dict(12), chord_map_as_dict(0))
        data = chord_map_as_dict(-1)
        self.assertEqual(data["key"], 11)
        self.assertEqual(data["key_label"], "B")

    def test_writes_all_keys(self):
        with patch("builtins.print"):
            written = export_all_keys(self.tmp.name)
        self.assertEqual(len(written), 12)
        names = sorted(os.listdir(self.tmp.name))
        self.assertIn("chord_map_01_Csharp.json", names)
        self.assertIn("chord_map_07_G.json", names)

        with open(os.path.join(self.tmp.name, "chord_map_07_G.json"), encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["key"], 7)
        self.assertEqual(data["columns"][1]["cells"][0]["display_name"], "D")

    def test_write_errors_are_reported(self):
        with patch("builtins.open", side_effect=OSError("disk full")), \
             patch("builtins.print") as mock_print:
            written = export_all_keys(self.tmp.name)
        self.assertEqual(written, [])
        messages = [call.args[0] for call in mock_print.call_args_list]
        self.assertTrue(all(m.startswith("[export] Error saving key") for m in messages))
        self.assertEqual(len(messages), 12)

if __name__ == "__main__":
    unittest.main()
