import unittest
import os
import sys
import numpy as np

# Ensure chordmap package is importable
sys.path.insert(0, os.getcwd())

from chordmap.chord_map import CHORD_DATA, HarmonicCell, get_column, iter_cells
from chordmap.constants import FunctionCategory
from chordmap.pitch import note_name, resolve_absolute
from chordmap.transpose import (
    chord_name,
    locate_chord,
    resolve_cell,
    resolve_chord_map,
    transpose_key,
)

def _names(key):
    return [resolve_cell(cell, key).display_name for _, _, cell in iter_cells()]


class TestResolveCell(unittest.TestCase):
    def test_subdominant_major_seventh_in_c(self):
        resolved = resolve_cell(HarmonicCell(5, "maj7"), 0)
        self.assertEqual(resolved.absolute_root, 5)
        self.assertEqual(resolved.display_name, "Fmaj7")
        self.assertEqual(list(resolved.intervals), ["R", "3", "5", "7"])
        self.assertEqual(resolved.semitones, (0, 4, 7, 11))
        self.assertIsNone(resolved.bass_note)
        self.assertEqual(resolved.roman_numeral, "IVmaj7")

    def test_slash_chord_in_c(self):
        resolved = resolve_cell(HarmonicCell(7, "", bass_offset=5), 0)
        self.assertEqual(resolved.display_name, "G/F")
        self.assertEqual(resolved.bass_note, 5)

    def test_slash_numeral_names_upper_structure(self):
        self.assertEqual(resolve_cell(HarmonicCell(7, "", bass_offset=5), 0).roman_numeral, "V")
        cadd2_over_e = resolve_cell(get_column("iii").cells[7], 0)
        self.assertEqual(cadd2_over_e.display_name, "Cadd2/E")
        self.assertEqual(cadd2_over_e.roman_numeral, "Iadd2")
        self.assertEqual(cadd2_over_e.bass_note, 4)

    def test_transpose_up_one(self):
        key = transpose_key(0, 1)
        self.assertEqual(key, 1)
        resolved = resolve_cell(HarmonicCell(5, "maj7"), key)
        self.assertEqual(resolved.absolute_root, 6)
        self.assertEqual(resolved.display_name, "F#maj7")

    def test_transpose_down_from_c(self):
        self.assertEqual(transpose_key(0, -1), 11)

    def test_offsets_are_normalized(self):
        a = resolve_cell(HarmonicCell(17, "7", bass_offset=-1), 0)
        b = resolve_cell(HarmonicCell(5, "7", bass_offset=11), 0)
        self.assertEqual(a.display_name, b.display_name)
        self.assertEqual(a.display_name, "F7/B")

    def test_keeps_cell_metadata(self):
        cell = get_column("vi").cells[21]  # Eb7 in C
        resolved = resolve_cell(cell, 0)
        self.assertEqual(resolved.display_name, "D#7")
        self.assertEqual(resolved.category, FunctionCategory.TRITONE_SUB)
        self.assertEqual(resolved.roman_numeral, "bIII7")
        self.assertTrue(resolved.confident)

    def test_chord_name(self):
        self.assertEqual(chord_name(0, 7, "", 5), "G/F")
        self.assertEqual(chord_name(2, 7, "7"), "A7")


class TestTransposition(unittest.TestCase):
    def test_round_trip(self):
        original = _names(0)
        for n in range(-13, 14):
            up = transpose_key(0, n)
            back = transpose_key(up, -n)
            self.assertEqual(_names(back), original, f"n={n}")

    def test_every_key_differs(self):
        self.assertEqual(len({tuple(_names(k)) for k in range(12)}), 12)

    def test_slash_bass_stays_put(self):
        for key in range(12):
            for _, _, cell in iter_cells():
                if cell.bass_offset is None:
                    continue
                name = resolve_cell(cell, key).display_name
                self.assertEqual(name.count("/"), 1, name)
                bass = name.split("/")[1]
                self.assertEqual(bass, note_name(resolve_absolute(key, cell.bass_offset)))
                # Moving the root does not move the bass
                other = HarmonicCell(cell.root_offset + 1, cell.quality, bass_offset=cell.bass_offset)
                self.assertEqual(resolve_cell(other, key).display_name.split("/")[1], bass)

    def test_resolve_chord_map_preserves_layout(self):
        resolved = resolve_chord_map(2)
        self.assertEqual(len(resolved), 6)
        for resolved_column, column in zip(resolved, CHORD_DATA):
            self.assertIs(resolved_column.column, column)
            self.assertEqual(len(resolved_column.chords), len(column.cells))
        self.assertIsNone(resolved[0].chords[12])
        self.assertEqual(resolved[0].chords[0].display_name, "G")   # IV of D
        self.assertEqual(resolved[1].chords[1].display_name, "A7")  # V7 of D

    def test_static_table_untouched(self):
        before = [column.cells for column in CHORD_DATA]
        for key in range(12):
            resolve_chord_map(key)
        self.assertEqual([column.cells for column in CHORD_DATA], before)


class TestRenderingData(unittest.TestCase):
    def setUp(self):
        self.g_over_f = resolve_cell(HarmonicCell(7, "", bass_offset=5), 0)

    def test_pitch_classes_bass_first(self):
        self.assertEqual(self.g_over_f.pitch_classes, [5, 7, 11, 2])

    def test_pitch_class_vector(self):
        expected = np.zeros(12, dtype=np.float32)
        expected[[2, 5, 7, 11]] = 1.0
        np.testing.assert_array_equal(self.g_over_f.pitch_class_vector(), expected)

    def test_midi_notes(self):
        self.assertEqual(self.g_over_f.midi_notes(), [53, 67, 71, 74])
        fmaj7 = resolve_cell(HarmonicCell(5, "maj7"), 0)
        self.assertEqual(fmaj7.midi_notes(octave=3), [53, 57, 60, 64])

    def test_music21_chord(self):
        chord = self.g_over_f.to_music21_chord()
        self.assertEqual(sorted(p.midi for p in chord.pitches), [53, 67, 71, 74])

    def test_to_dict(self):
        d = resolve_cell(get_column("v").cells[13], 0).to_dict()
        self.assertEqual(d["display_name"], "G(b9)")
        self.assertEqual(d["intervals"], ["R", "3", "5", "b7", "b9"])
        self.assertEqual(d["category"], "SECONDARY_DOMINANT")
        self.assertEqual(d["style"], "COMMON")


class TestLocateChord(unittest.TestCase):
    def test_exact_match(self):
        self.assertEqual(locate_chord("G7", 0), [("v", 1, 1.0)])

    def test_enharmonic_spelling(self):
        self.assertEqual(locate_chord("Eb7", 0), [("vi", 21, 1.0)])
        self.assertEqual(locate_chord("D#7", 0), [("vi", 21, 1.0)])

    def test_nearest_by_pitch_content(self):
        # Dm7 is not on the map, but F6 has the same notes
        results = locate_chord("Dm7", 0)
        self.assertEqual(results[0][:2], ("iv", 11))
        self.assertAlmostEqual(results[0][2], 1.0, places=3)

    def test_not_a_chord(self):
        self.assertEqual(locate_chord("nonsense", 0), [])

if __name__ == "__main__":
    unittest.main()
