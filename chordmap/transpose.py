"""
Transposition engine: turn key-relative cells into concrete chords.

Nothing here mutates the chord map. Changing key means calling
resolve_chord_map() again with the new tonic.
"""
import collections
from dataclasses import dataclass, asdict
from typing import Optional

import music21
import numpy as np

from .chord_map import CHORD_DATA, iter_cells
from .chord_symbols import parse_chord_name, resolve_quality
from .constants import ChordStyle, FunctionCategory, NOTES_PER_OCTAVE
from .pitch import (
    degree_name,
    normalize,
    note_name,
    pitch_class_vector,
    resolve_absolute,
    transpose_key,  # noqa: F401  re-exported for callers of the engine
)


@dataclass(frozen=True)
class ResolvedChord:
    absolute_root: int
    display_name: str
    intervals: tuple
    semitones: tuple
    bass_note: Optional[int] = None
    quality: str = ""
    roman_numeral: str = ""
    style: ChordStyle = ChordStyle.NORMAL
    category: FunctionCategory = FunctionCategory.NONE
    confident: bool = True

    @property
    def pitch_classes(self) -> list[int]:
        """Sounding pitch classes, bass first for slash chords, no repeats."""
        pcs = [] if self.bass_note is None else [self.bass_note]
        for s in self.semitones:
            pc = resolve_absolute(self.absolute_root, s)
            if pc not in pcs:
                pcs.append(pc)
        return pcs

    def pitch_class_vector(self):
        return pitch_class_vector(self.pitch_classes)

    def midi_notes(self, octave: int = 4) -> list[int]:
        """Close voicing with the root in `octave` (C4 = 60) and any slash bass below it."""
        base = (octave + 1) * NOTES_PER_OCTAVE
        root = base + self.absolute_root
        notes = [root + s for s in self.semitones]
        if self.bass_note is not None:
            notes.insert(0, base - NOTES_PER_OCTAVE + self.bass_note)
        return notes

    def to_music21_chord(self, octave: int = 4):
        """music21 Chord for staff notation."""
        pitches = []
        for midi in self.midi_notes(octave):
            p = music21.pitch.Pitch()
            p.midi = midi
            pitches.append(p)
        chord = music21.chord.Chord(pitches)
        chord.addLyric(self.display_name)
        return chord

    def to_dict(self) -> dict:
        d = asdict(self)
        d["intervals"] = list(self.intervals)
        d["semitones"] = list(self.semitones)
        d["style"] = self.style.value
        d["category"] = self.category.value
        return d


ResolvedColumn = collections.namedtuple("ResolvedColumn", ["column", "chords"])


def chord_name(key: int, root_offset: int, quality: str, bass_offset=None) -> str:
    """Absolute chord symbol for key-relative parts, e.g. (0, 7, "", 5) -> "G/F"."""
    name = note_name(resolve_absolute(key, root_offset)) + quality
    if bass_offset is not None:
        name += "/" + note_name(resolve_absolute(key, bass_offset))
    return name


def resolve_cell(cell, key: int) -> ResolvedChord:
    """
    Concrete chord for one cell in the given key (0 = C).

    roman_numeral describes the upper structure only: G/F in C is "V" and
    Cadd2/E is "Iadd2". The slash bass is carried separately in bass_note.
    """
    key = normalize(key)
    root_offset = normalize(cell.root_offset)
    bass_offset = None if cell.bass_offset is None else normalize(cell.bass_offset)
    symbol = resolve_quality(cell.quality)
    return ResolvedChord(
        absolute_root=resolve_absolute(key, root_offset),
        display_name=chord_name(key, root_offset, cell.quality, bass_offset),
        intervals=symbol.interval_names,
        semitones=symbol.semitones,
        bass_note=None if bass_offset is None else resolve_absolute(key, bass_offset),
        quality=cell.quality,
        roman_numeral=degree_name(root_offset, cell.quality),
        style=cell.style,
        category=cell.category,
        confident=symbol.confident,
    )


def resolve_column(column, key: int) -> ResolvedColumn:
    """Resolve every cell of a column; gaps stay None so positions line up."""
    chords = tuple(None if cell is None else resolve_cell(cell, key) for cell in column.cells)
    return ResolvedColumn(column, chords)


def resolve_chord_map(key: int, columns=CHORD_DATA) -> list[ResolvedColumn]:
    """The whole map for one key, derived fresh from the static table."""
    return [resolve_column(column, key) for column in columns]


def _same_chord(parsed, cell, key):
    root_pc, quality, bass_pc = parsed
    cell_bass = None if cell.bass_offset is None else resolve_absolute(key, cell.bass_offset)
    return (
        resolve_absolute(key, cell.root_offset) == root_pc
        and cell.quality == quality
        and cell_bass == bass_pc
    )


def locate_chord(chord_name_str: str, key: int, limit: int = 3, min_similarity: float = 0.85):
    """
    Find where a chord symbol sits on the map for `key`.

    Exact matches (same root, quality and bass, any spelling) are returned
    first with score 1.0. Otherwise cells are ranked by cosine similarity of
    their pitch-class vectors against the chord's, keeping those above
    `min_similarity`.

    Returns:
        list of (column_id, cell_index, score), best first.
    """
    parsed = parse_chord_name(chord_name_str)
    if parsed is None:
        return []

    exact = [
        (column.id, index, 1.0)
        for column, index, cell in iter_cells()
        if _same_chord(parsed, cell, key)
    ]
    if exact:
        return exact[:limit]

    root_pc, quality, bass_pc = parsed
    target = ResolvedChord(root_pc, chord_name_str, (), resolve_quality(quality).semitones, bass_pc)
    target_vector = target.pitch_class_vector()
    target_norm = np.linalg.norm(target_vector)
    if target_norm < 1e-6:
        return []

    scored = []
    for column, index, cell in iter_cells():
        vec = resolve_cell(cell, key).pitch_class_vector()
        score = float(np.dot(target_vector, vec) / (target_norm * np.linalg.norm(vec)))
        if score >= min_similarity:
            scored.append((column.id, index, round(score, 4)))
    scored.sort(key=lambda item: -item[2])
    return scored[:limit]
