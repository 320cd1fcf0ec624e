"""
The chord map: six functional columns of key-relative chord cells.

Every cell is written relative to the tonic (root_offset 5 = the IV chord), so
one table serves all 12 keys. Cells are immutable; chordmap.transpose derives
the concrete chords for a key on demand.
"""
from dataclasses import dataclass
from typing import Optional

from .constants import ChordStyle, FunctionCategory


@dataclass(frozen=True)
class HarmonicCell:
    root_offset: int
    quality: str
    style: ChordStyle = ChordStyle.NORMAL
    category: FunctionCategory = FunctionCategory.NONE
    bass_offset: Optional[int] = None

    @property
    def is_slash(self) -> bool:
        return self.bass_offset is not None


@dataclass(frozen=True)
class Column:
    id: str
    label: str
    degree: str
    description: str
    cells: tuple  # HarmonicCell | None; None is an intentional gap


def _c(root_offset, quality, style=ChordStyle.NORMAL, category=FunctionCategory.NONE,
       bass_offset=None):
    return HarmonicCell(root_offset, quality, style, category, bass_offset)


N, C, T = ChordStyle.NORMAL, ChordStyle.COMMON, ChordStyle.TENSION
NONE = FunctionCategory.NONE
SEC = FunctionCategory.SECONDARY_DOMINANT
SUB = FunctionCategory.TRITONE_SUB
MOD = FunctionCategory.MODAL_INTERCHANGE
DIM = FunctionCategory.DIMINISHED_SUB

# Comments give the chord in the key of C.

COLUMN_IV = Column("iv", "IV", "Subdominant", "Development", (
    _c(5, "", N),                       # F
    _c(5, "maj7", C),                   # Fmaj7
    _c(5, "maj9", C),
    _c(5, "maj13", T),
    _c(5, "maj7(#11)", T),
    _c(5, "maj9(#11)", T),
    _c(5, "maj13(#11)", N),
    _c(5, "6/9", N),
    _c(7, "", N, NONE, 5),              # G/F
    _c(5, "add2/9", N),
    _c(5, "sus2", N),
    _c(5, "6", N),
    None,
    _c(6, "dim", C, DIM),               # F#dim, leading into G
    _c(6, "m7(b5)", C, SEC),
    _c(2, "", C, SEC, 6),               # D/F#
    _c(2, "7", C, SEC, 6),              # D7/F#
))

COLUMN_V = Column("v", "V", "Dominant", "Tension", (
    _c(7, "", N),                       # G
    _c(7, "7", C),
    _c(7, "9", C),
    _c(7, "11", C),
    _c(7, "13", T),
    _c(7, "13sus", T),
    _c(5, "", C, NONE, 7),              # F/G
    _c(5, "maj7", T, NONE, 7),          # Fmaj7/G
    _c(7, "add2/9", N),
    _c(7, "sus2", N),
    _c(7, "sus4", C),
    _c(7, "7sus4", C),
    _c(7, "(#5)", N),
    _c(7, "(b9)", C, SEC),
    _c(7, "sus4(b9)", T, SEC),
    _c(5, "m", T, MOD, 7),              # Fm/G
    _c(7, "11(b9)", T),
    _c(7, "13(b9)", T),
    _c(7, "13sus(b9)", T),
    _c(7, "7(b9b13)", T),
    _c(7, "9(#11)", T),
    _c(7, "13(#11)", N),
    _c(7, "13(b9#11)", N),
    _c(7, "7(#5#9)", N),
    _c(7, "7(#5b9)", N),
    _c(7, "9(b13)", N),
))

COLUMN_III = Column("iii", "iii", "Mediant", "Bridge/Ext", (
    _c(4, "m", N),                      # Em
    _c(4, "m7", C),
    _c(4, "m9", T),
    _c(4, "m11", T),
    _c(4, "m7(add11)", T),
    _c(4, "m7(b5)", C, SEC),            # Em7(b5), ii of A7
    _c(0, "", C, NONE, 4),              # C/E
    _c(0, "add2", C, NONE, 4),          # Cadd2/E
    _c(4, "", C, SEC),                  # E
    _c(4, "7", C, SEC),
    _c(4, "7sus4", C, SEC),
    _c(4, "7(#5)", T, SEC),
    _c(4, "7(#9)", T, SEC),
    _c(4, "7(b9)", T, SEC),
    _c(4, "7(#5#9)", T, SEC),
    _c(4, "7(#5b9)", T, SEC),
))

COLUMN_PASS1 = Column("pass1", "Pass", "V/V", "Approach V", (
    _c(2, "", N, NONE, 6),              # D/F#
    _c(2, "7", N, NONE, 6),             # D7/F#
    _c(6, "dim", N, DIM),               # F#dim
    _c(6, "dim7", N, DIM),
    _c(6, "m7(b5)", N, SEC),
))

COLUMN_PASS2 = Column("pass2", "Pass", "V/vi", "Approach vi", (
    _c(4, "", C, SEC, 8),               # E/G#
    _c(4, "7", C, SEC, 8),              # E7/G#
    _c(8, "dim", N, DIM),               # G#dim
    _c(8, "dim7", N, DIM),
))

COLUMN_VI = Column("vi", "vi", "Submediant", "Resolution", (
    _c(9, "m", N),                      # Am
    _c(9, "m7", C),
    _c(9, "m9", T),
    _c(9, "m11", T),
    _c(9, "m7(add11)", N),
    _c(7, "", C, NONE, 9),              # G/A
    _c(9, "7", C, SEC),                 # A7, V of ii
    _c(9, "9", N, SEC),
    _c(9, "11", N, SEC),
    _c(9, "13", T, SEC),
    _c(9, "7(b9)", T, SEC),
    _c(9, "11(b9)", N, SEC),
    _c(9, "13(b9)", N, SEC),
    _c(9, "7(b9b13)", T, SEC),
    _c(9, "7(#5)", C, SEC),
    _c(9, "7(#9)", N, SEC),
    _c(9, "7(#5#9)", N, SEC),
    _c(9, "7(#5b9)", T, SEC),
    _c(9, "9(#11)", T, SEC),
    _c(9, "7(b9#11)", T, SEC),
    _c(3, "6", C, SUB),                 # Eb6
    _c(3, "7", N, SUB),                 # Eb7
    _c(3, "9", T, SUB),
    _c(3, "11", N, SUB),
    _c(3, "13", T, SUB),
))

CHORD_DATA: tuple[Column, ...] = (
    COLUMN_IV, COLUMN_V, COLUMN_III, COLUMN_PASS1, COLUMN_PASS2, COLUMN_VI,
)


def get_column(column_id: str) -> Column:
    """Look up a column by id ("iv", "v", "iii", "pass1", "pass2", "vi")."""
    for column in CHORD_DATA:
        if column.id == column_id:
            return column
    raise ValueError(f"Unknown column id: {column_id!r}")


def iter_cells(columns=CHORD_DATA):
    """Yield (column, index, cell) for every non-empty cell, in display order."""
    for column in columns:
        for index, cell in enumerate(column.cells):
            if cell is not None:
                yield column, index, cell
