import collections
from enum import Enum

# ── Key table ─────────────────────────────────────────────────────────────────

KeyOption = collections.namedtuple("KeyOption", ["label", "value"])

# The only place key labels are spelled out. Everything that needs a note or
# key name for a pitch class goes through this table (see chordmap.pitch).
KEYS: tuple[KeyOption, ...] = (
    KeyOption("C", 0),
    KeyOption("C# / Db", 1),
    KeyOption("D", 2),
    KeyOption("D# / Eb", 3),
    KeyOption("E", 4),
    KeyOption("F", 5),
    KeyOption("F# / Gb", 6),
    KeyOption("G", 7),
    KeyOption("G# / Ab", 8),
    KeyOption("A", 9),
    KeyOption("A# / Bb", 10),
    KeyOption("B", 11),
)

# ── Pitch-class lookup tables ─────────────────────────────────────────────────

_NOTE_TO_PC: dict[str, int] = {
    "C": 0,  "C#": 1,  "Db": 1,  "D": 2,  "D#": 3,  "Eb": 3,
    "E": 4,  "F": 5,   "F#": 6,  "Gb": 6, "G": 7,   "G#": 8,
    "Ab": 8, "A": 9,   "A#": 10, "Bb": 10, "B": 11,
    # Enharmonic edge spellings that show up in AI replies
    "Cb": 11, "B#": 0, "Fb": 4, "E#": 5,
}
# Chromatic degree above tonic → (MAJOR roman, minor roman)
_DEGREE_NAMES: dict[int, tuple[str, str]] = {
    0:  ("I",    "i"),
    1:  ("bII",  "bii"),
    2:  ("II",   "ii"),
    3:  ("bIII", "biii"),
    4:  ("III",  "iii"),
    5:  ("IV",   "iv"),
    6:  ("#IV",  "#iv"),
    7:  ("V",    "v"),
    8:  ("#V",   "#v"),
    9:  ("VI",   "vi"),
    10: ("bVII", "bvii"),
    11: ("VII",  "vii"),
}

NOTES_PER_OCTAVE = 12

# ── Cell metadata ─────────────────────────────────────────────────────────────


class ChordStyle(str, Enum):
    """Visual weight of a cell. Carries no harmonic meaning."""
    NORMAL = "NORMAL"
    COMMON = "COMMON"    # red background
    TENSION = "TENSION"  # black background
    SPECIAL = "SPECIAL"


class FunctionCategory(str, Enum):
    """Harmonic role of a cell relative to the key centre, set by hand in the table."""
    NONE = "NONE"
    SECONDARY_DOMINANT = "SECONDARY_DOMINANT"  # pink border
    TRITONE_SUB = "TRITONE_SUB"                # green border
    MODAL_INTERCHANGE = "MODAL_INTERCHANGE"    # blue border
    DIMINISHED_SUB = "DIMINISHED_SUB"          # orange border


# ── Columns & languages ───────────────────────────────────────────────────────

COLUMN_IDS: tuple[str, ...] = ("iv", "v", "iii", "pass1", "pass2", "vi")

LANGUAGES: tuple[str, ...] = ("en", "zh-HK", "zh-CN", "ja", "ko")
DEFAULT_LANGUAGE = "en"

# Playback speed toggle order: 1x → 0.5x → 2x → 1x
PLAYBACK_SPEEDS: tuple[float, ...] = (1.0, 0.5, 2.0)
