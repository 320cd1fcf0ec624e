"""
Pitch-class arithmetic and note naming.

Every name produced here comes from the KEYS table in chordmap.constants, so
the key selector, chord symbols and AI prompts can never disagree on spelling.
"""
import numpy as np

from .constants import KEYS, NOTES_PER_OCTAVE, _DEGREE_NAMES, _NOTE_TO_PC


def normalize(n: int) -> int:
    """Fold any integer into a pitch class 0-11 (negative values included)."""
    return ((n % NOTES_PER_OCTAVE) + NOTES_PER_OCTAVE) % NOTES_PER_OCTAVE


def resolve_absolute(tonic: int, offset: int) -> int:
    """Absolute pitch class of a note `offset` semitones above `tonic`."""
    return normalize(tonic + offset)


def transpose_key(current_key: int, delta_semitones: int) -> int:
    """Move the key by any signed number of semitones."""
    return normalize(current_key + delta_semitones)


def key_label(pitch_class: int) -> str:
    """Full key label, enharmonic pair included (e.g. "C# / Db")."""
    return KEYS[normalize(pitch_class)].label


def note_name(pitch_class: int) -> str:
    """Note name used inside chord symbols: the first spelling of the key label."""
    return key_label(pitch_class).split(" / ")[0]


def note_to_pc(name):
    """Map a note name (e.g., 'C', 'F#', 'Gb') to its pitch class (0-11), or None."""
    if not name:
        return None
    name = name.strip()
    return _NOTE_TO_PC.get(name[0].upper() + name[1:])


def key_from_label(label):
    """
    Resolve a key given as a KEYS label ("A# / Bb"), a single spelling ("Bb")
    or an integer index. Returns None when nothing matches.
    """
    if isinstance(label, int):
        return normalize(label)
    label = str(label).strip()
    for option in KEYS:
        if option.label.lower() == label.lower():
            return option.value
    if label.lstrip("-").isdigit():
        return normalize(int(label))
    return note_to_pc(label)


def degree_name(offset: int, quality: str = "") -> str:
    """
    Chromatic Roman numeral for a root offset above the tonic.

    Minor and diminished qualities get the lower-case numeral; the quality
    string is appended unchanged except for a leading minor marker.
        degree_name(3, "7")      -> "bIII7"
        degree_name(9, "m7")     -> "vi7"
        degree_name(6, "m7(b5)") -> "#iv7(b5)"
    """
    major, minor = _DEGREE_NAMES[normalize(offset)]
    if quality.startswith("dim"):
        return minor + quality
    if quality.startswith("m") and not quality.startswith("maj"):
        return minor + quality[1:]
    return major + quality


def pitch_class_vector(pitch_classes):
    """12-element multi-hot float32 vector with 1.0 at every given pitch class."""
    v = np.zeros(NOTES_PER_OCTAVE, dtype=np.float32)
    for pc in pitch_classes:
        v[normalize(pc)] = 1.0
    return v
