import collections
import functools
import re

from .pitch import note_to_pc

# Interval name → semitones above the chord root. Extensions stay compound
# (9 = 14) so a chord always reads root-to-top in ascending order.
INTERVAL_SEMITONES: dict[str, int] = {
    "R": 0,   "b2": 1,  "2": 2,   "b3": 3,  "3": 4,   "4": 5,
    "b5": 6,  "5": 7,   "#5": 8,  "b6": 8,  "6": 9,   "bb7": 9,
    "b7": 10, "7": 11,
    "b9": 13, "9": 14,  "#9": 15, "11": 17, "#11": 18, "b13": 20, "13": 21,
}

# Known qualities, spelled as interval names from the root upwards.
_QUALITY_FORMULAS: dict[str, str] = {
    # Triads and friends
    "":           "R 3 5",
    "m":          "R b3 5",
    "dim":        "R b3 b5",
    "aug":        "R 3 #5",
    "+":          "R 3 #5",
    "(#5)":       "R 3 #5",
    "5":          "R 5",
    "sus2":       "R 2 5",
    "sus4":       "R 4 5",
    "sus":        "R 4 5",
    "add2":       "R 2 3 5",
    "add9":       "R 3 5 9",
    "add2/9":     "R 3 5 9",
    "m(add9)":    "R b3 5 9",
    "6":          "R 3 5 6",
    "m6":         "R b3 5 6",
    "6/9":        "R 3 5 6 9",
    # Major sevenths
    "maj7":       "R 3 5 7",
    "maj9":       "R 3 5 7 9",
    "maj13":      "R 3 5 7 9 13",
    "maj7(#11)":  "R 3 5 7 #11",
    "maj9(#11)":  "R 3 5 7 9 #11",
    "maj13(#11)": "R 3 5 7 9 #11 13",
    # Minor sevenths
    "m7":         "R b3 5 b7",
    "m9":         "R b3 5 b7 9",
    "m11":        "R b3 5 b7 9 11",
    "m7(add11)":  "R b3 5 b7 11",
    "m(maj7)":    "R b3 5 7",
    "m7(b5)":     "R b3 b5 b7",
    "m7b5":       "R b3 b5 b7",
    "dim7":       "R b3 b5 bb7",
    # Dominants
    "7":          "R 3 5 b7",
    "9":          "R 3 5 b7 9",
    "11":         "R 5 b7 9 11",
    "13":         "R 3 5 b7 9 13",
    "7sus4":      "R 4 5 b7",
    "13sus":      "R 4 5 b7 9 13",
    "7(b5)":      "R 3 b5 b7",
    "7(#5)":      "R 3 #5 b7",
    "(b9)":       "R 3 5 b7 b9",
    "7(b9)":      "R 3 5 b7 b9",
    "7(#9)":      "R 3 5 b7 #9",
    "sus4(b9)":   "R 4 5 b7 b9",
    "11(b9)":     "R 5 b7 b9 11",
    "13(b9)":     "R 3 5 b7 b9 13",
    "13sus(b9)":  "R 4 5 b7 b9 13",
    "7(b9b13)":   "R 3 5 b7 b9 b13",
    "9(#11)":     "R 3 5 b7 9 #11",
    "9(b13)":     "R 3 5 b7 9 b13",
    "13(#11)":    "R 3 5 b7 9 #11 13",
    "13(b9#11)":  "R 3 5 b7 b9 #11 13",
    "7(b9#11)":   "R 3 5 b7 b9 #11",
    "7(#5#9)":    "R 3 #5 b7 #9",
    "7(#5b9)":    "R 3 #5 b7 b9",
}

ChordSymbol = collections.namedtuple("ChordSymbol", ["semitones", "interval_names", "confident"])

POWER_CHORD = ChordSymbol((0, 7), ("R", "5"), False)


def _symbol_from_names(names, confident):
    """Order names by pitch, dropping any that land on an already used semitone."""
    seen = set()
    ordered = []
    for name in sorted(names, key=INTERVAL_SEMITONES.__getitem__):
        semitone = INTERVAL_SEMITONES[name]
        if semitone in seen:
            continue
        seen.add(semitone)
        ordered.append(name)
    return ChordSymbol(
        tuple(INTERVAL_SEMITONES[n] for n in ordered), tuple(ordered), confident
    )


KNOWN_QUALITIES: dict[str, ChordSymbol] = {
    quality: _symbol_from_names(formula.split(), True)
    for quality, formula in _QUALITY_FORMULAS.items()
}

# ── Fallback heuristic ────────────────────────────────────────────────────────

_PAREN_RE = re.compile(r"\(([^)]*)\)")
_BASE_TOKEN_RE = re.compile(
    r"maj|min|dim|aug|sus[24]?|add|m|M|\+|o|ø|6/9|13|11|9|7|6|5|4|2|[b#](?:13|11|9|6|5)"
)
_ALTERATION_RE = re.compile(r"(add)?([b#]?)(13|11|9|7|6|5|4|2)")


def _stack_extensions(degrees, top, seventh):
    degrees[7] = seventh
    if top >= 9:
        degrees[9] = "9"
    if top == 11:
        degrees[11] = "11"
    if top == 13:
        degrees[13] = "13"


def _parse_base(base, degrees):
    """Apply base-suffix tokens (before any parentheses). False if unreadable."""
    tokens = _BASE_TOKEN_RE.findall(base)
    if "".join(tokens) != base:
        return False

    major_seventh = diminished = adding = False
    for tok in tokens:
        if tok in ("maj", "M"):
            major_seventh = True
        elif tok in ("m", "min"):
            degrees[3] = "b3"
        elif tok in ("dim", "o"):
            degrees[3], degrees[5] = "b3", "b5"
            diminished = True
        elif tok == "ø":
            degrees[3], degrees[5], degrees[7] = "b3", "b5", "b7"
        elif tok in ("aug", "+"):
            degrees[5] = "#5"
        elif tok.startswith("sus"):
            degrees.pop(3, None)
            if tok == "sus2":
                degrees[2] = "2"
            else:
                degrees[4] = "4"
        elif tok == "add":
            adding = True
            continue
        elif tok == "6/9":
            degrees[6], degrees[9] = "6", "9"
        elif tok[0] in "b#":
            degrees[int(tok[1:])] = tok
        else:
            n = int(tok)
            if adding or n in (2, 6):
                degrees[n] = tok
            elif n == 4:
                degrees.pop(3, None)
                degrees[4] = "4"
            elif n == 5:
                degrees.pop(3, None)
            else:
                seventh = "7" if major_seventh else ("bb7" if diminished else "b7")
                _stack_extensions(degrees, n, seventh)
        adding = False
    return True


def _parse_alterations(text, degrees):
    """Apply parenthesised alterations such as "b9#11" or "add#9"."""
    text = re.sub(r"[\s,]", "", text)
    matches = list(_ALTERATION_RE.finditer(text))
    if "".join(m.group(0) for m in matches) != text:
        return False
    for m in matches:
        accidental, number = m.group(2), int(m.group(3))
        degrees[number] = accidental + m.group(3)
    return True


def _heuristic_symbol(quality):
    """Best-effort reading of an unknown quality; None if no safe reading exists."""
    degrees = {1: "R", 3: "3", 5: "5"}
    base = _PAREN_RE.sub("", quality).strip()
    if not _parse_base(base, degrees):
        return None
    for group in _PAREN_RE.findall(quality):
        if not _parse_alterations(group, degrees):
            return None
    if any(name not in INTERVAL_SEMITONES for name in degrees.values()):
        return None
    return _symbol_from_names(degrees.values(), False)


# Unknown qualities can come from AI replies, so this cache is bounded
@functools.lru_cache(maxsize=256)
def _resolve_unknown(quality):
    return _heuristic_symbol(quality) or POWER_CHORD


def resolve_quality(quality):
    """
    Intervals of a chord quality, measured from the chord root.

    Args:
        quality (str): Chord suffix, e.g. "maj7(#11)", "m7(b5)", "13sus(b9)".

    Returns:
        ChordSymbol(semitones, interval_names, confident). Known qualities come
        from the table with confident=True. Anything else goes through a
        heuristic and, failing that, falls back to a bare root + fifth; both of
        those paths return confident=False and should only be used for display.
    """
    quality = (quality or "").strip()
    symbol = KNOWN_QUALITIES.get(quality)
    if symbol is None:
        symbol = _resolve_unknown(quality)
    return symbol


# ── Full chord names ──────────────────────────────────────────────────────────

_CHORD_NAME_RE = re.compile(r"^([A-G][#b]?)(.*?)(?:/([A-G][#b]?))?$")


def parse_chord_name(chord_name):
    """
    Split a chord symbol into (root_pc, quality, bass_pc).

        "F#m7(b5)" -> (6, "m7(b5)", None)
        "D7/F#"    -> (2, "7", 6)
        "C6/9"     -> (0, "6/9", None)

    Returns None when the string does not start with a note name.
    """
    if not chord_name:
        return None
    match = _CHORD_NAME_RE.match(chord_name.strip())
    if not match:
        return None
    root_pc = note_to_pc(match.group(1))
    if root_pc is None:
        return None
    bass_pc = note_to_pc(match.group(3)) if match.group(3) else None
    return root_pc, match.group(2), bass_pc
