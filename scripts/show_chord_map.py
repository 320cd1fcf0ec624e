#!/usr/bin/env python3
"""
scripts/show_chord_map.py: print the chord map for a key and look up chord info.

Usage (from project root):
    python scripts/show_chord_map.py --key Eb
    python scripts/show_chord_map.py --key C --transpose -1 --lang ja
    python scripts/show_chord_map.py --search 7(b9)
    python scripts/show_chord_map.py --info 1 --column v --mock
    python scripts/show_chord_map.py --export out/
    python scripts/show_chord_map.py --config configs/config.yaml --info 0 --column vi
"""
import argparse
import asyncio
import os
import sys

# Ensure chordmap package is importable
_HERE = os.path.dirname(os.path.abspath(__file__))
_ROOT = os.path.dirname(_HERE)
sys.path.insert(0, _ROOT)

from chordmap.advisor import ChordAnalysis, ChordSubstitution, ChordVoicing, GeminiChordAdvisor
from chordmap.categories import category_label
from chordmap.chord_info import ChordInfoController
from chordmap.config import DEFAULT_CONFIG_PATH, load_config
from chordmap.constants import LANGUAGES, ChordStyle
from chordmap.export import export_all_keys
from chordmap.pitch import key_from_label
from chordmap.session import ChordMapSession

# ── ANSI colours ────────────────────────────────────────────────────────────
RED    = "\033[91m"
DIM    = "\033[2m"
CYAN   = "\033[96m"
BOLD   = "\033[1m"
RESET  = "\033[0m"

_STYLE_COLOURS = {
    ChordStyle.NORMAL: "",
    ChordStyle.COMMON: RED,
    ChordStyle.TENSION: BOLD,
    ChordStyle.SPECIAL: CYAN,
}


class MockChordAdvisor:
    """Canned advisor replies so the CLI can run without an API key."""

    async def explain(self, request):
        return ChordAnalysis(
            usage=f"{request.chord_name} works as {request.context} in {request.key_label}.",
            feeling="Warm, with a pull towards the next chord.",
        )

    async def substitutions(self, request):
        return [ChordSubstitution(chord=request.chord_name, description="Same chord (mock)")]

    async def voicing(self, request):
        return ChordVoicing(frets=[-1, 3, 2, 0, 1, 0], base_fret=1)


def print_chord_map(session, colour=True):
    print(f"{BOLD if colour else ''}Key: {session.key_label} major{RESET if colour else ''}")
    for resolved_column in session.columns():
        header = session.column_display(resolved_column.column.id)
        print(f"\n── {header['label']}  {header['degree']}  ({header['desc']}) ──")
        for index, chord in enumerate(resolved_column.chords):
            if chord is None:
                print("   ----")
                continue
            if not session.matches_search(chord):
                continue
            cell = resolved_column.column.cells[index]
            badge = category_label(cell, session.language, full=False)
            start = _STYLE_COLOURS[chord.style] if colour else ""
            end = RESET if colour and start else ""
            line = f"   {index:>2}  {start}{chord.display_name:<16}{end} {chord.roman_numeral:<14}"
            line += " ".join(chord.intervals)
            if badge:
                line += f"  [{badge}]"
            print(line)


def print_chord_info(info):
    print(f"\n{info.title}  -  {info.subtitle}")
    if info.category:
        print(f"  Category  : {info.category}")
    print(f"  Intervals : {' '.join(info.intervals)}")
    print(f"  Semitones : {info.semitones}")
    if info.analysis:
        print(f"  Usage     : {info.analysis.usage}")
        print(f"  Feeling   : {info.analysis.feeling}")
    if info.substitutions:
        for sub in info.substitutions:
            numeral = f" ({sub.roman_numeral})" if sub.roman_numeral else ""
            print(f"  Sub       : {sub.chord}{numeral}: {sub.description}")
    if info.voicing:
        frets = " ".join("x" if f < 0 else str(f) for f in info.voicing.frets)
        print(f"  Voicing   : {frets} (base fret {info.voicing.base_fret})")
    for name, message in info.errors.items():
        print(f"  {name} unavailable: {message}")


def main():
    parser = argparse.ArgumentParser(description='Print the chord map for a key.')
    parser.add_argument('--config', type=str, default=DEFAULT_CONFIG_PATH, help='YAML settings file')
    parser.add_argument('--key', type=str, default=None,
                        help='Key label, note name or index 0-11 (default: default_key from config)')
    parser.add_argument('--transpose', type=int, default=0, help='Semitones to transpose by')
    parser.add_argument('--lang', type=str, default=None, choices=LANGUAGES,
                        help='UI language (default: default_language from config)')
    parser.add_argument('--search', type=str, default='', help='Only show chords containing this text')
    parser.add_argument('--info', type=int, default=None, help='Cell index to open chord info for')
    parser.add_argument('--column', type=str, default='v', help='Column id for --info')
    parser.add_argument('--mock', action='store_true', help='Use canned advisor replies')
    parser.add_argument('--export', type=str, default=None, help='Write all 12 keys as JSON here')
    parser.add_argument('--no-colour', action='store_true')
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValueError as e:
        parser.error(str(e))

    key_arg = args.key if args.key is not None else config["default_key"]
    key = key_from_label(key_arg)
    if key is None:
        parser.error(f"unknown key {key_arg!r}")

    if args.export:
        export_all_keys(args.export)
        return

    try:
        session = ChordMapSession(key=key, language=args.lang or config["default_language"])
    except ValueError as e:
        parser.error(str(e))
    session.search_query = args.search
    if args.transpose:
        print(session.transpose(args.transpose))

    if args.info is None:
        print_chord_map(session, colour=not args.no_colour)
        return

    try:
        advisor = MockChordAdvisor() if args.mock else GeminiChordAdvisor(config=config)
        controller = ChordInfoController(session, advisor, timeout=float(config["request_timeout"]))
        info = asyncio.run(controller.show(args.column, args.info))
    except (ValueError, IndexError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    if info is not None:
        print_chord_info(info)

if __name__ == "__main__":
    main()
