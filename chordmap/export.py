import argparse
import json
import os

from .constants import KEYS
from .pitch import key_label, normalize, note_name
from .transpose import resolve_chord_map


def chord_map_as_dict(key):
    """JSON-ready view of the whole map in one key (any integer, folded to 0-11)."""
    key = normalize(key)
    columns = []
    for resolved_column in resolve_chord_map(key):
        column = resolved_column.column
        columns.append({
            "id": column.id,
            "label": column.label,
            "degree": column.degree,
            "description": column.description,
            "cells": [None if chord is None else chord.to_dict() for chord in resolved_column.chords],
        })
    return {"key": key, "key_label": key_label(key), "columns": columns}


def export_all_keys(output_dir):
    """
    Resolves the chord map in all 12 keys and saves each as JSON.
    Returns the list of written paths.
    """
    os.makedirs(output_dir, exist_ok=True)
    written = []
    for option in KEYS:
        # Sharps are not filename-friendly
        name = note_name(option.value).replace("#", "sharp")
        output_path = os.path.join(output_dir, f"chord_map_{option.value:02d}_{name}.json")
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(chord_map_as_dict(option.value), f, indent=2, ensure_ascii=False)
        except OSError as e:
            print(f"[export] Error saving key {option.label}: {e}")
            continue
        print(f"[export] Saved {output_path}")
        written.append(output_path)
    return written


def main():
    parser = argparse.ArgumentParser(description='Export the chord map in all 12 keys as JSON.')
    parser.add_argument('output_dir', type=str, help='Directory to save the JSON files')
    args = parser.parse_args()

    export_all_keys(args.output_dir)

if __name__ == "__main__":
    main()
