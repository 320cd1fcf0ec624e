import collections

from .constants import DEFAULT_LANGUAGE, PLAYBACK_SPEEDS
from .pitch import key_from_label, key_label, normalize, transpose_key
from .transpose import resolve_chord_map
from .translations import check_language, column_display, translate

# What the user last opened; chord-info results are only kept if this still matches.
ChordSelection = collections.namedtuple("ChordSelection", ["chord_name", "column_id", "key"])


class ChordMapSession:
    """
    In-memory state of one browsing session.

    Usage:
        session = ChordMapSession()
        session.transpose(+2)            # now in D
        for resolved_column in session.columns():
            ...
    """

    def __init__(self, key=0, language=DEFAULT_LANGUAGE):
        resolved_key = key_from_label(key)
        if resolved_key is None:
            raise ValueError(f"Unknown key: {key!r}")
        self.key = resolved_key
        self.language = check_language(language)
        self.search_query = ""
        self.playlist: list[str] = []
        self.playback_speed = PLAYBACK_SPEEDS[0]
        self.selection = None

    # ── Key ──────────────────────────────────────────────────────────────────

    @property
    def key_label(self) -> str:
        return key_label(self.key)

    def set_key(self, key_index: int) -> int:
        self.key = normalize(key_index)
        return self.key

    def transpose(self, delta_semitones: int) -> str:
        """Move the key and return the localized feedback label ("Transposed up")."""
        self.key = transpose_key(self.key, delta_semitones)
        direction = "transpose.up" if delta_semitones > 0 else "transpose.down"
        return translate(self.language, direction)

    def columns(self):
        return resolve_chord_map(self.key)

    # ── Display ──────────────────────────────────────────────────────────────

    def set_language(self, language: str) -> None:
        self.language = check_language(language)

    def column_display(self, column_id: str) -> dict[str, str]:
        return column_display(column_id, self.language)

    def matches_search(self, resolved) -> bool:
        query = self.search_query.strip().lower()
        if not query:
            return True
        return query in resolved.display_name.lower()

    def cycle_playback_speed(self) -> float:
        i = PLAYBACK_SPEEDS.index(self.playback_speed)
        self.playback_speed = PLAYBACK_SPEEDS[(i + 1) % len(PLAYBACK_SPEEDS)]
        return self.playback_speed

    # ── Playlist ─────────────────────────────────────────────────────────────

    def add_to_playlist(self, chord_name: str) -> None:
        self.playlist.append(chord_name)

    def remove_from_playlist(self, index: int) -> None:
        if 0 <= index < len(self.playlist):
            del self.playlist[index]

    def clear_playlist(self) -> None:
        self.playlist = []

    # ── Selection ────────────────────────────────────────────────────────────

    def select(self, chord_name: str, column_id: str) -> ChordSelection:
        self.selection = ChordSelection(chord_name, column_id, self.key)
        return self.selection

    def deselect(self) -> None:
        self.selection = None
