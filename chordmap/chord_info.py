"""
Chord-info panel: static chord facts plus three AI panels fetched side by side.

The AI panels (explanation, substitutions, voicing) are requested
concurrently and joined field by field: one failing or timing out leaves only
that field empty. If the user picks another chord while a request is in
flight, the late result is dropped instead of overwriting the new selection.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Optional

from .advisor import ChordInfoRequest
from .categories import category_label
from .chord_map import get_column
from .transpose import locate_chord, resolve_cell

DEFAULT_TIMEOUT = 30.0


@dataclass
class ChordInfo:
    title: str
    subtitle: str
    category: Optional[str]
    intervals: list
    semitones: list
    root: int
    confident: bool = True
    analysis: Optional[object] = None
    substitutions: Optional[list] = None
    voicing: Optional[object] = None
    errors: dict = field(default_factory=dict)


def functional_context(column, cell, language="en") -> str:
    """Column role as sent to the advisor, e.g. "V (Dominant), Secondary Dominant"."""
    context = f"{column.label} ({column.degree})"
    category = category_label(cell, language)
    if category:
        context += f", {category}"
    return context


def build_chord_info(resolved, column, cell, session) -> ChordInfo:
    context = session.column_display(column.id)["label"]
    return ChordInfo(
        title=resolved.display_name,
        subtitle=f"{context} in {session.key_label} Major",
        category=category_label(cell, session.language),
        intervals=list(resolved.intervals),
        semitones=list(resolved.semitones),
        root=resolved.absolute_root,
        confident=resolved.confident,
    )


async def _guarded(name, coro, timeout, errors):
    try:
        return await asyncio.wait_for(coro, timeout)
    except asyncio.TimeoutError:
        errors[name] = f"timed out after {timeout}s"
    except Exception as e:
        errors[name] = str(e) or type(e).__name__
    print(f"[chord-info] {name} unavailable: {errors[name]}")
    return None


async def fetch_panels(advisor, request: ChordInfoRequest, timeout: float = DEFAULT_TIMEOUT):
    """
    Run the three advisor calls concurrently.

    Returns:
        (panels, errors) where panels maps "analysis", "substitutions" and
        "voicing" to a result or None, and errors maps failed panel names to
        a short message.
    """
    errors = {}
    analysis, substitutions, voicing = await asyncio.gather(
        _guarded("analysis", advisor.explain(request), timeout, errors),
        _guarded("substitutions", advisor.substitutions(request), timeout, errors),
        _guarded("voicing", advisor.voicing(request), timeout, errors),
    )
    panels = {"analysis": analysis, "substitutions": substitutions, "voicing": voicing}
    return panels, errors


class ChordInfoController:
    """
    Opens chord info for a cell on behalf of a ChordMapSession.

    Usage:
        controller = ChordInfoController(session, advisor)
        info = await controller.show("v", 1)   # G7 in C
        if info is None:
            ...  # superseded by a newer selection
    """

    def __init__(self, session, advisor, timeout: float = DEFAULT_TIMEOUT):
        self.session = session
        self.advisor = advisor
        self.timeout = timeout

    async def show(self, column_id: str, cell_index: int) -> Optional[ChordInfo]:
        column = get_column(column_id)
        cell = column.cells[cell_index]
        if cell is None:
            raise ValueError(f"Column {column_id!r} has no chord at position {cell_index}")

        key = self.session.key
        resolved = resolve_cell(cell, key)
        selection = self.session.select(resolved.display_name, column.id)
        info = build_chord_info(resolved, column, cell, self.session)

        request = ChordInfoRequest(
            chord_name=resolved.display_name,
            key_label=self.session.key_label,
            context=functional_context(column, cell, self.session.language),
            language=self.session.language,
        )
        panels, errors = await fetch_panels(self.advisor, request, self.timeout)

        if self.session.selection != selection:
            print(f"[chord-info] dropping stale result for {resolved.display_name}")
            return None

        info.analysis = panels["analysis"]
        info.voicing = panels["voicing"]
        info.substitutions = panels["substitutions"]
        for sub in info.substitutions or []:
            sub.map_positions = [(col, idx) for col, idx, _ in locate_chord(sub.chord, key, min_similarity=0.999)]
        info.errors = errors
        return info
