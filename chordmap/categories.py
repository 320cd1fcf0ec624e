"""
Function categories of chord cells.

The category of a cell is written into the chord map by hand; nothing here
looks at the chord quality. This module only turns the tag into text.
"""
from typing import Optional

from .constants import DEFAULT_LANGUAGE, FunctionCategory
from .translations import translate

# Category → (badge key, full-name key) in the translation tables
_CATEGORY_KEYS: dict[FunctionCategory, tuple[str, str]] = {
    FunctionCategory.SECONDARY_DOMINANT: ("cat.sec", "cat.sec.full"),
    FunctionCategory.TRITONE_SUB: ("cat.sub", "cat.sub.full"),
    FunctionCategory.MODAL_INTERCHANGE: ("cat.mod", "cat.mod.full"),
    FunctionCategory.DIMINISHED_SUB: ("cat.dim", "cat.dim.full"),
}


def category_of(cell) -> FunctionCategory:
    return cell.category


def category_label(cell, language: str = DEFAULT_LANGUAGE, full: bool = True) -> Optional[str]:
    """
    Human-readable category name for a cell, or None for FunctionCategory.NONE.

    Callers should leave the badge / prompt line out entirely when this
    returns None.
    """
    category = category_of(cell)
    if category is FunctionCategory.NONE:
        return None
    badge_key, full_key = _CATEGORY_KEYS[category]
    return translate(language, full_key if full else badge_key)
