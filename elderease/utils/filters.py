"""
Catalog Filters

Case-insensitive tutorial filtering shared by the API (ORM rows) and the
client dashboard (response models). Anything with ``title``,
``description``, ``category``, ``platform`` and ``difficulty`` attributes
can be filtered.
"""

from enum import Enum
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")

# Dropdown value meaning "no filter"
ALL = "all"


def _text(value) -> str:
    if isinstance(value, Enum):
        value = value.value
    return (value or "").strip().lower()


def _active(value: Optional[str]) -> Optional[str]:
    """Normalised filter value, or None when the filter is off."""
    value = _text(value)
    if not value or value == ALL:
        return None
    return value


def matches_filters(
    tutorial,
    search: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    platform: Optional[str] = None,
) -> bool:
    """
    True if the tutorial passes every active filter.

    ``search`` is a substring match on title or description; the other
    filters are exact matches.
    """
    term = _active(search)
    if term and term not in _text(tutorial.title) and term not in _text(tutorial.description):
        return False

    for wanted, actual in (
        (category, tutorial.category),
        (difficulty, tutorial.difficulty),
        (platform, tutorial.platform),
    ):
        wanted = _active(wanted)
        if wanted and wanted != _text(actual):
            return False

    return True


def filter_tutorials(
    tutorials: Iterable[T],
    search: Optional[str] = None,
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    platform: Optional[str] = None,
) -> List[T]:
    """Keep catalog order; drop tutorials that fail a filter."""
    return [
        t for t in tutorials
        if matches_filters(t, search=search, category=category, difficulty=difficulty, platform=platform)
    ]
