"""
Helpers for working with collections of model instances.

``where`` and ``wherent`` use the same matching rules as field types, so any
class, pattern, ``Interval`` or field type can serve as a pattern::

    adults = where(people, age=Interval(18, 130))
    not_anna = wherent(people, name="Anna")
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, TypeVar

from .fields import as_field

T = TypeVar("T")


def index_by(items: Iterable[T], key: Callable[[T], Hashable]) -> Dict[Hashable, T]:
    """Map ``key(item)`` to item; later items win on duplicate keys."""
    return {key(each): each for each in items}


def freq(
    items: Iterable[T], key: Optional[Callable[[T], Hashable]] = None
) -> Dict[Hashable, int]:
    """Count occurrences, ordered from least to most frequent."""
    counts = Counter(key(each) for each in items) if key else Counter(items)
    return dict(sorted(counts.items(), key=lambda pair: pair[1]))


def where(items: Iterable[T], **patterns: Any) -> List[T]:
    """Items whose attributes match every pattern."""
    matchers = _matchers(patterns)
    return [each for each in items if _matches_all(each, matchers)]


def wherent(items: Iterable[T], **patterns: Any) -> List[T]:
    """Items that do not match every pattern; the complement of ``where``."""
    matchers = _matchers(patterns)
    return [each for each in items if not _matches_all(each, matchers)]


def _matchers(patterns: Dict[str, Any]) -> Dict[str, Any]:
    return {name: as_field(pattern) for name, pattern in patterns.items()}


def _matches_all(item: Any, matchers: Dict[str, Any]) -> bool:
    return all(
        matcher.matches(getattr(item, name, None)) for name, matcher in matchers.items()
    )
