"""
Base class for field extractors.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, Sequence
import logging
import re

from resume_matcher.core.models import Entity


class FieldExtractor(ABC):
    """
    Abstract base class for field extractors.

    Subclasses implement ``_extract``; callers use ``extract``, which never
    raises and falls back to ``empty()`` when the strategy fails.
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Field group name, used in log messages."""
        pass

    @abstractmethod
    def empty(self) -> Any:
        """The zero value returned when nothing is found."""
        pass

    @abstractmethod
    def _extract(self, text: str, entities: Sequence[Entity]) -> Any:
        """
        Extract the field group from normalized text.

        Args:
            text: Normalized resume text
            entities: Optional hints from a named-entity recognizer

        Returns:
            The typed result for this field group
        """
        pass

    def extract(self, text: str, entities: Iterable[Entity] = ()) -> Any:
        """Run the extraction strategy; any failure yields ``empty()``."""
        if not text:
            return self.empty()

        try:
            return self._extract(text, tuple(entities or ()))
        except Exception as e:
            self.logger.warning(f"{self.name} extraction failed: {e}")
            return self.empty()


def unique(items: Iterable[str], key: Callable[[str], str] = str.lower,
           limit: Optional[int] = None) -> list[str]:
    """Deduplicate while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        item = (item or "").strip()
        if not item:
            continue
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
        if limit is not None and len(result) >= limit:
            break
    return result


def collect_matches(patterns: Sequence[re.Pattern], text: str,
                    group: int = 0) -> list[str]:
    """
    Collect matches of several patterns in discovery order.

    Patterns are tried in order; a later pattern's match is skipped when it
    overlaps a span already taken by an earlier one.
    """
    taken: list[tuple[int, int]] = []
    found = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            start, end = match.span(group)
            if start < 0 or any(start < e and s < end for s, e in taken):
                continue
            taken.append((start, end))
            found.append(match.group(group))
    return found


def confident(entities: Sequence[Entity], label: str, threshold: float) -> list[str]:
    """Texts of entities with the given label at or above the threshold, best first."""
    picked = [
        e for e in entities
        if e.label == label and e.score >= threshold and e.text.strip()
    ]
    picked.sort(key=lambda e: e.score, reverse=True)
    return [e.text.strip() for e in picked]
