"""
Narrative summary extraction.
"""

from typing import Sequence

from resume_matcher.core.models import Entity
from .base import FieldExtractor
from .sections import SUMMARY_HEADINGS, find_section


class SummaryExtractor(FieldExtractor):
    """Returns the paragraph under a summary/objective/profile heading, if any."""

    MIN_LENGTH = 50
    MAX_LENGTH = 1000

    @property
    def name(self) -> str:
        return "summary"

    def empty(self) -> str:
        return ""

    def _extract(self, text: str, entities: Sequence[Entity]) -> str:
        summary = " ".join(find_section(text, SUMMARY_HEADINGS).split())
        if self.MIN_LENGTH <= len(summary) <= self.MAX_LENGTH:
            return summary

        if summary:
            self.logger.debug(f"Ignoring summary of {len(summary)} characters")
        return ""
