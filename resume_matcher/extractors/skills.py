"""
Skill extraction against the skill taxonomy.
"""

from typing import Optional, Sequence
import re

from resume_matcher.core.models import Entity
from resume_matcher.core.taxonomy import SkillTaxonomy
from .base import FieldExtractor, unique
from .sections import SKILLS_HEADINGS, SOFT_SKILLS_HEADINGS, find_section


class SkillsExtractor(FieldExtractor):
    """
    Finds canonical technical skills.

    A detected skills section is searched first; the whole document is
    scanned only when the section yields nothing. One-letter skills ("C",
    "R") count inside the section or as list items, never from prose.
    """

    HEADINGS = SKILLS_HEADINGS
    TOKEN_SEPARATORS = re.compile(r"[,;\n]|\s+and\s+|\s+-\s+")

    def __init__(self, taxonomy: Optional[SkillTaxonomy] = None):
        super().__init__()
        self.taxonomy = taxonomy or SkillTaxonomy.default()

    @property
    def name(self) -> str:
        return "skills"

    def empty(self) -> tuple[str, ...]:
        return ()

    def _extract(self, text: str, entities: Sequence[Entity]) -> tuple[str, ...]:
        section = find_section(text, self.HEADINGS)
        if section:
            found = self._scan(section, single_letters=True)
            if found:
                return tuple(found)
            self.logger.debug(f"No {self.name} in section, scanning whole document")

        return tuple(self._scan(text, single_letters=False))

    def _scan(self, text: str, single_letters: bool) -> list[str]:
        found = self.taxonomy.find_all(text, single_letters=single_letters)
        # Loose list items ("ReactJS, Postgres") that spell a taxonomy entry.
        for token in self.TOKEN_SEPARATORS.split(text):
            canonical = self.taxonomy.canonicalize(token.strip(" .()"))
            if canonical:
                found.append(canonical)
        return unique(found)


class SoftSkillsExtractor(SkillsExtractor):
    """Same strategy as technical skills over the soft-skill lexicon."""

    HEADINGS = SOFT_SKILLS_HEADINGS + SKILLS_HEADINGS

    def __init__(self, taxonomy: Optional[SkillTaxonomy] = None):
        super().__init__(taxonomy or SkillTaxonomy.default_soft())

    @property
    def name(self) -> str:
        return "soft_skills"
