"""Core models, lexicons and scoring for resume matching.

The assembler lives in ``resume_matcher.core.assembler``; it depends on the
extractor package, which itself builds on the modules exported here.
"""

from .models import (
    ExperienceLevel,
    Entity,
    ResumeProfile,
    JobPosting,
    SkillsMatch,
    MatchResult,
)
from .normalizer import normalize
from .taxonomy import SkillTaxonomy, SkillEntry
from .matcher import JobMatcher, score
from .orchestrator import MatchLedger, InMemoryMatchLedger, MatchOrchestrator

__all__ = [
    "ExperienceLevel",
    "Entity",
    "ResumeProfile",
    "JobPosting",
    "SkillsMatch",
    "MatchResult",
    "normalize",
    "SkillTaxonomy",
    "SkillEntry",
    "JobMatcher",
    "score",
    "MatchLedger",
    "InMemoryMatchLedger",
    "MatchOrchestrator",
]
