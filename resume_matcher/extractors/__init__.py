"""
Field extractors: independent strategies that each read normalized resume
text and return one typed field group.
"""

from .base import FieldExtractor
from .identity import Identity, IdentityExtractor
from .history import HistoryExtractor, ProfessionalHistory
from .skills import SkillsExtractor, SoftSkillsExtractor
from .credentials import Credentials, CredentialsExtractor
from .summary import SummaryExtractor

__all__ = [
    "FieldExtractor",
    "Identity",
    "IdentityExtractor",
    "HistoryExtractor",
    "ProfessionalHistory",
    "SkillsExtractor",
    "SoftSkillsExtractor",
    "Credentials",
    "CredentialsExtractor",
    "SummaryExtractor",
]
