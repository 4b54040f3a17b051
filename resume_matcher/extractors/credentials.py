"""
Education, certification and spoken-language extraction.

All three match closed vocabularies rather than open text, which keeps
false positives bounded.
"""

from dataclasses import dataclass
from typing import Sequence
import re

from resume_matcher.core.models import Entity
from .base import FieldExtractor, collect_matches, unique


@dataclass(frozen=True)
class Credentials:
    education: tuple[str, ...] = ()
    certifications: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()


_FIELD = r"[A-Z][A-Za-z&]*(?:[ ](?:(?:and|of|in|&)[ ])?[A-Z][A-Za-z&]*){0,4}"
_CAPITALIZED_WORDS = r"[A-Z][A-Za-z]*(?:[ ][A-Z][A-Za-z]*){0,3}"


class CredentialsExtractor(FieldExtractor):
    """Extracts degrees and institutions, certifications and languages."""

    EDUCATION_PATTERNS = [
        # "Bachelor of Science in Computer Science", "Master s degree in Finance"
        re.compile(
            rf"\b(?i:bachelor|master|doctor|associate)(?:[ ]?s)?"
            rf"(?:(?:[ ]+(?i:degree))?[ ]+(?i:of|in)[ ]+{_FIELD}|[ ]+(?i:degree)\b)"
        ),
        re.compile(
            rf"\b(?:B\.?S|B\.?Sc|B\.?A|B\.?Eng|B\.?Tech|M\.?S|M\.?Sc|M\.?A|M\.?Eng|M\.?Tech)"
            rf"\.?[ ]+in[ ]+{_FIELD}"
        ),
        re.compile(rf"\b(?:MBA|Ph\.?D)\b\.?(?:[ ]+in[ ]+{_FIELD})?"),
        re.compile(rf"\b(?:University|College|Institute|Polytechnic)[ ]+of[ ]+{_CAPITALIZED_WORDS}"),
        re.compile(rf"\b{_CAPITALIZED_WORDS}[ ](?:University|College|Polytechnic|Institute[ ]+of[ ]+Technology)\b"),
    ]
    EDUCATION_MIN_LENGTH = 3
    EDUCATION_MAX_LENGTH = 100

    CERTIFICATION_PATTERNS = [
        re.compile(
            r"\b(?:AWS|Azure|Google[ ]+Cloud|GCP|Oracle|Microsoft|Cisco|CompTIA|Salesforce|HashiCorp)"
            r"[ ]+(?:[A-Z][\w+#\-]*[ ]+){0,5}"
            r"(?:Certified|Certification|Certificate|Associate|Professional|Practitioner|Specialist|Expert)\b"
            r"(?:[ ]+[A-Z][\w\-]*){0,3}"
        ),
        re.compile(r"\b(?:Certified|Certification[ ]+in|Certificate[ ]+in)[ ]+[A-Z][\w+#\-]*(?:[ ]+[A-Z][\w+#\-]*){0,5}"),
        re.compile(
            r"\b(?:PMP|CISSP|CISA|CISM|CCNA|CCNP|CPA|CFA|CSM|PSM|ITIL|"
            r"Six[ ]+Sigma(?:[ ]+(?:Green|Black|Yellow)[ ]+Belt)?)\b"
        ),
    ]
    CERTIFICATION_MIN_LENGTH = 3
    CERTIFICATION_MAX_LENGTH = 80

    LANGUAGES = [
        "English", "Spanish", "French", "German", "Italian", "Portuguese", "Russian",
        "Chinese", "Mandarin", "Cantonese", "Japanese", "Korean", "Arabic", "Hindi",
        "Dutch", "Swedish", "Norwegian", "Danish", "Finnish", "Polish", "Turkish",
        "Hebrew", "Thai", "Vietnamese", "Yoruba", "Igbo", "Hausa", "Swahili",
    ]

    @property
    def name(self) -> str:
        return "credentials"

    def empty(self) -> Credentials:
        return Credentials()

    def _extract(self, text: str, entities: Sequence[Entity]) -> Credentials:
        return Credentials(
            education=tuple(self._extract_education(text)),
            certifications=tuple(self._extract_certifications(text)),
            languages=tuple(self._extract_languages(text)),
        )

    def _extract_education(self, text: str) -> list[str]:
        entries = [
            " ".join(match.split()).rstrip(".")
            for match in collect_matches(self.EDUCATION_PATTERNS, text)
        ]
        return unique(
            e for e in entries
            if self.EDUCATION_MIN_LENGTH <= len(e) <= self.EDUCATION_MAX_LENGTH
        )

    def _extract_certifications(self, text: str) -> list[str]:
        entries = [" ".join(match.split()) for match in collect_matches(self.CERTIFICATION_PATTERNS, text)]
        return unique(
            c for c in entries
            if self.CERTIFICATION_MIN_LENGTH <= len(c) <= self.CERTIFICATION_MAX_LENGTH
        )

    def _extract_languages(self, text: str) -> list[str]:
        """Spoken languages in order of first mention."""
        found = []
        for language in self.LANGUAGES:
            match = re.search(rf"\b{language}\b", text)
            if match:
                found.append((match.start(), language))
        return [language for _, language in sorted(found)]
