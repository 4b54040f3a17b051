"""
Identity extraction: name, contact details, location and profile URLs.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import re

from resume_matcher.core import geography
from resume_matcher.core.models import Entity
from resume_matcher.core.taxonomy import SkillTaxonomy
from .base import FieldExtractor, confident
from .sections import is_heading


@dataclass(frozen=True)
class Identity:
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    portfolio_url: str = ""


class IdentityExtractor(FieldExtractor):
    """Extracts who the candidate is and how to reach them."""

    EMAIL_PATTERN = re.compile(
        r"[A-Za-z0-9._+\-]+@[A-Za-z0-9\-]+(?:\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}"
    )
    PLACEHOLDER_EMAIL_WORDS = ["example", "test"]

    # Tried in order; the first format that matches wins.
    PHONE_PATTERNS = [
        re.compile(r"\+\d{1,3}[-. ]?\(?\d{1,4}\)?(?:[-. ]?\d{2,4}){2,3}(?!\d)"),
        re.compile(r"(?<!\d)\(?\d{3}\)?[-. ]\d{3}[-. ]\d{4}(?!\d)"),
        re.compile(r"(?<!\d)\d{10}(?!\d)"),
    ]

    _PLACE = r"[A-Z][a-zA-Z]+(?:[ ][A-Z][a-zA-Z]+){0,2}"
    CITY_STATE_PATTERN = re.compile(rf"\b({_PLACE}),[ ]?([A-Z]{{2}})(?:[ ](\d{{5}}))?\b")
    CITY_COUNTRY_PATTERN = re.compile(rf"\b({_PLACE}),[ ]?({_PLACE})\b")
    CITY_PREFIXES = {
        "San", "Santa", "Los", "Las", "New", "Fort", "Saint", "St", "Port", "El",
        "Salt", "North", "South", "East", "West", "Mount", "Lake", "Palm", "Grand",
    }
    CITY_SUFFIXES = {
        "City", "Falls", "Beach", "Springs", "Park", "Heights", "Rapids", "Creek",
        "Harbor", "Valley", "Hills", "Lake",
    }

    NAME_SCAN_LINES = 10
    NAME_EXCLUDE_WORDS = [
        "resume", "cv", "curriculum", "vitae", "phone", "email", "address", "http", "www",
    ]
    NAME_TOKEN = re.compile(r"^[A-Z](?:[a-z]+|[A-Z]+)(?:-[A-Z][a-z]+)?$")
    ROLE_WORDS = {
        "engineer", "developer", "manager", "analyst", "designer", "director",
        "consultant", "specialist", "architect", "scientist", "administrator",
        "coordinator", "officer", "intern", "lead", "senior", "junior", "president",
        "founder", "programmer", "executive", "technician", "associate",
    }

    LINKEDIN_PATTERN = re.compile(
        r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w\-]+/?", re.IGNORECASE
    )
    GITHUB_PATTERN = re.compile(
        r"(?:https?://)?(?:www\.)?github\.com/[\w\-]+/?", re.IGNORECASE
    )
    PORTFOLIO_PATTERN = re.compile(
        r"(?<![@\w.\-/])(?:https?://)?(?:www\.)?[a-z0-9\-]+(?:\.[a-z0-9\-]+)*"
        r"\.(?:com|net|org|io|dev|me|app)(?![\w\-])(?:/[\w\-./#+]*)?"
    )
    SOCIAL_DOMAINS = [
        "linkedin.", "github.", "facebook.", "twitter.", "instagram.",
        "youtube.", "tiktok.",
    ]
    # The normalizer drops ':' so "https://" arrives as "https //".
    BROKEN_SCHEME = re.compile(r"\b(https?) //", re.IGNORECASE)

    def __init__(self, taxonomy: Optional[SkillTaxonomy] = None,
                 name_confidence: float = 0.85, entity_confidence: float = 0.7):
        super().__init__()
        self.taxonomy = taxonomy or SkillTaxonomy.default()
        self.name_confidence = name_confidence
        self.entity_confidence = entity_confidence

    @property
    def name(self) -> str:
        return "identity"

    def empty(self) -> Identity:
        return Identity()

    def _extract(self, text: str, entities: Sequence[Entity]) -> Identity:
        linkedin, github, portfolio = self._extract_urls(text)
        return Identity(
            name=self._extract_name(text, entities),
            email=self._extract_email(text),
            phone=self._extract_phone(text),
            location=self._extract_location(text, entities),
            linkedin_url=linkedin,
            github_url=github,
            portfolio_url=portfolio,
        )

    def _extract_email(self, text: str) -> str:
        """First address that is not a placeholder, lower-cased."""
        for match in self.EMAIL_PATTERN.finditer(text):
            email = match.group(0).lower()
            if any(word in email for word in self.PLACEHOLDER_EMAIL_WORDS):
                self.logger.debug(f"Skipping placeholder email: {email}")
                continue
            return email
        return ""

    def _extract_phone(self, text: str) -> str:
        for pattern in self.PHONE_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(0).strip()
        return ""

    def _extract_location(self, text: str, entities: Sequence[Entity]) -> str:
        hinted = confident(entities, "LOC", self.entity_confidence)
        if hinted:
            return hinted[0]

        for match in self.CITY_STATE_PATTERN.finditer(text):
            city, state, zip_code = match.groups()
            if not geography.is_state_code(state):
                continue
            location = f"{self._trim_city(city)}, {state}"
            return f"{location} {zip_code}" if zip_code else location

        for match in self.CITY_COUNTRY_PATTERN.finditer(text):
            city, region = self._trim_city(match.group(1)), match.group(2)
            if self._is_known_place(city, region):
                return f"{city}, {region}"

        return ""

    def _trim_city(self, candidate: str) -> str:
        """
        Drop leading capitalized words that are not part of the city.

        A known city suffix wins. Otherwise only the last word is kept, widened
        by common city affixes ("San Jose", "Fort Collins", "Sioux Falls"), so a
        name in front of the place ("Jane Doe Boise") is not taken along.
        """
        words = candidate.split()
        for i in range(len(words)):
            if geography.is_known_city(" ".join(words[i:])):
                return " ".join(words[i:])

        start = len(words) - 1
        if start > 0 and words[start] in self.CITY_SUFFIXES:
            start -= 1
        while start > 0 and words[start - 1] in self.CITY_PREFIXES:
            start -= 1
        return " ".join(words[start:])

    def _is_known_place(self, city: str, region: str) -> bool:
        region_lower = region.lower()
        if geography.is_known_city(city) or geography.is_country(region):
            return True
        if region_lower in geography.US_STATES.values():
            return True
        return any(region_lower in names for names in geography.REGIONS.values())

    def _extract_name(self, text: str, entities: Sequence[Entity]) -> str:
        """Header-scan the first lines; fall back to a confident PER entity."""
        lines = [line.strip() for line in text.split("\n") if line.strip()]

        for line in lines[:self.NAME_SCAN_LINES]:
            if self._looks_like_name(line):
                return " ".join(line.split())

        people = confident(entities, "PER", self.name_confidence)
        if people:
            return people[0]
        return ""

    def _looks_like_name(self, line: str) -> bool:
        lowered = line.lower()
        if "@" in line or re.search(r"\d{3}", line):
            return False
        if any(word in lowered for word in self.NAME_EXCLUDE_WORDS):
            return False
        if is_heading(line):
            return False

        # Middle initials ("J." or "J") are allowed but not counted.
        words = [w for w in line.split() if len(w.rstrip(".")) > 1]
        if not 2 <= len(words) <= 4:
            return False
        if not all(self.NAME_TOKEN.match(w) and len(w) < 20 for w in words):
            return False
        if any(w.lower() in self.ROLE_WORDS for w in words):
            return False
        # "Python Django Flask" is a skills line, not a name.
        return not self.taxonomy.find_all(line, single_letters=False)

    def _extract_urls(self, text: str) -> tuple[str, str, str]:
        text = self.BROKEN_SCHEME.sub(r"\1://", text)

        linkedin = self.LINKEDIN_PATTERN.search(text)
        github = self.GITHUB_PATTERN.search(text)

        portfolio = ""
        for match in self.PORTFOLIO_PATTERN.finditer(text):
            url = match.group(0).rstrip(".")
            if any(domain in url.lower() for domain in self.SOCIAL_DOMAINS):
                continue
            if re.match(r"(?:https?://)?(?:www\.)?x\.com\b", url):
                continue
            portfolio = url
            break

        return (
            linkedin.group(0) if linkedin else "",
            github.group(0) if github else "",
            portfolio,
        )
