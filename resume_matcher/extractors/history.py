"""
Professional history extraction: job titles, employers, tenure and industry.
"""

from dataclasses import dataclass
from typing import Sequence
import re

from resume_matcher.core import geography
from resume_matcher.core.models import Entity
from .base import FieldExtractor, collect_matches, confident, unique


@dataclass(frozen=True)
class ProfessionalHistory:
    job_titles: tuple[str, ...] = ()
    companies: tuple[str, ...] = ()
    years_of_experience: int = 0
    experience: tuple[str, ...] = ()
    industry_experience: tuple[str, ...] = ()

    @property
    def current_job_title(self) -> str:
        return self.job_titles[0] if self.job_titles else ""


_SENIORITY = r"Senior|Sr\.?|Lead|Principal|Staff|Junior|Jr\.?|Associate|Head"
_DOMAIN = (
    r"Software|Front[ -]?End|Back[ -]?End|Full[ -]?Stack|Web|Mobile|Data|Machine Learning|"
    r"Cloud|DevOps|Security|Test|Systems|Network|Database|Product|Project|Program|"
    r"Engineering|Marketing|Sales|Graphic|Business|Financial|Technical|Tech|Solutions|"
    r"Site Reliability|Platform|iOS|Android|Embedded|Research|Operations|Account|"
    r"Content|Scrum|Infrastructure|Application|Frontend|Backend|Fullstack|"
    r"(?-i:AI|ML|QA|UI|UX|IT|HR)"
)
_ROLE = (
    r"Engineer|Developer|Programmer|Architect|Manager|Director|Analyst|Scientist|"
    r"Specialist|Consultant|Designer|Administrator|Coordinator|Lead|Officer|Tester|"
    r"Intern|Master"
)


class HistoryExtractor(FieldExtractor):
    """Extracts job titles, companies, years of experience and industries."""

    # Ordered: a later pattern never re-reports text an earlier one matched.
    TITLE_PATTERNS = [
        re.compile(rf"\b(?:{_SENIORITY})[ ]+(?:(?:{_DOMAIN})[ ]+){{0,2}}(?:{_ROLE})\b", re.IGNORECASE),
        re.compile(rf"\b(?:(?:{_DOMAIN})[ ]+){{1,2}}(?:{_ROLE})\b", re.IGNORECASE),
        re.compile(
            r"\b(?:Chief[ ]+[A-Z][a-z]+(?:[ ]+[A-Z][a-z]+)?[ ]+Officer|C[TEIFOM]O|"
            r"VP(?:[ ]+of)?[ ]+[A-Z][a-z]+|Vice[ ]+President(?:[ ]+of[ ]+[A-Z][a-z]+)?|"
            r"Co-Founder|Founder)\b"
        ),
    ]
    C_LEVEL = {
        "CEO": "Chief Executive Officer",
        "CTO": "Chief Technology Officer",
        "CIO": "Chief Information Officer",
        "CFO": "Chief Financial Officer",
        "COO": "Chief Operating Officer",
        "CMO": "Chief Marketing Officer",
    }
    ACRONYMS = {
        "qa": "QA", "ui": "UI", "ux": "UX", "ai": "AI", "ml": "ML", "vp": "VP",
        "it": "IT", "hr": "HR", "devops": "DevOps", "ios": "iOS",
    }
    TITLE_MIN_LENGTH = 5
    TITLE_MAX_LENGTH = 50

    COMPANY_SUFFIX_PATTERN = re.compile(
        r"\b([A-Z][A-Za-z0-9&\-]*(?:[ ][A-Z][A-Za-z0-9&\-]*){0,3}),?[ ]"
        r"(Inc|LLC|Ltd|Limited|Corporation|Corp|PLC|GmbH)\b\.?"
    )
    COMPANY_AFTER_ROLE_PATTERN = re.compile(
        rf"\b(?:{_ROLE})s?[ ]+(?:at|with)[ ]+([A-Z][A-Za-z0-9&\-]*(?:[ ][A-Z][A-Za-z0-9&\-]*){{0,3}})"
    )

    YEARS_PATTERNS = [
        re.compile(r"(\d{1,3})\+?\s*(?:years?|yrs?)\s+(?:of\s+)?(?:\w+\s+)?experience", re.IGNORECASE),
        re.compile(r"experience\s*(?:of\s+)?(\d{1,3})\+?\s*(?:years?|yrs?)", re.IGNORECASE),
        re.compile(r"(\d{1,3})\+?\s*(?:years?|yrs?)\s+in\b", re.IGNORECASE),
    ]
    MAX_YEARS = 50

    DATE_RANGE_PATTERN = re.compile(
        r"\b(?:19|20)\d{2}[ ]*(?:-|to)[ ]*(?:(?:19|20)\d{2}|present|current|now)\b",
        re.IGNORECASE,
    )

    INDUSTRY_KEYWORDS = {
        "technology": ["software", "tech", "programming", "developer", "engineer", "coding", "startup", "saas"],
        "healthcare": ["medical", "health", "hospital", "clinical", "patient", "doctor", "nurse", "pharmaceutical"],
        "finance": ["bank", "financial", "investment", "trading", "accounting", "finance", "insurance"],
        "education": ["teaching", "education", "university", "school", "academic", "research", "professor"],
        "marketing": ["marketing", "advertising", "brand", "digital marketing", "social media", "seo"],
        "legal": ["law", "legal", "attorney", "lawyer", "paralegal", "compliance", "litigation"],
        "consulting": ["consulting", "consultant", "advisory", "strategy", "management"],
        "retail": ["retail", "sales", "customer service", "merchandising", "store"],
        "manufacturing": ["manufacturing", "production", "operations", "quality", "supply chain"],
    }

    def __init__(self, entity_confidence: float = 0.7):
        super().__init__()
        self.entity_confidence = entity_confidence

    @property
    def name(self) -> str:
        return "history"

    def empty(self) -> ProfessionalHistory:
        return ProfessionalHistory()

    def _extract(self, text: str, entities: Sequence[Entity]) -> ProfessionalHistory:
        return ProfessionalHistory(
            job_titles=tuple(self._extract_job_titles(text)),
            companies=tuple(self._extract_companies(text, entities)),
            years_of_experience=self._extract_years(text),
            experience=tuple(self._extract_experience_entries(text)),
            industry_experience=tuple(self._classify_industries(text)),
        )

    def _extract_job_titles(self, text: str) -> list[str]:
        titles = []
        for match in collect_matches(self.TITLE_PATTERNS, text):
            title = self.normalize_title(match)
            if self.TITLE_MIN_LENGTH <= len(title) <= self.TITLE_MAX_LENGTH:
                titles.append(title)
        return unique(titles)

    def normalize_title(self, title: str) -> str:
        """
        Canonical spelling for a matched title.

        "sr. software engineer" -> "Senior Software Engineer", "CTO" ->
        "Chief Technology Officer", "devops engineer" -> "DevOps Engineer".
        """
        title = " ".join(title.split())
        if title.upper() in self.C_LEVEL:
            return self.C_LEVEL[title.upper()]

        words = []
        for word in title.split():
            lowered = word.lower().rstrip(".")
            if lowered == "sr":
                words.append("Senior")
            elif lowered == "jr":
                words.append("Junior")
            elif lowered in self.ACRONYMS:
                words.append(self.ACRONYMS[lowered])
            elif lowered == "of":
                words.append("of")
            else:
                words.append("-".join(part.capitalize() for part in word.split("-")))
        return " ".join(words)

    def _extract_companies(self, text: str, entities: Sequence[Entity]) -> list[str]:
        companies = confident(entities, "ORG", self.entity_confidence)

        for match in self.COMPANY_SUFFIX_PATTERN.finditer(text):
            companies.append(match.group(0).rstrip(" ,"))

        for match in self.COMPANY_AFTER_ROLE_PATTERN.finditer(text):
            company = match.group(1)
            if geography.is_known_city(company) or geography.is_country(company):
                continue
            companies.append(company)

        return unique(c for c in companies if 2 <= len(c) <= 50)

    def _extract_years(self, text: str) -> int:
        """Largest stated "N+ years" figure; 50 or more is parsing noise."""
        max_years = 0
        for pattern in self.YEARS_PATTERNS:
            for match in pattern.finditer(text):
                years = int(match.group(1))
                if max_years < years < self.MAX_YEARS:
                    max_years = years
        return max_years

    def _extract_experience_entries(self, text: str) -> list[str]:
        entries = []
        for line in text.split("\n"):
            if self.DATE_RANGE_PATTERN.search(line):
                entries.append(line.strip(" ,.-"))
        return unique(entries)

    def _classify_industries(self, text: str) -> list[str]:
        """Industries with keyword hits, most hits first, ties in table order."""
        lowered = text.lower()
        scores = []
        for index, (industry, keywords) in enumerate(self.INDUSTRY_KEYWORDS.items()):
            hits = sum(
                len(re.findall(rf"\b{re.escape(keyword)}\b", lowered))
                for keyword in keywords
            )
            if hits:
                scores.append((-hits, index, industry))
        return [industry for _, _, industry in sorted(scores)]
