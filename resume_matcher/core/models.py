"""
Core data models for resume extraction and job matching.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Optional
import hashlib
import json


def _string_tuple(value) -> tuple[str, ...]:
    """Coerce a JSON list field; a bare string is one item, not characters."""
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        value = [value]
    return tuple(str(v) for v in value if v is not None)


class ExperienceLevel(Enum):
    """Experience tier used for ordinal distance scoring."""
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"

    @property
    def ordinal(self) -> int:
        return list(ExperienceLevel).index(self)

    @classmethod
    def parse(cls, value: Optional[str]) -> "ExperienceLevel":
        """Parse a free-form level string, defaulting to MID."""
        if isinstance(value, ExperienceLevel):
            return value

        text = (value or "").strip().lower()
        for level in cls:
            if text == level.value:
                return level

        aliases = {
            "junior": cls.ENTRY,
            "intern": cls.ENTRY,
            "internship": cls.ENTRY,
            "entry level": cls.ENTRY,
            "entry_level": cls.ENTRY,
            "associate": cls.ENTRY,
            "intermediate": cls.MID,
            "mid level": cls.MID,
            "mid_level": cls.MID,
            "lead": cls.SENIOR,
            "principal": cls.SENIOR,
            "staff": cls.SENIOR,
            "director": cls.EXECUTIVE,
            "vp": cls.EXECUTIVE,
            "c-level": cls.EXECUTIVE,
        }
        return aliases.get(text, cls.MID)


@dataclass(frozen=True)
class Entity:
    """A named entity reported by a statistical recognizer."""
    label: str  # PER, LOC, ORG, MISC
    text: str
    score: float = 0.0

    def to_dict(self) -> dict:
        return {"label": self.label, "text": self.text, "score": self.score}

    @classmethod
    def from_dict(cls, data: dict) -> "Entity":
        return cls(
            label=str(data.get("label") or ""),
            text=str(data.get("text") or ""),
            score=float(data.get("score") or 0.0),
        )


@dataclass(frozen=True)
class ResumeProfile:
    """Structured professional profile extracted from resume text."""
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    portfolio_url: str = ""
    skills: tuple[str, ...] = ()
    soft_skills: tuple[str, ...] = ()
    job_titles: tuple[str, ...] = ()
    companies: tuple[str, ...] = ()
    experience: tuple[str, ...] = ()
    education: tuple[str, ...] = ()
    certifications: tuple[str, ...] = ()
    languages: tuple[str, ...] = ()
    industry_experience: tuple[str, ...] = ()
    years_of_experience: int = 0
    summary: str = ""
    generated_summary: str = ""

    @property
    def current_job_title(self) -> str:
        return self.job_titles[0] if self.job_titles else ""

    @property
    def fingerprint(self) -> str:
        """Stable identity used when the caller supplies no profile id."""
        if self.email:
            return self.email.lower()
        payload = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()

    def to_dict(self) -> dict:
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        data["current_job_title"] = self.current_job_title
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ResumeProfile":
        values = {}
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            value = data[f.name]
            if isinstance(f.default, tuple):
                value = _string_tuple(value)
            elif f.name == "years_of_experience":
                value = max(0, int(value))
            else:
                value = str(value)
            values[f.name] = value
        return cls(**values)


@dataclass(frozen=True)
class JobPosting:
    """A job posting supplied by an external job-search collaborator."""
    id: str = ""
    title: str = ""
    company: str = ""
    description: str = ""
    requirements: tuple[str, ...] = ()
    location: str = ""
    skills: tuple[str, ...] = ()
    experience_level: str = ""  # entry, mid, senior, executive

    @property
    def key(self) -> str:
        if self.id:
            return str(self.id)
        return f"{self.title.lower()}_{self.company.lower()}"

    @property
    def level(self) -> ExperienceLevel:
        return ExperienceLevel.parse(self.experience_level)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "description": self.description,
            "requirements": list(self.requirements),
            "location": self.location,
            "skills": list(self.skills),
            "experience_level": self.experience_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JobPosting":
        return cls(
            id=str(data.get("id") or data.get("job_id") or ""),
            title=str(data.get("title") or ""),
            company=str(data.get("company") or ""),
            description=str(data.get("description") or ""),
            requirements=_string_tuple(data.get("requirements")),
            location=str(data.get("location") or ""),
            skills=_string_tuple(data.get("skills")),
            experience_level=str(
                data.get("experience_level") or data.get("experienceLevel") or ""
            ),
        )


@dataclass
class SkillsMatch:
    """Skills overlap between a profile and a job."""
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    score: int = 0  # 0-100

    def to_dict(self) -> dict:
        return {
            "matched": list(self.matched),
            "missing": list(self.missing),
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SkillsMatch":
        return cls(
            matched=list(_string_tuple(data.get("matched"))),
            missing=list(_string_tuple(data.get("missing"))),
            score=int(data.get("score") or 0),
        )


@dataclass
class MatchResult:
    """Scoring breakdown for one (profile, job) pair."""
    job_id: str = ""
    profile_id: str = ""
    match_score: int = 1  # 1-100
    match_reasons: list[str] = field(default_factory=list)
    skills_match: SkillsMatch = field(default_factory=SkillsMatch)
    title_match: int = 0  # 0-100
    experience_match: int = 0  # 0-100
    location_match: int = 0  # 0-100

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "profile_id": self.profile_id,
            "match_score": self.match_score,
            "match_reasons": list(self.match_reasons),
            "skills_match": self.skills_match.to_dict(),
            "title_match": self.title_match,
            "experience_match": self.experience_match,
            "location_match": self.location_match,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatchResult":
        """Rebuild a saved result, e.g. to seed a match ledger."""
        return cls(
            job_id=str(data.get("job_id") or ""),
            profile_id=str(data.get("profile_id") or ""),
            match_score=int(data.get("match_score") or 1),
            match_reasons=list(_string_tuple(data.get("match_reasons"))),
            skills_match=SkillsMatch.from_dict(data.get("skills_match") or {}),
            title_match=int(data.get("title_match") or 0),
            experience_match=int(data.get("experience_match") or 0),
            location_match=int(data.get("location_match") or 0),
        )
