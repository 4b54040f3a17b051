"""
Profile Assembler - Turns raw resume text into a ResumeProfile.

Runs the field extractors over normalized text, merges their results with
per-field caps and deduplication, and synthesizes a narrative summary when
the resume does not carry one.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Optional
import json
import logging

from .models import Entity, ResumeProfile
from .normalizer import normalize
from .taxonomy import SkillTaxonomy
from resume_matcher.extractors import (
    CredentialsExtractor,
    HistoryExtractor,
    IdentityExtractor,
    SkillsExtractor,
    SoftSkillsExtractor,
    SummaryExtractor,
)
from resume_matcher.extractors.base import unique
from resume_matcher.integrations.base import EntityRecognizer, EntityRecognitionError

DEFAULT_CAPS = {
    "skills": 25,
    "soft_skills": 10,
    "job_titles": 6,
    "companies": 6,
    "experience": 6,
    "education": 4,
    "certifications": 6,
    "languages": 6,
    "industry_experience": 3,
}

CLOSING_SENTENCES = {
    "senior": "Seeking senior roles to lead innovative projects and mentor team members.",
    "growth": (
        "Looking for challenging opportunities to expand technical expertise "
        "and contribute to impactful projects."
    ),
    "entry": "Eager to contribute technical skills and grow within a collaborative environment.",
}


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


def generate_summary(profile: ResumeProfile) -> str:
    """
    Build a deterministic narrative summary from structured profile fields.

    Example:
        "Jane Doe is a senior software engineer with 6+ years of experience
        specializing in Python, React, AWS. Looking for challenging
        opportunities to expand technical expertise and contribute to
        impactful projects."
    """
    role = profile.current_job_title.lower() or "professional"
    if profile.name:
        sentence = f"{profile.name} is {_article(role)} {role}"
    else:
        sentence = f"{_article(role).capitalize()} {role}"

    if profile.years_of_experience > 0:
        sentence += f" with {profile.years_of_experience}+ years of experience"
    if profile.skills:
        sentence += f" specializing in {', '.join(profile.skills[:4])}"
    if profile.education:
        sentence += f" with educational background in {profile.education[0].lower()}"
    sentence = sentence.rstrip(".") + "."

    years = profile.years_of_experience
    if years > 8:
        closing = CLOSING_SENTENCES["senior"]
    elif years > 2:
        closing = CLOSING_SENTENCES["growth"]
    else:
        closing = CLOSING_SENTENCES["entry"]

    return f"{sentence} {closing}"


class ProfileAssembler:
    """Extracts a ResumeProfile from resume text."""

    MIN_TEXT_LENGTH = 50

    def __init__(
        self,
        taxonomy: Optional[SkillTaxonomy] = None,
        soft_taxonomy: Optional[SkillTaxonomy] = None,
        recognizer: Optional[EntityRecognizer] = None,
        min_text_length: int = MIN_TEXT_LENGTH,
        caps: Optional[dict] = None,
        always_enhance_summary: bool = False,
        parallel: bool = False,
        max_workers: int = 4,
        name_confidence: float = 0.85,
        entity_confidence: float = 0.7,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.recognizer = recognizer
        self.min_text_length = min_text_length
        self.caps = {**DEFAULT_CAPS, **(caps or {})}
        self.always_enhance_summary = always_enhance_summary
        self.parallel = parallel
        self.max_workers = max_workers

        taxonomy = taxonomy or SkillTaxonomy.default()
        self.extractors = {
            "identity": IdentityExtractor(taxonomy, name_confidence, entity_confidence),
            "history": HistoryExtractor(entity_confidence),
            "skills": SkillsExtractor(taxonomy),
            "soft_skills": SoftSkillsExtractor(soft_taxonomy),
            "credentials": CredentialsExtractor(),
            "summary": SummaryExtractor(),
        }

    def assemble(self, raw_text: str) -> ResumeProfile:
        """
        Extract a profile from raw resume text.

        Never raises for bad input: text shorter than ``min_text_length``
        after normalization yields an empty profile with a fallback summary.
        """
        text = normalize(raw_text)
        if len(text) < self.min_text_length:
            self.logger.info(
                f"Resume text too short ({len(text)} < {self.min_text_length} characters)"
            )
            return self._finish(ResumeProfile())

        entities = self._recognize(text)
        results = self._run_extractors(text, entities)
        identity = results["identity"]
        history = results["history"]
        credentials = results["credentials"]

        profile = ResumeProfile(
            name=identity.name,
            email=identity.email,
            phone=identity.phone,
            location=identity.location,
            linkedin_url=identity.linkedin_url,
            github_url=identity.github_url,
            portfolio_url=identity.portfolio_url,
            skills=self._capped("skills", results["skills"]),
            soft_skills=self._capped("soft_skills", results["soft_skills"]),
            job_titles=self._capped("job_titles", history.job_titles),
            companies=self._capped("companies", history.companies),
            experience=self._capped("experience", history.experience),
            education=self._capped("education", credentials.education),
            certifications=self._capped("certifications", credentials.certifications),
            languages=self._capped("languages", credentials.languages),
            industry_experience=self._capped("industry_experience", history.industry_experience),
            years_of_experience=max(0, history.years_of_experience),
            summary=results["summary"],
        )

        self.logger.info(
            f"Extracted profile: name={'yes' if profile.name else 'no'}, "
            f"{len(profile.skills)} skills, {len(profile.job_titles)} titles, "
            f"{profile.years_of_experience} years"
        )
        return self._finish(profile)

    def _recognize(self, text: str) -> list[Entity]:
        """Entity hints from the optional recognizer; failures fall back to patterns."""
        if self.recognizer is None:
            return []

        try:
            return list(self.recognizer.recognize(text))
        except EntityRecognitionError as e:
            self.logger.warning(f"Entity recognition unavailable, using patterns only: {e}")
        except Exception as e:
            self.logger.warning(f"Entity recognition failed, using patterns only: {e}")
        return []

    def _run_extractors(self, text: str, entities: list[Entity]) -> dict:
        if not self.parallel:
            return {
                name: extractor.extract(text, entities)
                for name, extractor in self.extractors.items()
            }

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                name: executor.submit(extractor.extract, text, entities)
                for name, extractor in self.extractors.items()
            }
            return {name: future.result() for name, future in futures.items()}

    def _capped(self, field: str, values) -> tuple[str, ...]:
        return tuple(unique(values, limit=self.caps.get(field)))

    def _finish(self, profile: ResumeProfile) -> ResumeProfile:
        if profile.summary and not self.always_enhance_summary:
            return replace(profile, generated_summary=profile.summary)
        return replace(profile, generated_summary=generate_summary(profile))

    def parse_file(self, file_path: str) -> ResumeProfile:
        """
        Load a profile from a file.

        ``.txt``/``.md`` files are extracted; ``.json`` files hold a
        previously serialized profile.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        extension = path.suffix.lower()

        if extension == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Profile JSON must be an object: {file_path}")
            profile = ResumeProfile.from_dict(data)
            if profile.generated_summary:
                return profile
            return self._finish(profile)
        elif extension in [".txt", ".md"]:
            with open(path, "r", encoding="utf-8") as f:
                return self.assemble(f.read())
        else:
            raise ValueError(f"Unsupported file format: {extension}")


def extract_profile(raw_text: str) -> ResumeProfile:
    """Extract a profile with the default assembler."""
    return ProfileAssembler().assemble(raw_text)
