"""
Job Matcher - Scoring algorithm for matching job postings to resume profiles.

Calculates four sub-scores (0-100):
- Skill match: share of the job's skills the candidate has
- Title match: similarity of the candidate's titles to the job title
- Experience match: distance between experience tiers
- Location match: geographic proximity

and combines them with fixed weights into a 1-100 match score with
human-readable reasons.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional
import logging
import math
import re

from . import geography
from .models import (
    ExperienceLevel,
    JobPosting,
    MatchResult,
    ResumeProfile,
    SkillsMatch,
)
from .taxonomy import SkillTaxonomy


def _round(value: float) -> int:
    """Round half up; built-in round() uses banker's rounding."""
    return int(math.floor(value + 0.5))


class JobMatcher:
    """Matches a resume profile to job postings and calculates fit scores."""

    # Weights for overall score calculation
    WEIGHTS = {
        "skill_match": 0.35,
        "title_match": 0.25,
        "experience_match": 0.20,
        "location_match": 0.20,
    }

    MIN_SCORE = 1
    MAX_SCORE = 100

    # Score lost per tier of experience distance
    EXPERIENCE_STEP_PENALTY = 30

    # Keyword cues in titles and experience entries
    SENIOR_CUES = [
        "senior", "lead", "manager", "principal", "staff", "director",
        "chief", "vp", "vice president", "head",
    ]
    ENTRY_CUES = ["junior", "entry", "intern", "trainee", "graduate"]

    LOCATION_SCORES = {
        "exact": 100,
        "unknown": 50,
        "same_region": 90,
        "same_country": 70,
        "elsewhere": 30,
    }

    def __init__(
        self,
        profile: ResumeProfile,
        weights: Optional[dict] = None,
        taxonomy: Optional[SkillTaxonomy] = None,
        profile_id: Optional[str] = None,
    ):
        self.profile = profile
        self.weights = {**self.WEIGHTS, **(weights or {})}
        self.taxonomy = taxonomy or SkillTaxonomy.default()
        self.profile_id = profile_id or profile.fingerprint
        self.logger = logging.getLogger(self.__class__.__name__)

    def match_job(self, job: JobPosting) -> MatchResult:
        """Calculate the match result for one job posting."""
        result = MatchResult(job_id=job.key, profile_id=self.profile_id)

        # Calculate individual scores
        result.skills_match = self._calculate_skill_match(job)
        result.title_match = self._calculate_title_match(job)
        result.experience_match = self._calculate_experience_match(job)
        result.location_match = self._calculate_location_match(job)

        # Calculate overall score
        weighted = (
            result.skills_match.score * self.weights["skill_match"] +
            result.title_match * self.weights["title_match"] +
            result.experience_match * self.weights["experience_match"] +
            result.location_match * self.weights["location_match"]
        )
        result.match_score = max(self.MIN_SCORE, min(self.MAX_SCORE, _round(weighted)))
        result.match_reasons = self._build_reasons(result)

        self.logger.debug(f"Scored {job.key}: {result.match_score}")
        return result

    def _calculate_skill_match(self, job: JobPosting) -> SkillsMatch:
        """Share of the job's skills the candidate has (0-100)."""
        job_skills = []
        seen = set()
        for skill in job.skills:
            skill = str(skill or "").strip()
            if skill and skill.lower() not in seen:
                seen.add(skill.lower())
                job_skills.append(skill)

        candidate_skills = [str(s) for s in self.profile.skills if s and str(s).strip()]
        if not job_skills or not candidate_skills:
            return SkillsMatch(matched=[], missing=job_skills, score=0)

        matched = []
        missing = []
        for job_skill in job_skills:
            if any(self._skills_match(job_skill, s) for s in candidate_skills):
                matched.append(job_skill)
            else:
                missing.append(job_skill)

        score = _round(len(matched) / len(job_skills) * 100)
        return SkillsMatch(matched=matched, missing=missing, score=score)

    def _skills_match(self, skill1: str, skill2: str) -> bool:
        """Check if two skill names match (including taxonomy variants)."""
        lower1, lower2 = skill1.strip().lower(), skill2.strip().lower()

        # Exact match
        if lower1 == lower2:
            return True

        # Same canonical skill ("JS" and "JavaScript")
        canonical = self.taxonomy.canonicalize(skill1)
        if canonical and canonical == self.taxonomy.canonicalize(skill2):
            return True

        # Substring match for compound skills ("SQL" in "PostgreSQL")
        if lower1 and lower2 and (lower1 in lower2 or lower2 in lower1):
            return True

        return False

    def _calculate_title_match(self, job: JobPosting) -> int:
        """Best title similarity across the candidate's titles (0-100)."""
        job_title = " ".join(job.title.lower().split())
        if not job_title or not self.profile.job_titles:
            return 0

        job_words = re.findall(r"[a-z0-9+#]+", job_title)
        if not job_words:
            return 0

        best = 0
        for title in self.profile.job_titles:
            title = " ".join(title.lower().split())
            if title == job_title:
                return 100

            title_words = set(re.findall(r"[a-z0-9+#]+", title))
            common = [w for w in job_words if w in title_words and len(w) > 2]
            best = max(best, _round(len(common) / len(job_words) * 80))

        return best

    @property
    def candidate_level(self) -> ExperienceLevel:
        """
        Experience tier inferred from keyword cues, then years.

        Only entry, mid and senior are inferred for candidates.
        """
        cue_text = " ".join(self.profile.job_titles + self.profile.experience).lower()

        if any(re.search(rf"\b{re.escape(cue)}\b", cue_text) for cue in self.SENIOR_CUES):
            return ExperienceLevel.SENIOR
        if any(re.search(rf"\b{re.escape(cue)}\b", cue_text) for cue in self.ENTRY_CUES):
            return ExperienceLevel.ENTRY

        years = self.profile.years_of_experience
        if years >= 6:
            return ExperienceLevel.SENIOR
        if years >= 3:
            return ExperienceLevel.MID
        if years >= 1:
            return ExperienceLevel.ENTRY
        return ExperienceLevel.MID

    def _calculate_experience_match(self, job: JobPosting) -> int:
        """Experience tier distance score (0-100); unstated job level is mid."""
        distance = abs(self.candidate_level.ordinal - job.level.ordinal)
        return max(0, 100 - self.EXPERIENCE_STEP_PENALTY * distance)

    def _calculate_location_match(self, job: JobPosting) -> int:
        """Calculate location match score (0-100)."""
        job_loc = " ".join(job.location.lower().split())
        user_loc = " ".join(self.profile.location.lower().split())

        if not job_loc or not user_loc:
            return self.LOCATION_SCORES["unknown"]

        if job_loc == user_loc:
            return self.LOCATION_SCORES["exact"]

        job_place = geography.resolve_place(job.location)
        user_place = geography.resolve_place(self.profile.location)

        if job_place.region_key and job_place.region_key == user_place.region_key:
            return self.LOCATION_SCORES["same_region"]
        if job_place.country and job_place.country == user_place.country:
            return self.LOCATION_SCORES["same_country"]
        return self.LOCATION_SCORES["elsewhere"]

    def _build_reasons(self, result: MatchResult) -> list[str]:
        """Match reasons in fixed order: skills, title, location, multiplicity."""
        reasons = []
        matched = result.skills_match.matched

        if matched:
            reasons.append(f"{len(matched)} matching skills: {', '.join(matched[:3])}")
        if result.title_match > 70:
            reasons.append("Strong job title match")
        if result.location_match > 80:
            reasons.append("Excellent location match")
        if len(matched) >= 3:
            reasons.append("Multiple skill matches")

        return reasons

    def rank_jobs(
        self,
        jobs: list[JobPosting],
        max_workers: int = 1,
    ) -> list[tuple[JobPosting, MatchResult]]:
        """
        Rank a list of jobs by match score.

        Args:
            jobs: List of jobs to rank
            max_workers: Score on this many threads when greater than 1

        Returns:
            List of (job, result) tuples, best match first; ties go to the
            higher skills score, then to input order
        """
        if max_workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(self.match_job, jobs))
        else:
            results = [self.match_job(job) for job in jobs]

        ranked = sorted(
            enumerate(zip(jobs, results)),
            key=lambda x: (-x[1][1].match_score, -x[1][1].skills_match.score, x[0]),
        )
        return [pair for _, pair in ranked]


def score(profile: ResumeProfile, job: JobPosting) -> MatchResult:
    """Score one profile against one job with the default weights."""
    return JobMatcher(profile).match_job(job)
