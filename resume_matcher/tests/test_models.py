"""
Unit tests for the data model records.
"""

import json
import unittest

from resume_matcher.core.matcher import JobMatcher
from resume_matcher.core.models import (
    Entity,
    ExperienceLevel,
    JobPosting,
    MatchResult,
    ResumeProfile,
    SkillsMatch,
)
from resume_matcher.core.orchestrator import InMemoryMatchLedger, MatchOrchestrator
from resume_matcher.tests.samples import SAMPLE_JOBS


class TestJobPosting(unittest.TestCase):
    """Test job posting parsing."""

    def test_bare_string_is_one_skill(self):
        job = JobPosting.from_dict({"title": "Engineer", "skills": "Python, SQL"})
        self.assertEqual(job.skills, ("Python, SQL",))

    def test_non_string_items_are_stringified(self):
        job = JobPosting.from_dict({"skills": ["Python", 5, None], "requirements": [3.5]})
        self.assertEqual(job.skills, ("Python", "5"))
        self.assertEqual(job.requirements, ("3.5",))

    def test_scoring_tolerates_non_string_skills(self):
        profile = ResumeProfile(skills=("Python",))
        result = JobMatcher(profile).match_job(JobPosting(id="j", skills=("Python", 5)))

        self.assertEqual(result.skills_match.matched, ["Python"])
        self.assertEqual(result.skills_match.missing, ["5"])
        self.assertEqual(result.skills_match.score, 50)

    def test_key_and_level(self):
        job = JobPosting.from_dict({"title": "Data Analyst", "company": "Umbrella",
                                    "experienceLevel": "junior"})
        self.assertEqual(job.key, "data analyst_umbrella")
        self.assertEqual(job.level, ExperienceLevel.ENTRY)


class TestResumeProfile(unittest.TestCase):
    """Test profile records."""

    def test_from_dict_coerces_fields(self):
        profile = ResumeProfile.from_dict({
            "name": "Ada Lovelace",
            "skills": "Python",
            "languages": ["English", None],
            "years_of_experience": "-3",
            "current_job_title": "ignored",
        })
        self.assertEqual(profile.skills, ("Python",))
        self.assertEqual(profile.languages, ("English",))
        self.assertEqual(profile.years_of_experience, 0)

    def test_fingerprint(self):
        self.assertEqual(ResumeProfile(email="Jane@Mail.io").fingerprint, "jane@mail.io")
        anonymous = ResumeProfile(name="Jane Doe")
        self.assertEqual(anonymous.fingerprint, ResumeProfile(name="Jane Doe").fingerprint)
        self.assertNotEqual(anonymous.fingerprint, ResumeProfile(name="John Doe").fingerprint)


class TestSavedResults(unittest.TestCase):
    """Test reloading entities and match results."""

    def test_entity_from_dict(self):
        entity = Entity.from_dict({"label": "PER", "text": "Jane Doe", "score": "0.9"})
        self.assertEqual(entity, Entity("PER", "Jane Doe", 0.9))

    def test_match_result_from_dict(self):
        saved = {
            "job_id": "job-1",
            "profile_id": "p-1",
            "match_score": 88,
            "match_reasons": ["Strong job title match"],
            "skills_match": {"matched": ["Python"], "missing": ["Docker"], "score": 50},
            "title_match": 100,
            "experience_match": 70,
            "location_match": 90,
        }
        result = MatchResult.from_dict(saved)

        self.assertEqual(result.skills_match, SkillsMatch(["Python"], ["Docker"], 50))
        self.assertEqual(result.to_dict(), saved)

    def test_saved_results_seed_a_ledger(self):
        profile = ResumeProfile(email="jane.doe@gmail.com", skills=("Python",))
        jobs = [JobPosting.from_dict(job) for job in SAMPLE_JOBS]
        saved = json.dumps([r.to_dict() for r in MatchOrchestrator().rank(profile, jobs)])

        ledger = InMemoryMatchLedger(MatchResult.from_dict(d) for d in json.loads(saved))
        self.assertEqual(len(ledger), 3)
        self.assertEqual(list(MatchOrchestrator(ledger=ledger).run(profile, jobs)), [])


if __name__ == "__main__":
    unittest.main()
