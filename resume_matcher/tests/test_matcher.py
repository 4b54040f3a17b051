"""
Unit tests for the job matching algorithm.
"""

import unittest

from resume_matcher.core.matcher import JobMatcher, score
from resume_matcher.core.models import ExperienceLevel, JobPosting, ResumeProfile


def make_profile(**overrides):
    values = {
        "name": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "skills": ("Python", "SQL"),
        "job_titles": ("Senior Software Engineer",),
        "years_of_experience": 7,
        "location": "Austin, TX",
    }
    values.update(overrides)
    return ResumeProfile(**values)


def make_job(**overrides):
    values = {
        "id": "job-1",
        "title": "Senior Software Engineer",
        "company": "Initech",
        "location": "Austin, TX",
        "skills": ("Python", "SQL", "Docker"),
        "experience_level": "senior",
    }
    values.update(overrides)
    return JobPosting(**values)


class TestJobMatcher(unittest.TestCase):
    """Test the overall score and its breakdown."""

    def test_full_breakdown(self):
        result = JobMatcher(make_profile()).match_job(make_job())

        self.assertEqual(result.skills_match.score, 67)
        self.assertEqual(result.skills_match.matched, ["Python", "SQL"])
        self.assertEqual(result.skills_match.missing, ["Docker"])
        self.assertEqual(result.title_match, 100)
        self.assertEqual(result.experience_match, 100)
        self.assertEqual(result.location_match, 100)
        self.assertEqual(result.match_score, 88)
        self.assertEqual(result.match_reasons, [
            "2 matching skills: Python, SQL",
            "Strong job title match",
            "Excellent location match",
        ])
        self.assertEqual(result.job_id, "job-1")
        self.assertEqual(result.profile_id, "jane.doe@gmail.com")

    def test_multiple_skill_matches_reason(self):
        profile = make_profile(skills=("Python", "SQL", "Docker"), location="")
        result = JobMatcher(profile).match_job(make_job())

        self.assertEqual(result.match_reasons, [
            "3 matching skills: Python, SQL, Docker",
            "Strong job title match",
            "Multiple skill matches",
        ])

    def test_score_is_bounded(self):
        zero = {k: 0.0 for k in JobMatcher.WEIGHTS}
        self.assertEqual(JobMatcher(make_profile(), weights=zero).match_job(make_job()).match_score, 1)

        doubled = {k: 2.0 for k in JobMatcher.WEIGHTS}
        self.assertEqual(JobMatcher(make_profile(), weights=doubled).match_job(make_job()).match_score, 100)

    def test_more_matching_skills_never_lower_the_score(self):
        job = make_job()
        before = score(make_profile(skills=("Python",)), job).match_score
        after = score(make_profile(skills=("Python", "Docker")), job).match_score
        self.assertGreaterEqual(after, before)

    def test_explicit_profile_id(self):
        result = JobMatcher(make_profile(), profile_id="candidate-42").match_job(make_job())
        self.assertEqual(result.profile_id, "candidate-42")


class TestSkillMatch(unittest.TestCase):
    """Test skill overlap scoring."""

    def _skills(self, candidate, job):
        matcher = JobMatcher(make_profile(skills=tuple(candidate)))
        return matcher.match_job(make_job(skills=tuple(job))).skills_match

    def test_empty_sides_score_zero(self):
        self.assertEqual(self._skills([], ["Python"]).score, 0)
        self.assertEqual(self._skills([], ["Python"]).missing, ["Python"])
        self.assertEqual(self._skills(["Python"], []).score, 0)

    def test_duplicate_job_skills_count_once(self):
        skills = self._skills(["Python"], ["Python", "python", "Go"])
        self.assertEqual(skills.matched, ["Python"])
        self.assertEqual(skills.score, 50)

    def test_taxonomy_variants_match(self):
        self.assertEqual(self._skills(["JavaScript"], ["JS"]).score, 100)
        self.assertEqual(self._skills(["React"], ["ReactJS"]).score, 100)

    def test_substring_match_either_way(self):
        self.assertEqual(self._skills(["PostgreSQL"], ["SQL"]).score, 100)
        self.assertEqual(self._skills(["SQL"], ["PostgreSQL"]).score, 100)
        self.assertEqual(self._skills(["C++"], ["C"]).score, 100)
        self.assertEqual(self._skills(["Google Cloud"], ["Go"]).score, 100)
        self.assertEqual(self._skills(["Python"], ["Tableau"]).score, 0)


class TestTitleMatch(unittest.TestCase):
    """Test job title similarity."""

    def test_exact_title_ignores_case_and_spacing(self):
        matcher = JobMatcher(make_profile(job_titles=("senior  software engineer",)))
        self.assertEqual(matcher.match_job(make_job()).title_match, 100)

    def test_partial_title(self):
        matcher = JobMatcher(make_profile(job_titles=("Backend Developer",)))
        job = make_job(title="Senior Backend Developer")
        self.assertEqual(matcher.match_job(job).title_match, 53)

    def test_best_title_wins(self):
        matcher = JobMatcher(make_profile(job_titles=("Data Analyst", "Backend Developer")))
        self.assertEqual(matcher.match_job(make_job(title="Backend Developer")).title_match, 100)

    def test_no_titles(self):
        matcher = JobMatcher(make_profile(job_titles=()))
        self.assertEqual(matcher.match_job(make_job()).title_match, 0)


class TestExperienceMatch(unittest.TestCase):
    """Test experience tier inference and distance."""

    def test_candidate_level_from_cues(self):
        self.assertEqual(JobMatcher(make_profile()).candidate_level, ExperienceLevel.SENIOR)
        junior = make_profile(job_titles=("Junior Developer",), years_of_experience=9)
        self.assertEqual(JobMatcher(junior).candidate_level, ExperienceLevel.ENTRY)

    def test_candidate_level_from_years(self):
        def level(years):
            profile = make_profile(job_titles=("Developer",), years_of_experience=years)
            return JobMatcher(profile).candidate_level

        self.assertEqual(level(6), ExperienceLevel.SENIOR)
        self.assertEqual(level(3), ExperienceLevel.MID)
        self.assertEqual(level(1), ExperienceLevel.ENTRY)
        self.assertEqual(level(0), ExperienceLevel.MID)

    def test_tier_distance(self):
        junior = make_profile(job_titles=("Junior Developer",), years_of_experience=1)
        self.assertEqual(JobMatcher(junior).match_job(make_job()).experience_match, 40)

        unknown = make_profile(job_titles=(), years_of_experience=0)
        executive = make_job(experience_level="executive")
        self.assertEqual(JobMatcher(unknown).match_job(executive).experience_match, 40)

    def test_unstated_job_level_is_mid(self):
        mid = make_profile(job_titles=("Developer",), years_of_experience=4)
        self.assertEqual(JobMatcher(mid).match_job(make_job(experience_level="")).experience_match, 100)


class TestLocationMatch(unittest.TestCase):
    """Test geographic proximity tiers."""

    def _location(self, candidate, job):
        matcher = JobMatcher(make_profile(location=candidate))
        return matcher.match_job(make_job(location=job)).location_match

    def test_exact_and_unknown(self):
        self.assertEqual(self._location("Austin, TX", "austin,  tx"), 100)
        self.assertEqual(self._location("Austin, TX", ""), 50)
        self.assertEqual(self._location("", "Austin, TX"), 50)

    def test_same_region(self):
        self.assertEqual(self._location("Austin, TX", "Dallas, TX"), 90)
        self.assertEqual(self._location("Ikeja, Lagos", "Lagos, Nigeria"), 90)

    def test_same_country(self):
        self.assertEqual(self._location("Austin, TX", "Seattle, WA"), 70)
        self.assertEqual(self._location("Lagos, Nigeria", "Abuja, Nigeria"), 70)

    def test_elsewhere(self):
        self.assertEqual(self._location("Austin, TX", "London, United Kingdom"), 30)


class TestRanking(unittest.TestCase):
    """Test ordering of ranked jobs."""

    def test_best_match_first(self):
        jobs = [
            make_job(id="far", location="London, United Kingdom", title="Data Analyst"),
            make_job(id="near"),
        ]
        ranked = JobMatcher(make_profile()).rank_jobs(jobs)
        self.assertEqual([job.id for job, _ in ranked], ["near", "far"])

    def test_ties_break_on_skills_then_input_order(self):
        no_skills = {"skill_match": 0.0}
        jobs = [
            make_job(id="a", skills=("Go",)),
            make_job(id="b", skills=("Python",)),
            make_job(id="c", skills=("Python",)),
        ]
        ranked = JobMatcher(make_profile(), weights=no_skills).rank_jobs(jobs)
        self.assertEqual([job.id for job, _ in ranked], ["b", "c", "a"])

    def test_threaded_ranking_matches_sequential(self):
        jobs = [make_job(id=str(i), skills=("Python",) * (i % 2) + ("Go",)) for i in range(6)]
        matcher = JobMatcher(make_profile())
        sequential = [(job.id, r.match_score) for job, r in matcher.rank_jobs(jobs)]
        threaded = [(job.id, r.match_score) for job, r in matcher.rank_jobs(jobs, max_workers=3)]
        self.assertEqual(sequential, threaded)


if __name__ == "__main__":
    unittest.main()
