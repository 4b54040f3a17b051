"""
Unit tests for idempotent match orchestration.
"""

import threading
import unittest
from unittest import mock

from resume_matcher.core.matcher import JobMatcher
from resume_matcher.core.models import JobPosting, MatchResult, ResumeProfile
from resume_matcher.core.orchestrator import InMemoryMatchLedger, MatchOrchestrator
from resume_matcher.tests.samples import SAMPLE_JOBS

PROFILE = ResumeProfile(
    name="Jane Doe",
    email="jane.doe@gmail.com",
    skills=("Python", "Django", "AWS", "PostgreSQL", "Docker"),
    job_titles=("Senior Software Engineer",),
    years_of_experience=7,
    location="Austin, TX",
)


def sample_jobs():
    return [JobPosting.from_dict(job) for job in SAMPLE_JOBS]


class TestMatchOrchestrator(unittest.TestCase):
    """Test at-most-once scoring per (profile, job) pair."""

    def setUp(self):
        self.ledger = InMemoryMatchLedger()
        self.orchestrator = MatchOrchestrator(ledger=self.ledger, max_workers=1)

    def test_second_run_produces_nothing_new(self):
        first = list(self.orchestrator.run(PROFILE, sample_jobs()))
        second = list(self.orchestrator.run(PROFILE, sample_jobs()))

        self.assertEqual([r.job_id for r in first], ["job-1", "job-2", "job-3"])
        self.assertEqual(second, [])
        self.assertEqual(len(self.ledger), 3)

    def test_include_existing_yields_stored_results(self):
        first = list(self.orchestrator.run(PROFILE, sample_jobs()))
        again = list(self.orchestrator.run(PROFILE, sample_jobs(), include_existing=True))

        self.assertEqual(len(again), 3)
        for stored, returned in zip(first, again):
            self.assertIs(stored, returned)

    def test_refresh_recomputes(self):
        first = list(self.orchestrator.run(PROFILE, sample_jobs()))
        refreshed = list(self.orchestrator.run(PROFILE, sample_jobs(), refresh=True))

        self.assertEqual(len(refreshed), 3)
        self.assertIsNot(first[0], refreshed[0])
        self.assertIs(self.ledger.get(("jane.doe@gmail.com", "job-1")), refreshed[0])

    def test_duplicate_job_in_one_pass(self):
        job = sample_jobs()[0]
        self.assertEqual(len(list(self.orchestrator.run(PROFILE, [job, job]))), 1)

    def test_profiles_are_tracked_separately(self):
        list(self.orchestrator.run(PROFILE, sample_jobs()))
        other = list(self.orchestrator.run(PROFILE, sample_jobs(), profile_id="candidate-2"))
        self.assertEqual(len(other), 3)
        self.assertEqual(len(self.ledger), 6)

    def test_seeded_ledger_skips_known_pairs(self):
        ledger = InMemoryMatchLedger([MatchResult(job_id="job-1", profile_id="p-1")])
        orchestrator = MatchOrchestrator(ledger=ledger)

        results = list(orchestrator.run(PROFILE, sample_jobs(), profile_id="p-1"))
        self.assertEqual([r.job_id for r in results], ["job-2", "job-3"])

    def test_failed_scoring_releases_claim(self):
        job = sample_jobs()[0]
        with mock.patch.object(JobMatcher, "match_job", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                list(self.orchestrator.run(PROFILE, [job]))

        self.assertEqual(len(list(self.orchestrator.run(PROFILE, [job]))), 1)

    def test_run_is_lazy(self):
        jobs = iter(sample_jobs())
        results = self.orchestrator.run(PROFILE, jobs)

        self.assertEqual(next(results).job_id, "job-1")
        self.assertEqual(len(self.ledger), 1)

    def test_concurrent_runs_never_duplicate(self):
        orchestrator = MatchOrchestrator(ledger=self.ledger)
        jobs = [JobPosting(id=f"job-{i}", title="Engineer", skills=("Python",)) for i in range(50)]
        produced = []
        lock = threading.Lock()

        def worker():
            results = list(orchestrator.run(PROFILE, jobs))
            with lock:
                produced.extend(results)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(produced), 50)
        self.assertEqual(len({r.job_id for r in produced}), 50)


class TestRank(unittest.TestCase):
    """Test ranked, parallel scoring."""

    def test_rank_orders_and_limits(self):
        orchestrator = MatchOrchestrator(max_workers=4)
        results = orchestrator.rank(PROFILE, sample_jobs(), top=2)

        self.assertEqual([r.job_id for r in results], ["job-1", "job-3"])
        self.assertEqual(results[0].match_score, 98)

    def test_rank_all(self):
        results = MatchOrchestrator().rank(PROFILE, sample_jobs())
        self.assertEqual([r.job_id for r in results], ["job-1", "job-3", "job-2"])

    def test_rank_with_existing_results(self):
        orchestrator = MatchOrchestrator()
        first = orchestrator.rank(PROFILE, sample_jobs())

        self.assertEqual(orchestrator.rank(PROFILE, sample_jobs()), [])
        self.assertEqual(orchestrator.rank(PROFILE, sample_jobs(), include_existing=True), first)


if __name__ == "__main__":
    unittest.main()
