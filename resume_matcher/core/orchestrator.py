"""
Match Orchestrator - Scores a profile against a job collection at most once
per (profile, job) pair.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional
import logging
import threading

from .matcher import JobMatcher
from .models import JobPosting, MatchResult, ResumeProfile
from .taxonomy import SkillTaxonomy

MatchKey = tuple[str, str]  # (profile id, job id)


class MatchLedger(ABC):
    """
    Idempotency ledger of produced match results.

    ``claim`` must be atomic: of two concurrent claims for the same key,
    exactly one succeeds.
    """

    @abstractmethod
    def claim(self, key: MatchKey) -> bool:
        """Reserve a key; False when it is already claimed or recorded."""
        pass

    @abstractmethod
    def record(self, key: MatchKey, result: MatchResult) -> None:
        """Store the result for a key, replacing any previous one."""
        pass

    @abstractmethod
    def release(self, key: MatchKey) -> None:
        """Drop a claim that never produced a result."""
        pass

    @abstractmethod
    def get(self, key: MatchKey) -> Optional[MatchResult]:
        pass


class InMemoryMatchLedger(MatchLedger):
    """Thread-safe ledger held in process memory."""

    def __init__(self, existing: Iterable[MatchResult] = ()):
        self._lock = threading.Lock()
        self._claimed: set[MatchKey] = set()
        self._results: dict[MatchKey, MatchResult] = {}

        for result in existing:
            key = (result.profile_id, result.job_id)
            self._claimed.add(key)
            self._results[key] = result

    def claim(self, key: MatchKey) -> bool:
        with self._lock:
            if key in self._claimed:
                return False
            self._claimed.add(key)
            return True

    def record(self, key: MatchKey, result: MatchResult) -> None:
        with self._lock:
            self._claimed.add(key)
            self._results[key] = result

    def release(self, key: MatchKey) -> None:
        with self._lock:
            if key not in self._results:
                self._claimed.discard(key)

    def get(self, key: MatchKey) -> Optional[MatchResult]:
        with self._lock:
            return self._results.get(key)

    def results(self) -> list[MatchResult]:
        with self._lock:
            return list(self._results.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


class MatchOrchestrator:
    """Runs the job matcher across a job collection without duplicating results."""

    def __init__(
        self,
        ledger: Optional[MatchLedger] = None,
        weights: Optional[dict] = None,
        taxonomy: Optional[SkillTaxonomy] = None,
        max_workers: int = 4,
    ):
        self.ledger = ledger if ledger is not None else InMemoryMatchLedger()
        self.weights = weights
        self.taxonomy = taxonomy
        self.max_workers = max_workers
        self.logger = logging.getLogger(self.__class__.__name__)

    def _matcher(self, profile: ResumeProfile, profile_id: Optional[str]) -> JobMatcher:
        return JobMatcher(profile, weights=self.weights, taxonomy=self.taxonomy, profile_id=profile_id)

    def run(
        self,
        profile: ResumeProfile,
        jobs: Iterable[JobPosting],
        profile_id: Optional[str] = None,
        refresh: bool = False,
        include_existing: bool = False,
    ) -> Iterator[MatchResult]:
        """
        Lazily score each job not yet matched for this profile.

        Args:
            profile: Candidate profile
            jobs: Job postings, consumed lazily
            profile_id: Profile identity; defaults to the profile fingerprint
            refresh: Recompute and replace results that already exist
            include_existing: Also yield stored results for skipped pairs

        Yields:
            MatchResult per job, in input order
        """
        matcher = self._matcher(profile, profile_id)

        for job in jobs:
            key = (matcher.profile_id, job.key)

            if not refresh and not self.ledger.claim(key):
                self.logger.debug(f"Skipping existing match {key}")
                if include_existing:
                    existing = self.ledger.get(key)
                    if existing is not None:
                        yield existing
                continue

            yield self._score(matcher, job, key)

    def _score(self, matcher: JobMatcher, job: JobPosting, key: MatchKey) -> MatchResult:
        try:
            result = matcher.match_job(job)
        except Exception:
            self.ledger.release(key)
            raise
        self.ledger.record(key, result)
        return result

    def rank(
        self,
        profile: ResumeProfile,
        jobs: Iterable[JobPosting],
        profile_id: Optional[str] = None,
        refresh: bool = False,
        include_existing: bool = False,
        top: Optional[int] = None,
    ) -> list[MatchResult]:
        """
        Score jobs on a worker pool and return results best first.

        Ties go to the higher skills score, then to input order.
        """
        matcher = self._matcher(profile, profile_id)

        pending = []
        ranked = []
        for index, job in enumerate(jobs):
            key = (matcher.profile_id, job.key)
            if refresh or self.ledger.claim(key):
                pending.append((index, job, key))
            elif include_existing:
                existing = self.ledger.get(key)
                if existing is not None:
                    ranked.append((index, existing))

        if self.max_workers > 1 and len(pending) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    (index, executor.submit(self._score, matcher, job, key))
                    for index, job, key in pending
                ]
                ranked.extend((index, future.result()) for index, future in futures)
        else:
            ranked.extend((index, self._score(matcher, job, key)) for index, job, key in pending)

        ranked.sort(key=lambda x: (-x[1].match_score, -x[1].skills_match.score, x[0]))
        results = [result for _, result in ranked]

        self.logger.info(f"Ranked {len(results)} matches ({len(pending)} newly scored)")
        return results[:top] if top else results
