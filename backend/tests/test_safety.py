"""
Tests for the active-set safety guard.

Run with: cd backend && pytest tests/test_safety.py -v
"""
import pytest

from jobboard.config import ReconcilerConfig
from jobboard.models import Job
from jobboard.services.safety import ActiveSetSafetyGuard


@pytest.fixture
def guard(repository, notifier):
    return ActiveSetSafetyGuard(repository, ReconcilerConfig(), notifier)


class TestShouldSkip:
    def test_too_few_found_in_absolute_terms(self, guard):
        # 5 < 10 found, and 5% < 30%
        assert guard.should_skip(found_count=5, active_count=100)

    def test_healthy_ratio_proceeds(self, guard):
        # 40% >= 30%
        assert not guard.should_skip(found_count=40, active_count=100)

    def test_low_ratio_trips_even_above_absolute_minimum(self, guard):
        assert guard.should_skip(found_count=20, active_count=100)

    def test_small_catalogs_are_never_guarded(self, guard):
        assert not guard.should_skip(found_count=0, active_count=10)
        assert not guard.should_skip(found_count=1, active_count=5)

    def test_thresholds_are_configurable(self, repository, notifier):
        guard = ActiveSetSafetyGuard(
            repository,
            ReconcilerConfig(safety_min_active_jobs=50, safety_min_found_jobs=2, safety_min_found_ratio=0.1),
            notifier,
        )

        assert not guard.should_skip(found_count=5, active_count=40)
        assert guard.should_skip(found_count=5, active_count=60)


class TestVerify:
    def test_deactivates_jobs_missing_from_scrape(self, guard, employer, seed_jobs, session, notifier):
        jobs = seed_jobs(employer, 4)
        found = [job.source_url for job in jobs[:3]]

        result = guard.verify(found, employer)

        assert result.count == 1
        assert not result.skipped
        assert [j.id for j in result.jobs] == [jobs[3].id]
        assert session.get(Job, jobs[3].id).is_active is False
        assert all(session.get(Job, job.id).is_active for job in jobs[:3])
        notifier.notify_deleted.assert_called_once()
        assert list(notifier.notify_deleted.call_args.args[0]) == [jobs[3].slug]

    def test_trips_and_writes_nothing(self, guard, repository, employer, seed_jobs, notifier):
        jobs = seed_jobs(employer, 100)
        found = [job.source_url for job in jobs[:5]]

        result = guard.verify(found, employer)

        assert result.skipped is True
        assert result.reason == "safety_guard"
        assert result.count == 0
        assert result.found_count == 5
        assert result.active_count == 100
        assert repository.count_active_jobs(employer.id) == 100
        notifier.alert_low_job_count.assert_called_once_with("Acme Health", 5, 100)
        notifier.notify_deleted.assert_not_called()

    def test_proceeds_at_healthy_ratio(self, guard, repository, employer, seed_jobs):
        jobs = seed_jobs(employer, 100)
        found = [job.source_url for job in jobs[:40]]

        result = guard.verify(found, employer)

        assert not result.skipped
        assert result.count == 60
        assert repository.count_active_jobs(employer.id) == 40

    def test_found_count_includes_repeated_urls(self, guard, repository, employer, seed_jobs):
        jobs = seed_jobs(employer, 20)
        found = [job.source_url for job in jobs[:5]] * 2

        result = guard.verify(found, employer)

        assert result.found_count == 10
        assert not result.skipped
        assert result.count == 15
        assert repository.count_active_jobs(employer.id) == 5

    def test_only_touches_this_employers_jobs(self, guard, repository, employer, seed_jobs, session):
        other = repository.create_employer("Other Health", "other-health", None, "custom")
        mine = seed_jobs(employer, 2)
        theirs = seed_jobs(other, 2)

        result = guard.verify([mine[0].source_url], employer)

        assert result.count == 1
        assert all(session.get(Job, job.id).is_active for job in theirs)

    def test_inactive_jobs_are_ignored(self, guard, employer, seed_jobs):
        seed_jobs(employer, 3, active=False)
        (active,) = seed_jobs(employer, 1, prefix="live")

        result = guard.verify([active.source_url], employer)

        assert result.count == 0
        assert result.jobs == []

    def test_empty_scrape_is_skipped(self, guard, repository, employer, seed_jobs, notifier):
        seed_jobs(employer, 3)

        result = guard.verify([], employer)

        assert result.skipped is True
        assert result.reason == "empty_scrape"
        assert repository.count_active_jobs(employer.id) == 3
        notifier.alert_low_job_count.assert_not_called()

    def test_empty_scrape_of_large_catalog_alerts(self, guard, employer, seed_jobs, notifier):
        seed_jobs(employer, 20)

        result = guard.verify([], employer)

        assert result.reason == "safety_guard"
        notifier.alert_low_job_count.assert_called_once_with("Acme Health", 0, 20)
