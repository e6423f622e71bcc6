"""
Tests for the expiration sweeper.

Run with: cd backend && pytest tests/test_sweeper.py -v
"""
from datetime import timedelta

import pytest

from jobboard.models import Job
from jobboard.services.sweeper import ExpirationSweeper


@pytest.fixture
def sweeper(repository, notifier, clock):
    return ExpirationSweeper(repository, notifier, clock)


class TestExpirationSweeper:
    def test_nothing_to_sweep(self, sweeper, employer, seed_jobs, notifier):
        seed_jobs(employer, 2)

        result = sweeper.sweep()

        assert result.count == 0
        notifier.notify_deleted.assert_not_called()

    def test_deactivates_explicit_and_calculated_expiry(self, sweeper, employer, seed_jobs, session, clock):
        past = clock() - timedelta(minutes=1)
        explicit = seed_jobs(employer, 1, prefix="explicit", expires_date=past)[0]
        calculated = seed_jobs(employer, 1, prefix="calc")[0]
        calculated.calculated_expires_date = clock()
        fresh = seed_jobs(employer, 1, prefix="fresh")[0]
        session.commit()

        result = sweeper.sweep()

        assert result.count == 2
        assert {job.id for job in result.jobs} == {explicit.id, calculated.id}
        assert session.get(Job, explicit.id).is_active is False
        assert session.get(Job, calculated.id).is_active is False
        assert session.get(Job, fresh.id).is_active is True

    def test_sweeps_across_employers(self, sweeper, repository, employer, seed_jobs, clock):
        other = repository.create_employer("Other Health", "other-health", None, "custom")
        seed_jobs(employer, 1, expires_date=clock() - timedelta(days=1))
        seed_jobs(other, 1, expires_date=clock() - timedelta(days=1))

        assert sweeper.sweep().count == 2

    def test_already_inactive_jobs_are_not_counted(self, sweeper, employer, seed_jobs, clock):
        seed_jobs(employer, 2, active=False, expires_date=clock() - timedelta(days=1))

        assert sweeper.sweep().count == 0

    def test_notifies_deleted_slugs(self, sweeper, employer, seed_jobs, clock, notifier):
        (job,) = seed_jobs(employer, 1, expires_date=clock() - timedelta(days=1))

        sweeper.sweep()

        assert list(notifier.notify_deleted.call_args.args[0]) == [job.slug]

    def test_never_activates(self, sweeper, employer, seed_jobs, session):
        (job,) = seed_jobs(employer, 1, active=False)

        sweeper.sweep()

        assert session.get(Job, job.id).is_active is False
