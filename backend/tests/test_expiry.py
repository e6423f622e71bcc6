"""
Tests for the expiry policy.

Run with: cd backend && pytest tests/test_expiry.py -v
"""
from datetime import datetime, timedelta

import pytest

from jobboard.models import Job
from jobboard.services.expiry import ExpiryPolicy

NOW = datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def policy():
    return ExpiryPolicy(freshness_window_days=60)


class TestCalculateExpiry:
    def test_explicit_expiry_is_stored_as_is(self, policy):
        explicit = NOW + timedelta(days=14)

        dates = policy.calculate_expiry(explicit, NOW)

        assert dates.expires_date == explicit
        assert dates.calculated_expires_date is None
        assert dates.scraped_at == NOW

    def test_without_explicit_expiry_uses_window(self, policy):
        dates = policy.calculate_expiry(None, NOW)

        assert dates.expires_date is None
        assert dates.calculated_expires_date == NOW + timedelta(days=60)

    def test_window_is_configurable(self):
        dates = ExpiryPolicy(freshness_window_days=30).calculate_expiry(None, NOW)

        assert dates.calculated_expires_date == NOW + timedelta(days=30)


class TestExtendExpiryForRefoundJob:
    def test_explicit_expiry_is_not_extended(self, policy):
        explicit = NOW + timedelta(days=1)
        job = Job(expires_date=explicit, calculated_expires_date=None)

        dates = policy.extend_expiry_for_refound_job(NOW, job)

        assert dates.expires_date == explicit
        assert dates.calculated_expires_date is None
        assert dates.scraped_at == NOW

    def test_calculated_expiry_restarts_from_now(self, policy):
        job = Job(expires_date=None, calculated_expires_date=NOW + timedelta(days=3))
        later = NOW + timedelta(days=10)

        dates = policy.extend_expiry_for_refound_job(later, job)

        assert dates.expires_date is None
        assert dates.calculated_expires_date == later + timedelta(days=60)
        assert dates.scraped_at == later

    def test_apply_writes_all_fields(self, policy):
        job = Job()

        policy.apply(job, policy.calculate_expiry(None, NOW))

        assert job.expires_date is None
        assert job.calculated_expires_date == NOW + timedelta(days=60)
        assert job.scraped_at == NOW
