"""
Outbound notifications for deactivations and safety guard trips

Notifications are fire-and-forget: the public methods never raise and
never wait on delivery, so a broken broker or search engine API cannot
fail a scrape batch. Delivery itself happens in Celery workers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Base class for indexing and alert notification channels."""

    def notify_deleted(self, slugs: Iterable[str]) -> None:
        """Tell indexing collaborators these job pages are gone."""
        slugs = [slug for slug in slugs if slug]
        if not slugs:
            return
        try:
            self._send_deleted(slugs)
        except Exception as e:
            logger.warning(f"Deletion notification failed for {len(slugs)} jobs: {e}")

    def alert_low_job_count(self, employer_name: str, found_count: int, active_count: int) -> None:
        """Raise the alarm when the safety guard skipped deactivation."""
        try:
            self._send_low_job_count_alert(employer_name, found_count, active_count)
        except Exception as e:
            logger.warning(f"Low job count alert failed for {employer_name}: {e}")

    @abstractmethod
    def _send_deleted(self, slugs: List[str]) -> None:
        pass

    @abstractmethod
    def _send_low_job_count_alert(self, employer_name: str, found_count: int, active_count: int) -> None:
        pass


class NullNotifier(Notifier):
    """Logs notifications instead of sending them (tests, dry runs)."""

    def _send_deleted(self, slugs: List[str]) -> None:
        logger.info(f"Skipping deletion notification for {len(slugs)} jobs")

    def _send_low_job_count_alert(self, employer_name: str, found_count: int, active_count: int) -> None:
        logger.info(
            f"Skipping low job count alert for {employer_name}: "
            f"found={found_count} active={active_count}"
        )


class CeleryNotifier(Notifier):
    """Enqueues notification tasks; workers do the network calls."""

    def _send_deleted(self, slugs: List[str]) -> None:
        # Import here to avoid circular import
        from jobboard.tasks.jobs import submit_to_indexnow

        submit_to_indexnow.delay(slugs, "delete")

    def _send_low_job_count_alert(self, employer_name: str, found_count: int, active_count: int) -> None:
        from jobboard.tasks.jobs import send_low_job_count_alert

        send_low_job_count_alert.delay(employer_name, found_count, active_count)
