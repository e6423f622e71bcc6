"""
Content Merge Policy - protects rich descriptions from thin re-scrapes

A scrape that failed to load the detail page produces a skeleton
description. Overwriting a stored complete description (or a classifier
rewrite of it) with that skeleton would degrade the listing, so raw
content only moves one way: skeleton to complete.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from jobboard.models import Job

logger = logging.getLogger(__name__)

CompletenessPredicate = Callable[[Optional[str]], bool]


class MarkerCompleteness:
    """
    Default completeness check: a section marker AND enough text.

    Markers prove the detail page was fetched, the length proves content
    was actually extracted from it.
    """

    def __init__(self, markers: Iterable[str], min_length: int = 500):
        self.markers = tuple(markers)
        self.min_length = min_length

    def __call__(self, text: Optional[str]) -> bool:
        if not text:
            return False
        has_markers = any(marker in text for marker in self.markers)
        return has_markers and len(text) > self.min_length


@dataclass
class ContentDecision:
    upgrade_raw: bool
    should_reclassify: bool
    overwrite_description: bool


class ContentMergePolicy:
    def __init__(self, is_complete: CompletenessPredicate):
        self.is_complete = is_complete

    def decide(
        self,
        existing_job: Job,
        new_raw: Optional[str],
        is_complete: Optional[CompletenessPredicate] = None,
    ) -> ContentDecision:
        check = is_complete or self.is_complete
        upgrade_raw = check(new_raw) and not check(existing_job.raw_description)
        was_classified = existing_job.classified_at is not None
        should_reclassify = upgrade_raw and was_classified

        return ContentDecision(
            upgrade_raw=upgrade_raw,
            should_reclassify=should_reclassify,
            # Classifier-authored prose survives routine re-scrapes
            overwrite_description=should_reclassify or not was_classified,
        )

    def apply(self, job: Job, decision: ContentDecision, description: str, new_raw: Optional[str]) -> None:
        """
        Write the decision onto the job.

        An empty stored raw description is filled with whatever the scrape
        brought, complete or not; a non-empty one only changes on upgrade.
        """
        if decision.upgrade_raw or (not job.raw_description and new_raw):
            job.raw_description = new_raw
        if decision.overwrite_description:
            job.description = description
        if decision.should_reclassify:
            logger.info(f"Description upgraded for {job.slug}, queued for re-classification")
            job.classified_at = None
            job.is_active = False
