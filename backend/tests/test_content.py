"""
Tests for description completeness and the content merge policy.

Run with: cd backend && pytest tests/test_content.py -v
"""
from datetime import datetime

import pytest

from jobboard.models import Job
from jobboard.services.content import ContentMergePolicy, MarkerCompleteness
from conftest import COMPLETE_DESCRIPTION, SKELETON_DESCRIPTION

CLASSIFIED_AT = datetime(2026, 2, 1, 12, 0, 0)


@pytest.fixture
def is_complete():
    return MarkerCompleteness(
        ["Duties & Responsibilities:", "Minimum Qualifications:"], min_length=500
    )


@pytest.fixture
def policy(is_complete):
    return ContentMergePolicy(is_complete)


class TestMarkerCompleteness:
    def test_marker_and_length_is_complete(self, is_complete):
        assert is_complete(COMPLETE_DESCRIPTION)

    def test_long_text_without_marker_is_incomplete(self, is_complete):
        assert not is_complete("Great opportunity. " * 100)

    def test_marker_without_length_is_incomplete(self, is_complete):
        assert not is_complete("Duties & Responsibilities:\nPatient care.")

    def test_length_must_exceed_threshold(self):
        check = MarkerCompleteness(["X:"], min_length=10)

        assert not check("X:" + "a" * 8)
        assert check("X:" + "a" * 9)

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_is_incomplete(self, is_complete, text):
        assert not is_complete(text)


class TestContentMergePolicy:
    def test_skeleton_to_complete_upgrade_on_classified_job_reclassifies(self, policy):
        job = Job(raw_description=SKELETON_DESCRIPTION, classified_at=CLASSIFIED_AT)

        decision = policy.decide(job, COMPLETE_DESCRIPTION)

        assert decision.upgrade_raw
        assert decision.should_reclassify
        assert decision.overwrite_description

    def test_upgrade_on_unclassified_job_does_not_reclassify(self, policy):
        job = Job(raw_description=SKELETON_DESCRIPTION, classified_at=None)

        decision = policy.decide(job, COMPLETE_DESCRIPTION)

        assert decision.upgrade_raw
        assert not decision.should_reclassify
        assert decision.overwrite_description

    def test_complete_is_never_replaced_by_skeleton(self, policy):
        job = Job(raw_description=COMPLETE_DESCRIPTION, classified_at=CLASSIFIED_AT)

        decision = policy.decide(job, SKELETON_DESCRIPTION)

        assert not decision.upgrade_raw
        assert not decision.should_reclassify
        assert not decision.overwrite_description

    def test_complete_is_not_replaced_by_other_complete(self, policy):
        job = Job(raw_description=COMPLETE_DESCRIPTION, classified_at=CLASSIFIED_AT)

        decision = policy.decide(job, COMPLETE_DESCRIPTION + " Sign-on bonus.")

        assert not decision.upgrade_raw

    def test_predicate_override(self, policy):
        job = Job(raw_description="short", classified_at=CLASSIFIED_AT)

        decision = policy.decide(job, "long enough", is_complete=lambda text: text == "long enough")

        assert decision.should_reclassify

    def test_apply_reclassification_clears_classification(self, policy):
        job = Job(
            raw_description=SKELETON_DESCRIPTION,
            description="Classifier-written prose",
            classified_at=CLASSIFIED_AT,
            is_active=True,
        )
        decision = policy.decide(job, COMPLETE_DESCRIPTION)

        policy.apply(job, decision, COMPLETE_DESCRIPTION, COMPLETE_DESCRIPTION)

        assert job.raw_description == COMPLETE_DESCRIPTION
        assert job.description == COMPLETE_DESCRIPTION
        assert job.classified_at is None
        assert job.is_active is False

    def test_apply_keeps_classifier_prose_on_routine_rescrape(self, policy):
        job = Job(
            raw_description=SKELETON_DESCRIPTION,
            description="Classifier-written prose",
            classified_at=CLASSIFIED_AT,
            is_active=True,
        )
        decision = policy.decide(job, "Registered Nurse - ICU. Apply today.")

        policy.apply(job, decision, "Registered Nurse - ICU. Apply today.", "Registered Nurse - ICU. Apply today.")

        assert job.raw_description == SKELETON_DESCRIPTION
        assert job.description == "Classifier-written prose"
        assert job.classified_at == CLASSIFIED_AT
        assert job.is_active is True

    def test_apply_fills_missing_raw_description(self, policy):
        job = Job(raw_description=None, description="old", classified_at=CLASSIFIED_AT)
        decision = policy.decide(job, SKELETON_DESCRIPTION)

        policy.apply(job, decision, SKELETON_DESCRIPTION, SKELETON_DESCRIPTION)

        assert job.raw_description == SKELETON_DESCRIPTION
        assert job.description == "old"
