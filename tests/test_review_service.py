"""Tests for the service layer: assignment, review records, progress and accounts."""

from uuid import uuid4

import pytest

from taxonomy_buddy.database.core.errors import InvalidCredentials, NotFound, StorageFailure, ValidationFailure
from taxonomy_buddy.database.core.funcs import (
    create_user,
    get_code_pair,
    get_code_pair_diff,
    get_progress,
    get_review,
    get_user_profile,
    list_user_reviews,
    login_user,
    next_code_pair,
    next_or_latest,
    submit_review,
    update_review,
)
from taxonomy_buddy.database.entities.code_review import CodeReview
from taxonomy_buddy.database.helpers.transactionManagement import transactional


def _submit(user_id, code_pair_id, categories=("Security Fix",), flag=False):
    return submit_review(
        user_id=user_id,
        code_pair_id=code_pair_id,
        categories=list(categories),
        is_functionality_change=flag,
    )


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class TestAccounts:
    def test_login_returns_user_id(self, reviewer):
        assert login_user(username="alice", password="Sup3r$ecret") == reviewer

    def test_wrong_password_is_rejected(self, reviewer):
        with pytest.raises(InvalidCredentials):
            login_user(username="alice", password="wrong")

    def test_unknown_user_is_rejected(self, database):
        with pytest.raises(InvalidCredentials):
            login_user(username="nobody", password="whatever")

    def test_duplicate_username(self, reviewer):
        with pytest.raises(ValidationFailure):
            create_user(username="alice", password="other")

    def test_profile(self, reviewer):
        assert get_user_profile(user_id=reviewer) == {"user_id": reviewer, "username": "alice"}

    def test_profile_of_unknown_user(self, database):
        with pytest.raises(NotFound):
            get_user_profile(user_id=uuid4())


# ---------------------------------------------------------------------------
# Review assignment
# ---------------------------------------------------------------------------


class TestAssignment:
    def test_repeated_calls_return_the_same_pair(self, reviewer, code_pairs):
        first = next_or_latest(user_id=reviewer)
        second = next_or_latest(user_id=reviewer)
        assert first.type == "new"
        assert first.code_pair.id == 1
        assert second == first

    def test_reviewed_pairs_are_skipped(self, reviewer, code_pairs):
        _submit(reviewer, 1)
        _submit(reviewer, 3)
        assert next_or_latest(user_id=reviewer).code_pair.id == 2

    def test_other_reviewers_do_not_affect_assignment(self, reviewer, other_reviewer, code_pairs):
        _submit(other_reviewer, 1)
        assert next_or_latest(user_id=reviewer).code_pair.id == 1
        assert next_or_latest(user_id=other_reviewer).code_pair.id == 2

    def test_completed_when_pool_exhausted(self, reviewer, code_pairs):
        for code_pair_id in code_pairs:
            _submit(reviewer, code_pair_id)
        result = next_or_latest(user_id=reviewer)
        assert result.type == "completed"
        assert result.code_pair is None
        assert next_code_pair(user_id=reviewer) is None

    def test_empty_pool_is_completed(self, reviewer):
        assert next_or_latest(user_id=reviewer).type == "completed"

    def test_payload_fields(self, reviewer, code_pairs):
        code_pair = next_code_pair(user_id=reviewer)
        assert code_pair.commit_message == "Change 1"
        assert "return 1;" in code_pair.version1
        assert "return 1 + 1;" in code_pair.version2

    def test_newly_imported_pairs_are_handed_out_after_existing_ones(self, reviewer, code_pairs, import_pairs):
        assert import_pairs(2) == 2
        for code_pair_id in code_pairs:
            _submit(reviewer, code_pair_id)
        assert next_or_latest(user_id=reviewer).code_pair.id == 4


# ---------------------------------------------------------------------------
# Review records
# ---------------------------------------------------------------------------


class TestSubmitReview:
    def test_first_submission_creates(self, reviewer, code_pairs):
        saved = _submit(reviewer, 1, ["Security Fix", "Logging"], flag=True)
        assert saved.created
        assert saved.status == "submitted"
        assert saved.categories == ["Security Fix", "Logging"]
        assert saved.is_functionality_change

    def test_resubmission_updates_in_place(self, reviewer, code_pairs):
        first = _submit(reviewer, 1, ["Security Fix"])
        second = _submit(reviewer, 1, ["Algorithmic Change"], flag=True)

        assert second.id == first.id
        assert not second.created
        assert second.status == "edited"
        assert second.categories == ["Algorithmic Change"]
        assert len(list_user_reviews(user_id=reviewer)) == 1

    def test_category_order_round_trips(self, reviewer, code_pairs):
        labels = ["Logging", "Security Fix", "Algorithmic Change"]
        _submit(reviewer, 2, labels)
        assert get_review(user_id=reviewer, target_id=2, type="codePairId").categories == labels

    def test_unknown_code_pair(self, reviewer, code_pairs):
        with pytest.raises(NotFound):
            _submit(reviewer, 99)

    def test_unknown_user(self, code_pairs):
        with pytest.raises(NotFound):
            _submit(uuid4(), 1)

    def test_failed_submission_writes_nothing(self, reviewer, code_pairs):
        with pytest.raises(NotFound):
            _submit(reviewer, 99)
        assert list_user_reviews(user_id=reviewer) == []

    def test_duplicate_row_is_a_storage_failure(self, reviewer, code_pairs):
        @transactional
        def insert_directly(session, user_id, code_pair_id):
            session.add(CodeReview(user_id=user_id, code_pair_id=code_pair_id, categories=["X"]))

        insert_directly(user_id=reviewer, code_pair_id=1)
        with pytest.raises(StorageFailure):
            insert_directly(user_id=reviewer, code_pair_id=1)
        assert len(list_user_reviews(user_id=reviewer)) == 1

    def test_created_flag_follows_the_stored_row(self, reviewer, code_pairs):
        @transactional
        def insert_directly(session, user_id, code_pair_id):
            session.add(CodeReview(user_id=user_id, code_pair_id=code_pair_id, categories=["X"]))

        insert_directly(user_id=reviewer, code_pair_id=2)
        saved = _submit(reviewer, 2, ["Logging"])
        assert not saved.created
        assert saved.status == "edited"

    def test_submission_after_update_is_not_a_creation(self, reviewer, code_pairs):
        first = _submit(reviewer, 1)
        update_review(review_id=first.id, categories=["Logging"], is_functionality_change=False)
        again = _submit(reviewer, 1, ["Security Fix"])
        assert not again.created
        assert again.id == first.id

    def test_str_lists_numbered_categories(self):
        review = CodeReview(code_pair_id=4, categories=["Security Fix", "Logging"])
        assert "categories: 1. Security Fix, 2. Logging" in str(review)


class TestUpdateReview:
    def test_update_replaces_categories_and_flag(self, reviewer, code_pairs):
        saved = _submit(reviewer, 1, ["Security Fix"])
        updated = update_review(review_id=saved.id, categories=["Logging"], is_functionality_change=True)

        assert updated.id == saved.id
        assert updated.status == "edited"
        review = get_review(user_id=reviewer, target_id=saved.id)
        assert review.categories == ["Logging"]
        assert review.is_functionality_change

    def test_update_of_unknown_review(self, database):
        with pytest.raises(NotFound):
            update_review(review_id=42, categories=["X"], is_functionality_change=False)


class TestGetReview:
    def test_lookup_by_review_id(self, reviewer, code_pairs):
        saved = _submit(reviewer, 2, ["Security Fix"], flag=True)
        review = get_review(user_id=reviewer, target_id=saved.id)

        assert review.id == saved.id
        assert review.code_pair.id == 2
        assert review.code_pair.commit_message == "Change 2"
        assert review.code_pair.is_functionality_change

    def test_lookup_by_code_pair_id(self, reviewer, code_pairs):
        saved = _submit(reviewer, 3)
        assert get_review(user_id=reviewer, target_id=3, type="codePairId").id == saved.id

    def test_reviews_are_scoped_to_their_owner(self, reviewer, other_reviewer, code_pairs):
        saved = _submit(reviewer, 1)
        with pytest.raises(NotFound):
            get_review(user_id=other_reviewer, target_id=saved.id)

    def test_missing_review(self, reviewer, code_pairs):
        with pytest.raises(NotFound):
            get_review(user_id=reviewer, target_id=1, type="codePairId")


class TestHistory:
    def test_newest_first(self, reviewer, code_pairs):
        ids = [_submit(reviewer, code_pair_id).id for code_pair_id in (2, 1, 3)]
        listed = list_user_reviews(user_id=reviewer)
        assert [review.id for review in listed] == sorted(ids, reverse=True)

    def test_resubmission_keeps_position(self, reviewer, code_pairs):
        first = _submit(reviewer, 1)
        second = _submit(reviewer, 2)
        _submit(reviewer, 1, ["Logging"])
        listed = list_user_reviews(user_id=reviewer)
        assert [review.id for review in listed] == [second.id, first.id]
        assert listed[1].categories == ["Logging"]

    def test_empty_history(self, reviewer):
        assert list_user_reviews(user_id=reviewer) == []


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


class TestProgress:
    def test_counts_after_submissions(self, reviewer, code_pairs):
        assert get_progress(user_id=reviewer).model_dump() == {"total": 3, "completed": 0, "remaining": 3}
        _submit(reviewer, 1)
        _submit(reviewer, 2)
        assert get_progress(user_id=reviewer).model_dump() == {"total": 3, "completed": 2, "remaining": 1}

    def test_resubmission_does_not_count_twice(self, reviewer, code_pairs):
        _submit(reviewer, 1)
        _submit(reviewer, 1, ["Logging"])
        assert get_progress(user_id=reviewer).completed == 1

    def test_unknown_user_has_no_completions(self, code_pairs):
        assert get_progress(user_id=uuid4()).model_dump() == {"total": 3, "completed": 0, "remaining": 3}


# ---------------------------------------------------------------------------
# Code pairs
# ---------------------------------------------------------------------------


class TestCodePairs:
    def test_details_include_metadata(self, code_pairs):
        details = get_code_pair(code_pair_id=1)
        assert details.project_name == "demo"
        assert details.commit_hash == f"{1:040x}"
        assert details.performance_change is None

    def test_unknown_code_pair(self, database):
        with pytest.raises(NotFound):
            get_code_pair(code_pair_id=1)

    def test_diff(self, code_pairs):
        diff = get_code_pair_diff(code_pair_id=1)
        assert diff.code_pair_id == 1
        assert diff.commit_message == "Change 1"
        assert [item.kind for item in diff.items] == ["unchanged", "removed", "added", "unchanged"]
