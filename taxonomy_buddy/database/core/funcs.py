"""
Service-layer operations for authentication, code pairs and reviews.

All database-facing functions are wrapped with the `@transactional` decorator,
which manages SQLAlchemy sessions and transactions automatically. Each such
function accepts (and uses) an injected `session: Session` provided by the
decorator, so callers pass every other argument by keyword.

Results are returned as pydantic models from `taxonomy_buddy.api.models`
rather than ORM objects, so nothing escapes the session that produced it.
Lookups that find nothing raise `NotFound`; storage errors surface as
`StorageFailure` from the DAOs or the decorator.
"""

import logging
from typing import Literal
from uuid import UUID

from sqlalchemy.orm import Session

from taxonomy_buddy.api.models import (
    CodePairDetails,
    CodePairDiff,
    CodePairImport,
    CodePairPayload,
    NextOrLatest,
    Progress,
    ReviewDetails,
    ReviewedCodePair,
    ReviewSummary,
    SavedReview,
)
from taxonomy_buddy.crypt.encrypt_decrypt import EncryptionDec
from taxonomy_buddy.database.core.errors import InvalidCredentials, NotFound, ValidationFailure
from taxonomy_buddy.database.daos.code_pair_dao import CodePairDao
from taxonomy_buddy.database.daos.code_review_dao import CodeReviewDao
from taxonomy_buddy.database.daos.user_dao import UserDao
from taxonomy_buddy.database.entities.code_pair import CodePair
from taxonomy_buddy.database.entities.code_review import CodeReview
from taxonomy_buddy.database.entities.user import User
from taxonomy_buddy.database.helpers.transactionManagement import transactional
from taxonomy_buddy.diff.engine import build_diff
from taxonomy_buddy.taxonomy import ReviewStatus, format_categories

logger = logging.getLogger(__name__)


def _code_pair_payload(code_pair: CodePair) -> CodePairPayload:
    return CodePairPayload(
        id=code_pair.id,
        version1=code_pair.version1,
        version2=code_pair.version2,
        commit_message=code_pair.commit_message,
    )


def _saved_review(review: CodeReview, created: bool = False) -> SavedReview:
    return SavedReview(
        id=review.id,
        categories=list(review.categories),
        is_functionality_change=review.is_functionality_change,
        status=review.status.value,
        created=created,
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@transactional
def login_user(session: Session, username: str, password: str) -> UUID:
    """
    Authenticate a user by username and password.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session (injected by @transactional).
    username : str
        Username to authenticate.
    password : str
        Plaintext password to verify against the stored bcrypt hash.

    Returns
    -------
    UUID
        The reviewer id.

    Raises
    ------
    InvalidCredentials
        Unknown username or wrong password. The two cases are not
        distinguished in the message.
    """
    user_dao = UserDao()
    enc = EncryptionDec()
    users_fetched = user_dao.fetchUser(session, username)
    if users_fetched and enc.check_passwords(password, users_fetched[0].password):
        return users_fetched[0].id
    logger.info("Rejected login for %r", username)
    raise InvalidCredentials("Invalid credentials")


@transactional
def create_user(session: Session, username: str, password: str) -> UUID:
    """
    Create a reviewer account.

    Raises
    ------
    ValidationFailure
        If the username is taken.
    """
    user_dao = UserDao()
    if user_dao.fetchUser(session, username):
        raise ValidationFailure("User already exists")
    user = User(user_name=username, password=password)
    user_dao.createUser(session=session, user_data=user)
    logger.info("Created user %s", user.id)
    return user.id


@transactional
def get_user_profile(session: Session, user_id: UUID) -> dict:
    """Return ``{'user_id', 'username'}`` for an existing user."""
    user = UserDao().fetchUserById(session, user_id)
    if user is None:
        raise NotFound("User not found")
    return {"user_id": user.id, "username": user.user_name}


# ---------------------------------------------------------------------------
# Code pairs
# ---------------------------------------------------------------------------


@transactional
def import_code_pairs(session: Session, code_pairs: list[CodePairImport]) -> int:
    """
    Bulk-insert code pairs in the given order. No deduplication is performed.

    Returns
    -------
    int
        Number of pairs inserted.
    """
    entities = [
        CodePair(
            version1=pair.version1,
            version2=pair.version2,
            commit_message=pair.commit_message,
            project_name=pair.project_name,
            commit_hash=pair.commit_hash,
            hash=pair.hash,
            performance_change=pair.performance_change,
        )
        for pair in code_pairs
    ]
    count = CodePairDao().createCodePairs(session, entities)
    logger.info("Imported %d code pairs", count)
    return count


@transactional
def get_code_pair(session: Session, code_pair_id: int) -> CodePairDetails:
    """Fetch a code pair with all of its metadata, or raise `NotFound`."""
    code_pair = CodePairDao().fetchCodePairById(session, code_pair_id)
    if code_pair is None:
        raise NotFound("Code pair not found")
    return CodePairDetails(
        id=code_pair.id,
        version1=code_pair.version1,
        version2=code_pair.version2,
        commit_message=code_pair.commit_message,
        project_name=code_pair.project_name,
        commit_hash=code_pair.commit_hash,
        hash=code_pair.hash,
        performance_change=code_pair.performance_change,
    )


def get_code_pair_diff(code_pair_id: int) -> CodePairDiff:
    """Build the collapsed unified diff of a code pair's two versions."""
    code_pair = get_code_pair(code_pair_id=code_pair_id)
    return CodePairDiff(
        code_pair_id=code_pair.id,
        commit_message=code_pair.commit_message.strip(),
        items=build_diff(code_pair.version1, code_pair.version2),
    )


# ---------------------------------------------------------------------------
# Review assignment
# ---------------------------------------------------------------------------


@transactional
def next_code_pair(session: Session, user_id: UUID) -> CodePairPayload | None:
    """Return the next pair the user has not reviewed, or None when done."""
    code_pair = CodePairDao().fetchNextUnreviewed(session, user_id)
    return _code_pair_payload(code_pair) if code_pair is not None else None


def next_or_latest(user_id: UUID) -> NextOrLatest:
    """
    Report the next unreviewed pair (`new`) or that the pool is exhausted
    (`completed`).

    Read-only. Pairs are handed out in ascending id order, so repeated calls
    without an intervening submission return the same pair.
    """
    code_pair = next_code_pair(user_id=user_id)
    if code_pair is None:
        return NextOrLatest(type="completed")
    return NextOrLatest(type="new", code_pair=code_pair)


# ---------------------------------------------------------------------------
# Review records
# ---------------------------------------------------------------------------


@transactional
def submit_review(
    session: Session,
    user_id: UUID,
    code_pair_id: int,
    categories: list[str],
    is_functionality_change: bool,
) -> SavedReview:
    """
    Record a reviewer's decision on a code pair.

    A first submission creates the review (status ``submitted``); a later
    submission for the same (user, pair) replaces categories and flag in
    place (status ``edited``) and keeps the review id. Whether this call
    created the review is read from the status the upsert stored, so two
    racing first submissions report one creation and one update.

    Raises
    ------
    NotFound
        Unknown user or code pair.
    """
    if UserDao().fetchUserById(session, user_id) is None:
        raise NotFound("User not found")
    if CodePairDao().fetchCodePairById(session, code_pair_id) is None:
        raise NotFound("Code pair not found")

    review_dao = CodeReviewDao()
    review_id = review_dao.upsertReview(
        session,
        user_id=user_id,
        code_pair_id=code_pair_id,
        categories=categories,
        is_functionality_change=is_functionality_change,
    )
    review = review_dao.fetchReviewById(session, user_id, review_id)
    created = review.status == ReviewStatus.SUBMITTED
    logger.info(
        "%s review %s (user %s, code pair %s): %s",
        "Created" if created else "Updated", review_id, user_id, code_pair_id,
        format_categories(review.categories),
    )
    return _saved_review(review, created=created)


@transactional
def update_review(
    session: Session,
    review_id: int,
    categories: list[str],
    is_functionality_change: bool,
) -> SavedReview:
    """
    Replace a review's categories and flag. No ownership check is made.

    Raises
    ------
    NotFound
        If no review has that id.
    """
    review = CodeReviewDao().updateReview(
        session,
        review_id=review_id,
        categories=categories,
        is_functionality_change=is_functionality_change,
    )
    if review is None:
        raise NotFound("Review not found")
    logger.info("Updated review %s", review_id)
    return _saved_review(review)


@transactional
def get_review(
    session: Session,
    user_id: UUID,
    target_id: int,
    type: Literal["reviewId", "codePairId"] = "reviewId",
) -> ReviewDetails:
    """
    Fetch one of the user's reviews with its code pair denormalized.

    Parameters
    ----------
    target_id : int
        A review id, or a code pair id when ``type == "codePairId"``.

    Raises
    ------
    NotFound
        If the user has no matching review.
    """
    review_dao = CodeReviewDao()
    if type == "codePairId":
        review = review_dao.fetchReviewByCodePair(session, user_id, target_id)
    else:
        review = review_dao.fetchReviewById(session, user_id, target_id)
    if review is None:
        raise NotFound("Review not found")

    code_pair = review.code_pair
    return ReviewDetails(
        id=review.id,
        categories=list(review.categories),
        is_functionality_change=review.is_functionality_change,
        status=review.status.value,
        code_pair=ReviewedCodePair(
            id=code_pair.id,
            version1=code_pair.version1,
            version2=code_pair.version2,
            commit_message=code_pair.commit_message,
            is_functionality_change=review.is_functionality_change,
        ),
    )


@transactional
def list_user_reviews(session: Session, user_id: UUID) -> list[ReviewSummary]:
    """List the user's reviews, most recently created first."""
    reviews = CodeReviewDao().fetchReviewsByUser(session, user_id)
    return [ReviewSummary(id=review.id, categories=list(review.categories)) for review in reviews]


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


@transactional
def get_progress(session: Session, user_id: UUID) -> Progress:
    """
    Count the pool and the user's reviews. Recomputed on every call.

    Returns
    -------
    Progress
        ``total`` pairs, ``completed`` reviews by the user and ``remaining``.
    """
    total = CodePairDao().countCodePairs(session)
    completed = CodeReviewDao().countReviewsByUser(session, user_id)
    return Progress(total=total, completed=completed, remaining=total - completed)
