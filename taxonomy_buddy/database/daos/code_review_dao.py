"""
CodeReview DAO

Purpose
-------
Data access for the `CodeReview` entity:
- Atomic create-or-update of a reviewer's review of a pair (`upsertReview`).
- Replacement of categories and flag by review id (`updateReview`).
- Lookups by review id or by code pair id, scoped to a reviewer.
- Listing and counting a reviewer's reviews.

Uniqueness
----------
`code_review` carries `UNIQUE(user_id, code_pair_id)`. `upsertReview` issues a
single `INSERT ... ON CONFLICT (user_id, code_pair_id) DO UPDATE` statement, so
two concurrent submissions for the same new pair can never produce two rows.
The dialect-specific `insert` construct is chosen from the session's bind
(PostgreSQL and SQLite both support it).

Transaction Model
-----------------
The DAO never commits; the `@transactional` caller owns the transaction.
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taxonomy_buddy.database.core.errors import StorageFailure
from taxonomy_buddy.database.entities.code_review import CodeReview, ReviewStatus

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CodeReviewDao:
    """
    Data Access Object for `CodeReview`.
    """

    def upsertReview(
        self,
        session: Session,
        user_id: UUID,
        code_pair_id: int,
        categories: list[str],
        is_functionality_change: bool,
    ) -> int:
        """
        Create the user's review of a pair, or replace its categories and flag.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_id : UUID
            Reviewer id.
        code_pair_id : int
            Reviewed pair id.
        categories : list[str]
            Ordered category labels, stored as given.
        is_functionality_change : bool
            Functionality change flag.

        Returns
        -------
        int
            Id of the created or updated review. An existing review keeps its id.

        Raises
        ------
        StorageFailure
            If the statement fails or the dialect has no upsert support.
        """
        dialect = session.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise StorageFailure(f"Upsert is not supported on the '{dialect}' dialect")

        now = datetime.now(timezone.utc)
        stmt = insert(CodeReview).values(
            user_id=user_id,
            code_pair_id=code_pair_id,
            categories=list(categories),
            is_functionality_change=is_functionality_change,
            status=ReviewStatus.SUBMITTED,
            date_created=now,
            last_updated=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[CodeReview.user_id, CodeReview.code_pair_id],
            set_={
                "categories": stmt.excluded.categories,
                "is_functionality_change": stmt.excluded.is_functionality_change,
                "status": ReviewStatus.EDITED,
                "last_updated": now,
            },
        ).returning(CodeReview.id)

        try:
            review_id = session.execute(stmt).scalar_one()
            # the ORM identity map may hold a stale copy of this row
            session.expire_all()
            return review_id
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.upsertReview")
            raise StorageFailure("Could not save review") from e

    def updateReview(
        self,
        session: Session,
        review_id: int,
        categories: list[str],
        is_functionality_change: bool,
    ):
        """
        Replace a review's categories and flag.

        Returns
        -------
        CodeReview | None
            The updated review, or None if no review has that id.
        """
        try:
            review = session.get(CodeReview, review_id)
            if review is None:
                return None
            review.categories = list(categories)
            review.is_functionality_change = is_functionality_change
            review.status = ReviewStatus.EDITED
            review.last_updated = datetime.now(timezone.utc)
            session.flush()
            return review
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.updateReview")
            raise StorageFailure("Could not update review") from e

    def fetchReviewById(self, session: Session, user_id: UUID, review_id: int):
        """Return the user's review with the given id, or None."""
        try:
            return (
                session.query(CodeReview)
                .filter(CodeReview.id == review_id, CodeReview.user_id == user_id)
                .one_or_none()
            )
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.fetchReviewById")
            raise StorageFailure("Could not fetch review") from e

    def fetchReviewByCodePair(self, session: Session, user_id: UUID, code_pair_id: int):
        """Return the user's review of the given pair, or None."""
        try:
            return (
                session.query(CodeReview)
                .filter(CodeReview.code_pair_id == code_pair_id, CodeReview.user_id == user_id)
                .one_or_none()
            )
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.fetchReviewByCodePair")
            raise StorageFailure("Could not fetch review") from e

    def fetchReviewsByUser(self, session: Session, user_id: UUID):
        """
        Fetch all reviews by a user, most recently created first.

        Returns
        -------
        list[CodeReview]
        """
        try:
            return (
                session.query(CodeReview)
                .filter(CodeReview.user_id == user_id)
                .order_by(desc(CodeReview.id))
                .all()
            )
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.fetchReviewsByUser")
            raise StorageFailure("Could not list reviews") from e

    def countReviewsByUser(self, session: Session, user_id: UUID) -> int:
        try:
            return session.scalar(
                select(func.count()).select_from(CodeReview).where(CodeReview.user_id == user_id)
            )
        except SQLAlchemyError as e:
            logger.exception("Error in CodeReviewDao.countReviewsByUser")
            raise StorageFailure("Could not count reviews") from e
