"""
CodePair DAO

Purpose
-------
Data access for the `CodePair` entity:
- Bulk insert from the admin import endpoint (no deduplication).
- Lookup by id.
- Selection of the next pair a reviewer has not reviewed yet.
- Counting the pool for progress reporting.

Selection Order
---------------
`fetchNextUnreviewed` returns the pair with the lowest id among those the
reviewer has no `CodeReview` for. Ids are assigned in insertion order, so
pairs are handed out in import order and the result is stable for a fixed
database state.

Transaction Model
-----------------
The DAO never commits; the `@transactional` caller owns the transaction.
"""

import logging
from uuid import UUID

from sqlalchemy import asc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taxonomy_buddy.database.core.errors import StorageFailure
from taxonomy_buddy.database.entities.code_pair import CodePair
from taxonomy_buddy.database.entities.code_review import CodeReview

logger = logging.getLogger(__name__)

class CodePairDao:
    """
    Data Access Object for `CodePair`.
    """

    def createCodePairs(self, session: Session, code_pairs: list[CodePair]) -> int:
        """
        Stage a batch of code pairs and flush so they receive ids.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        code_pairs : list[CodePair]
            Entities to insert, in the order they should be reviewed.

        Returns
        -------
        int
            Number of pairs inserted.
        """
        try:
            session.add_all(code_pairs)
            session.flush()
            return len(code_pairs)
        except SQLAlchemyError as e:
            logger.exception("Error in CodePairDao.createCodePairs")
            raise StorageFailure("Could not import code pairs") from e

    def fetchCodePairById(self, session: Session, code_pair_id: int):
        """Return the code pair with the given id, or None."""
        try:
            return session.get(CodePair, code_pair_id)
        except SQLAlchemyError as e:
            logger.exception("Error in CodePairDao.fetchCodePairById")
            raise StorageFailure("Could not fetch code pair") from e

    def fetchNextUnreviewed(self, session: Session, user_id: UUID):
        """
        Fetch the first code pair (ascending id) the user has not reviewed.

        Returns
        -------
        CodePair | None
            None when every pair has a review by this user.
        """
        try:
            reviewed = select(CodeReview.code_pair_id).where(CodeReview.user_id == user_id)
            return (
                session.query(CodePair)
                .filter(CodePair.id.not_in(reviewed))
                .order_by(asc(CodePair.id))
                .limit(1)
                .one_or_none()
            )
        except SQLAlchemyError as e:
            logger.exception("Error in CodePairDao.fetchNextUnreviewed")
            raise StorageFailure("Could not select next code pair") from e

    def countCodePairs(self, session: Session) -> int:
        """Return the size of the review pool."""
        try:
            return session.scalar(select(func.count()).select_from(CodePair))
        except SQLAlchemyError as e:
            logger.exception("Error in CodePairDao.countCodePairs")
            raise StorageFailure("Could not count code pairs") from e
