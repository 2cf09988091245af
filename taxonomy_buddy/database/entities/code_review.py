"""
CodeReview ORM Model
====================

The ``CodeReview`` ORM model stores one reviewer's judgment on one code pair:
an ordered list of category labels and the functionality-change flag.

Table
-----
- ``code_review`` with an integer autoincrement primary key; a higher id means
  a more recently created review.
- ``UNIQUE(user_id, code_pair_id)``: a reviewer has at most one review per
  pair. Submissions go through an upsert on this constraint.

Lifecycle
---------
- ``submitted`` when the record is first created.
- ``edited`` after any later submission or update (categories and flag are
  replaced wholesale).
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taxonomy_buddy.database.config.connection_engine import declarativeBase
from taxonomy_buddy.database.entities.code_pair import CodePair
from taxonomy_buddy.taxonomy import ReviewStatus, format_categories


class CodeReview(declarativeBase):
    """
    ORM model for the `code_review` table.

    Attributes
    ----------
    id : int
        Primary key, assigned in creation order.
    user_id : UUID
        Reviewer (`app_user.id`).
    code_pair_id : int
        Reviewed pair (`code_pair.id`).
    categories : list[str]
        Ordered category labels; taxonomy labels or custom free text.
    is_functionality_change : bool
        Whether the reviewer judged the change to alter observable behaviour.
    status : ReviewStatus
        ``submitted`` or ``edited``.
    date_created / last_updated : datetime
        UTC timestamps.
    """

    __tablename__ = "code_review"
    __table_args__ = (
        UniqueConstraint("user_id", "code_pair_id", name="uq_code_review_user_pair"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False, index=True
    )

    code_pair_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("code_pair.id"), nullable=False
    )

    categories: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    """Ordered list of category labels. Order is preserved round-trip."""

    is_functionality_change: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[ReviewStatus] = mapped_column(
        Enum(ReviewStatus, native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ReviewStatus.SUBMITTED,
    )

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    code_pair: Mapped[CodePair] = relationship(CodePair, lazy="joined")
    """The reviewed pair, loaded eagerly so lookups can denormalize it."""

    def __str__(self) -> str:
        return (
            f"CodeReview: id:{self.id}, user_id: {self.user_id}, "
            f"code_pair_id: {self.code_pair_id}, categories: {format_categories(self.categories)}"
        )
