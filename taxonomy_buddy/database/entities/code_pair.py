"""
CodePair ORM Model
==================

The ``CodePair`` ORM model is the unit of review material: a "before" and an
"after" version of a code snippet plus the commit metadata they were mined
from. Rows are created by the bulk import endpoint and never mutated.

Table
-----
- ``code_pair`` with an integer autoincrement primary key. Identifiers grow in
  insertion order, which is also the order in which pairs are handed out to
  reviewers.
"""

from taxonomy_buddy.database.config.connection_engine import declarativeBase
from sqlalchemy import Integer, TEXT, VARCHAR
from sqlalchemy.orm import Mapped, mapped_column

class CodePair(declarativeBase):
    """
    ORM model for the `code_pair` table.

    Attributes
    ----------
    id : int
        Primary key, assigned in insertion order.
    version1 : str
        The code before the change.
    version2 : str
        The code after the change.
    commit_message : str
        Message of the commit that produced the change.
    project_name : str | None
        Project the commit belongs to.
    commit_hash : str | None
        Hash of the commit.
    hash : str | None
        Content hash supplied by the import source.
    performance_change : str | None
        Free-form metadata carried along with the pair; not interpreted.
    """

    __tablename__ = "code_pair"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    """Primary key (insertion order)."""

    version1: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    """Code before the change."""

    version2: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    """Code after the change."""

    commit_message: Mapped[str] = mapped_column(TEXT, nullable=False, default="")
    """Commit message shown above the diff."""

    project_name: Mapped[str | None] = mapped_column(VARCHAR(255), nullable=True)
    commit_hash: Mapped[str | None] = mapped_column(VARCHAR(64), nullable=True)
    hash: Mapped[str | None] = mapped_column(VARCHAR(128), nullable=True)
    performance_change: Mapped[str | None] = mapped_column(TEXT, nullable=True)

    def __init__(
        self,
        version1: str,
        version2: str,
        commit_message: str,
        project_name: str | None = None,
        commit_hash: str | None = None,
        hash: str | None = None,
        performance_change: str | None = None,
    ):
        self.version1 = version1
        self.version2 = version2
        self.commit_message = commit_message
        self.project_name = project_name
        self.commit_hash = commit_hash
        self.hash = hash
        self.performance_change = performance_change

    def __str__(self) -> str:
        return f"CodePair: id:{self.id}, project: {self.project_name}, commit: {self.commit_hash}"
