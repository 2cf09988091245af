"""
User ORM Model
==============

The ``User`` ORM model represents a reviewer identity. It maps to the
``app_user`` table. The review workflow only consumes ``id``; the username and
bcrypt password hash exist for the login endpoint.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``), stored natively on PostgreSQL and as CHAR(32) elsewhere
- Unique username
- Hashed password storage (never plaintext)
- Timezone-aware creation timestamp (UTC)

"""

from taxonomy_buddy.database.config.connection_engine import declarativeBase
from sqlalchemy import VARCHAR, TEXT, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from uuid import UUID
import uuid
from datetime import datetime, timezone

class User(declarativeBase):
    """
    ORM model for the `app_user` table.

    Attributes
    ----------
    id : UUID
        Primary key. Opaque reviewer identifier.
    user_name : str
        Username chosen by the reviewer (max 255 chars, unique).
    password : str
        bcrypt hash of the reviewer's password.
    date_created : datetime
        When the account was created (UTC).
    """

    __tablename__ = "app_user"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True
    )
    """Primary key. UUID of the user."""

    user_name: Mapped[str] = mapped_column(
        VARCHAR(255), nullable=False, unique=True
    )
    """Username of the user (max length 255)."""

    password: Mapped[str] = mapped_column(
        TEXT, nullable=False
    )
    """Hashed password of the user."""

    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    """Account creation timestamp (UTC)."""

    def __init__(self, user_name: str, password: str):
        """
        Initialize a new User object with a fresh UUID.

        Parameters
        ----------
        user_name : str
            Username of the user.
        password : str
            Password of the user; hashed by `UserDao.createUser` before insert.
        """
        self.id = uuid.uuid4()
        self.user_name = user_name
        self.password = password
        self.date_created = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"User: id:{self.id}, username: {self.user_name}"
