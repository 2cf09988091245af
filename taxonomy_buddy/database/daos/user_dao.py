"""
User DAO

Purpose
-------
Thin data-access layer for the `User` ORM entity. Provides:
- Creation with password hashing
- Lookup by username or id

Design
------
- The DAO expects an active SQLAlchemy `Session` supplied by the caller.
- Business logic (credential checks, transactions) lives in
  `taxonomy_buddy.database.core.funcs`; the DAO focuses on persistence.
- Passwords are hashed using `EncryptionDec.hash_password(...)` before insert.

Error Handling
--------------
- Database errors are logged with their traceback and re-raised as
  `StorageFailure`.

Return Values
-------------
- createUser(...) -> bool
- fetchUser(...) -> list[User] (at most one row due to limit(1))
- fetchUserById(...) -> User | None
"""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taxonomy_buddy.crypt.encrypt_decrypt import EncryptionDec
from taxonomy_buddy.database.core.errors import StorageFailure
from taxonomy_buddy.database.entities.user import User

logger = logging.getLogger(__name__)

class UserDao:
    """
    Data Access Object (DAO) for managing User entities.
    """

    def createUser(self, session: Session, user_data: User) -> bool:
        """
        Create a new user in the database with a hashed password.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_data : User
            User entity whose `password` still holds the plaintext.

        Returns
        -------
        bool
            True if the user was staged in the session.

        Raises
        ------
        StorageFailure
            If insertion fails.
        """
        try:
            enc = EncryptionDec()
            user_data.password = enc.hash_password(text=user_data.password)
            session.add(user_data)
            session.flush()
            return True
        except SQLAlchemyError as e:
            logger.exception("Error in UserDao.createUser")
            raise StorageFailure("Could not create user") from e

    def fetchUser(self, session: Session, username: str):
        """
        Fetch a user by username.

        Returns
        -------
        list[User]
            A list containing the matching user (at most one due to limit(1)).
        """
        try:
            users = session.query(User).filter(User.user_name == username).limit(1).all()
            return users
        except SQLAlchemyError as e:
            logger.exception("Error in UserDao.fetchUser")
            raise StorageFailure("Could not fetch user") from e

    def fetchUserById(self, session: Session, user_id: uuid.UUID):
        """Return the user with the given id, or None."""
        try:
            return session.get(User, user_id)
        except SQLAlchemyError as e:
            logger.exception("Error in UserDao.fetchUserById")
            raise StorageFailure("Could not fetch user") from e
