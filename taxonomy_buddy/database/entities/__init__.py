"""
Entities Package — SQLAlchemy 2.0 ORM Models
============================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes are consumed by DAOs (`daos` package).

Tech Stack & Conventions
------------------------
- PostgreSQL in deployment, SQLite for local runs and tests
- Timezone-aware timestamps (UTC)
- SQLAlchemy 2.0 style `Mapped[...]` + `mapped_column(...)`
- Clear foreign keys for relational integrity

Contents
--------
- User
    A reviewer identity: UUID id, unique username, bcrypt password hash.

- CodePair
    Before/after code plus commit metadata. Integer ids in insertion order.

- CodeReview
    One reviewer's ordered categories and functionality flag for one pair.
    * `UNIQUE(user_id, code_pair_id)`
    * `status` follows submitted → edited
"""

from taxonomy_buddy.database.entities.user import User
from taxonomy_buddy.database.entities.code_pair import CodePair
from taxonomy_buddy.database.entities.code_review import CodeReview, ReviewStatus

__all__ = ["User", "CodePair", "CodeReview", "ReviewStatus"]
