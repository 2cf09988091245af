"""
DAOs Package — Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package provides the Data Access Layer for the application.
It encapsulates all interactions with SQLAlchemy ORM entities, providing
clean CRUD APIs for the service layer while hiding direct query details.

Conventions
-----------
- SQLAlchemy 2.0 typed mappings (Mapped[...] / mapped_column)
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log database errors and surface them as `StorageFailure`

Contents
--------
- UserDao
    * Creates users with password hashing
    * Fetches users by username or id

- CodePairDao
    * Bulk-inserts imported code pairs
    * Fetches a pair by id and the next unreviewed pair for a reviewer
    * Counts the review pool

- CodeReviewDao
    * Upserts a review on (user_id, code_pair_id)
    * Updates a review by id
    * Fetches reviews by id / code pair, lists and counts a reviewer's reviews
"""
