"""
The `database` package is responsible for all interactions with the application's database.

Contents:
    - config:
        Settings and the SQLAlchemy engine / declarative base.

    - entities:
        SQLAlchemy entity models: users, code pairs and code reviews.

    - daos:
        Data Access Objects (DAOs) providing CRUD operations for the entities.

    - core:
        Service functions behind the API routers (review assignment, review
        records, progress) and the error taxonomy.

    - helpers:
        Transaction management (`@transactional`).
"""
