"""
The `core` package connects the API routers with the database: service
functions in `funcs` orchestrate DAO calls inside `@transactional` sessions,
and `errors` defines the error taxonomy they raise.
"""
