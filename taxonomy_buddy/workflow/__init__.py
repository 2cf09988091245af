"""
The `workflow` package is the client side of the review tool, independent of
any UI toolkit.

Contents
--------
- state
    Immutable reviewer / validator states and their named transitions.
- client
    `ReviewApiClient` — httpx-based access to the `/api` routes.
- controller
    `ReviewerController` and `ValidatorController`, which sequence API calls
    and state transitions for each user action.
"""
