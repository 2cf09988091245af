"""
API Package — FastAPI Router • Models • JWT Utils
=================================================

Mission
-------
This package defines the backend's HTTP interface for the code change
review workflow.

Contents
--------
- fast_api
    FastAPI router with endpoints for:
      • Auth: login (JWT cookie), logout, current user
      • Review assignment: next unreviewed code pair or completion
      • Reviews: submit (create-or-update), update by id, lookup by review id
        or code pair id, history list, progress
      • Code pairs: lookup and collapsed unified diff
      • Admin: bulk code pair import, reviewer creation

- models
    Pydantic data contracts (camelCase on the wire):
      • UserCredentials, NewUser (auth / admin)
      • CodePairImport, ImportCodePairsRequest (import)
      • ReviewSubmission, ReviewUpdate (review writes; categories validated)
      • CodePairPayload, CodePairDetails, ReviewDetails, ReviewSummary,
        SavedReview, Progress, NextOrLatest, CodePairDiff (responses)

- utils
    JWT helpers:
      • create_access_token(payload) — issues signed JWTs with exp
      • verify_token(token) — validates JWTs and extracts the reviewer id
"""
