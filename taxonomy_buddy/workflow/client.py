"""
HTTP client for the review API.

`ReviewApiClient` wraps an `httpx.Client` whose `base_url` points at the
server (a FastAPI `TestClient` works as well, since it is an `httpx.Client`).
Responses are parsed into the pydantic models of `taxonomy_buddy.api.models`;
error responses are raised as the matching `ReviewAppError` subclass.
"""

import logging
from uuid import UUID

import httpx

from taxonomy_buddy.api.models import (
    CodePairDetails,
    CodePairDiff,
    NextOrLatest,
    Progress,
    ReviewDetails,
    ReviewSummary,
    SavedReview,
)
from taxonomy_buddy.database.core.errors import (
    InvalidCredentials,
    NotFound,
    ReviewAppError,
    StorageFailure,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

_ERRORS_BY_KIND = {
    error.kind: error for error in (NotFound, InvalidCredentials, ValidationFailure, StorageFailure)
}
_ERRORS_BY_STATUS = {
    error.status_code: error for error in (NotFound, InvalidCredentials, ValidationFailure)
}


class ReviewApiClient:
    """Typed access to the `/api` routes."""

    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ReviewAppError("Server unreachable") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get("message") or body.get("detail") or response.reason_phrase
            error = _ERRORS_BY_KIND.get(body.get("error")) or _ERRORS_BY_STATUS.get(response.status_code, ReviewAppError)
            raise error(str(message))
        return body

    def login(self, username: str, password: str) -> UUID:
        body = self._request("POST", "/auth/login", json={"username": username, "password": password})
        return UUID(body["userId"])

    def next_or_latest(self, user_id: UUID) -> NextOrLatest:
        return NextOrLatest.model_validate(self._request("GET", f"/reviews/next-or-latest/{user_id}"))

    def list_reviews(self, user_id: UUID) -> list[ReviewSummary]:
        body = self._request("GET", f"/reviews/user/{user_id}")
        return [ReviewSummary.model_validate(review) for review in body["reviews"]]

    def get_review(self, user_id: UUID, target_id: int, type: str = "reviewId") -> ReviewDetails:
        body = self._request("GET", f"/reviews/review/{user_id}/{target_id}", params={"type": type})
        return ReviewDetails.model_validate(body["review"])

    def submit(
        self,
        user_id: UUID,
        code_pair_id: int,
        categories,
        is_functionality_change: bool,
    ) -> SavedReview:
        body = self._request(
            "POST",
            "/reviews/submit",
            json={
                "userId": str(user_id),
                "codePairId": code_pair_id,
                "categories": list(categories),
                "isFunctionalityChange": is_functionality_change,
            },
        )
        return SavedReview.model_validate(body["review"])

    def update(self, review_id: int, categories, is_functionality_change: bool) -> SavedReview:
        body = self._request(
            "PUT",
            f"/reviews/{review_id}",
            json={"categories": list(categories), "isFunctionalityChange": is_functionality_change},
        )
        return SavedReview.model_validate(body["review"])

    def progress(self, user_id: UUID) -> Progress:
        return Progress.model_validate(self._request("GET", f"/reviews/progress/{user_id}")["progress"])

    def code_pair(self, code_pair_id: int) -> CodePairDetails:
        return CodePairDetails.model_validate(self._request("GET", f"/code-pairs/{code_pair_id}")["codePair"])

    def code_pair_diff(self, code_pair_id: int) -> CodePairDiff:
        return CodePairDiff.model_validate(self._request("GET", f"/code-pairs/{code_pair_id}/diff"))

    def taxonomy(self) -> list[str]:
        return self._request("GET", "/taxonomy")["categories"]
