"""
FastAPI Router — Auth • Review assignment • Reviews • Progress • Code pairs • Admin
==================================================================================

Purpose
-------
Defines the HTTP API used by the reviewer and validator clients:
- Authentication: login (sets an HttpOnly JWT cookie), logout, current user
- Review assignment: next unreviewed pair / completion
- Reviews: submit (create-or-update), update by id, lookup, history list
- Progress counters
- Code pair lookup and server-side diff
- Admin: bulk code pair import, reviewer account creation

Key Notes
---------
- Input validation via Pydantic models in `taxonomy_buddy.api.models`;
  JSON bodies use camelCase field names.
- Every successful response carries `"success": true`. Domain errors raised by
  the service layer are turned into `{"success": false, "error", "message"}`
  bodies by the handlers registered in `taxonomy_buddy.main`.
- The router is mounted under `/api`.
"""

import logging
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Cookie, Response

from taxonomy_buddy.api.models import ImportCodePairsRequest, NewUser, ReviewSubmission, ReviewUpdate, UserCredentials
from taxonomy_buddy.api.utils import create_access_token, verify_token
from taxonomy_buddy.database.core.errors import InvalidCredentials
from taxonomy_buddy.database.core.funcs import (
    create_user,
    get_code_pair,
    get_code_pair_diff,
    get_progress,
    get_review,
    get_user_profile,
    import_code_pairs,
    list_user_reviews,
    login_user,
    next_code_pair,
    next_or_latest,
    submit_review,
    update_review,
)
from taxonomy_buddy.taxonomy import OTHER, TAXONOMY_CATEGORIES

logger = logging.getLogger(__name__)

router = APIRouter()
"""Creates the FastAPI router in which we define its routes"""


# -----------------------
# Auth
# -----------------------

@router.post('/auth/login')
def login(data: UserCredentials, response: Response):
    """Authenticate a user and set a signed JWT cookie.

    Request body:
        UserCredentials {username, password}

    Response:
        200: {'success': True, 'userId': <uuid>, 'message': ...}
        401: invalid credentials
    """
    user_id = login_user(username=data.username, password=data.password)
    access_token = create_access_token({'sub': str(user_id)})
    response.set_cookie(
        key="token",
        value=access_token,
        httponly=True,
        secure=False,  # True in production
        samesite="lax"
    )
    return {'success': True, 'userId': str(user_id), 'message': 'Login successful'}


@router.post('/auth/logout')
def logout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(key="token")
    return {'success': True, 'message': 'Logged out'}


@router.get('/auth/me')
def current_user(token: str = Cookie(None)):
    """Decode the JWT cookie and return the current reviewer."""
    if not token:
        raise InvalidCredentials('Missing token')
    subject = verify_token(token)
    if not subject:
        raise InvalidCredentials('Invalid or expired token')
    profile = get_user_profile(user_id=UUID(subject))
    return {'success': True, 'userId': str(profile['user_id']), 'username': profile['username']}


# -----------------------
# Review assignment
# -----------------------

@router.get('/reviews/next-or-latest/{user_id}')
def get_next_or_latest(user_id: UUID):
    """Next pair to review (`type: new`) or `type: completed` when the pool is exhausted."""
    result = next_or_latest(user_id=user_id)
    body = {'success': True, **result.model_dump(by_alias=True, exclude_none=True)}
    if result.type == 'completed':
        body['message'] = 'All code pairs have been reviewed'
    return body


@router.get('/reviews/next-code-pair/{user_id}')
def get_next_code_pair(user_id: UUID):
    """Next pair to review, or `success: false` when none is left."""
    code_pair = next_code_pair(user_id=user_id)
    if code_pair is None:
        return {'success': False, 'message': 'No more code pairs to review'}
    return {'success': True, 'codePair': code_pair.model_dump(by_alias=True)}


# -----------------------
# Reviews
# -----------------------

@router.post('/reviews/submit')
def submit(data: ReviewSubmission):
    """Create the reviewer's review of a pair, or update it if one exists."""
    review = submit_review(
        user_id=data.user_id,
        code_pair_id=data.code_pair_id,
        categories=data.categories,
        is_functionality_change=data.is_functionality_change,
    )
    message = 'Review submitted successfully' if review.created else 'Review updated successfully'
    return {'success': True, 'message': message, 'review': review.model_dump(by_alias=True)}


@router.put('/reviews/{review_id}')
def update(review_id: int, data: ReviewUpdate):
    """Replace a review's categories and functionality flag."""
    review = update_review(
        review_id=review_id,
        categories=data.categories,
        is_functionality_change=data.is_functionality_change,
    )
    return {'success': True, 'review': review.model_dump(by_alias=True), 'message': 'Review updated successfully'}


@router.get('/reviews/review/{user_id}/{target_id}')
def get_single_review(user_id: UUID, target_id: int, type: Literal['reviewId', 'codePairId'] = 'reviewId'):
    """One review with its code pair; `target_id` is a review id or, with `type=codePairId`, a pair id."""
    review = get_review(user_id=user_id, target_id=target_id, type=type)
    return {'success': True, 'review': review.model_dump(by_alias=True)}


@router.get('/reviews/user/{user_id}')
def get_user_reviews(user_id: UUID):
    """The reviewer's history, newest first, as `{id, categories}` entries."""
    reviews = list_user_reviews(user_id=user_id)
    return {'success': True, 'reviews': [review.model_dump(by_alias=True) for review in reviews]}


@router.get('/reviews/progress/{user_id}')
def progress(user_id: UUID):
    """Total, completed and remaining counts for the reviewer."""
    return {'success': True, 'progress': get_progress(user_id=user_id).model_dump(by_alias=True)}


# -----------------------
# Code pairs & taxonomy
# -----------------------

@router.get('/code-pairs/{code_pair_id}')
def code_pair(code_pair_id: int):
    """Read-only code pair lookup for the standalone viewer."""
    return {'success': True, 'codePair': get_code_pair(code_pair_id=code_pair_id).model_dump(by_alias=True)}


@router.get('/code-pairs/{code_pair_id}/diff')
def code_pair_diff(code_pair_id: int):
    """Collapsed unified diff of the pair's two versions."""
    return {'success': True, **get_code_pair_diff(code_pair_id=code_pair_id).model_dump(by_alias=True)}


@router.get('/taxonomy')
def taxonomy():
    """The fixed category labels, followed by the "Other" option."""
    return {'success': True, 'categories': [*TAXONOMY_CATEGORIES, OTHER]}


# -----------------------
# Admin
# -----------------------

@router.post('/admin/import-code-pairs')
def import_pairs(data: ImportCodePairsRequest):
    """Bulk insert code pairs; no deduplication."""
    count = import_code_pairs(code_pairs=data.code_pairs)
    return {'success': True, 'imported': count, 'message': 'Code pairs imported successfully'}


@router.post('/admin/users')
def new_user(data: NewUser):
    """Create a reviewer account with a bcrypt-hashed password."""
    user_id = create_user(username=data.username, password=data.password)
    return {'success': True, 'userId': str(user_id), 'message': 'User created successfully'}
