"""
Pydantic models used for request/response validation and API data contracts.

Each class defines the structure of data expected in API endpoints, ensuring
validation and automatic OpenAPI schema generation. Fields are snake_case in
Python and camelCase on the wire.
"""

from typing import Annotated, List, Literal, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taxonomy_buddy.diff.engine import DiffItem


class ApiModel(BaseModel):
    """Base for all API models: camelCase aliases, construction by field name allowed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def clean_categories(categories: List[str]) -> List[str]:
    """Trim labels, drop repeats (first occurrence wins) and require at least one."""
    cleaned: List[str] = []
    for category in categories:
        label = category.strip()
        if not label:
            raise ValueError("categories must not contain blank labels")
        if label not in cleaned:
            cleaned.append(label)
    if not cleaned:
        raise ValueError("at least one category is required")
    return cleaned


CategoryList = Annotated[List[str], AfterValidator(clean_categories)]
"""Ordered, non-empty, duplicate-free category labels."""


class UserCredentials(ApiModel):
    """
    Represents login credentials for a user.
    """
    username: str
    """The username of the user"""
    password: str
    """The plaintext password provided for authentication."""


class NewUser(ApiModel):
    """Details needed to create a reviewer account."""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class CodePairImport(ApiModel):
    """One code pair as delivered by the mining pipeline."""
    version1: str = Field("", description="Code before the change.")
    version2: str = Field("", description="Code after the change.")
    commit_message: str = Field("", description="Commit message of the change.")
    project_name: Optional[str] = None
    commit_hash: Optional[str] = None
    hash: Optional[str] = None
    performance_change: Optional[str] = None


class ImportCodePairsRequest(ApiModel):
    code_pairs: List[CodePairImport]


class ReviewSubmission(ApiModel):
    """
    A reviewer's decision on a code pair.
    """
    user_id: UUID
    """Reviewer id returned by the login endpoint."""
    code_pair_id: int
    """The reviewed code pair."""
    categories: CategoryList
    """Ordered category labels; taxonomy labels or custom text."""
    is_functionality_change: bool = False
    """Whether the change alters observable behaviour."""


class ReviewUpdate(ApiModel):
    """Replacement categories and flag for an existing review."""
    categories: CategoryList
    is_functionality_change: bool = False


class CodePairPayload(ApiModel):
    """The fields of a code pair a reviewer needs to classify it."""
    id: int
    version1: str
    version2: str
    commit_message: str


class CodePairDetails(CodePairPayload):
    """A code pair with all of its import metadata."""
    project_name: Optional[str] = None
    commit_hash: Optional[str] = None
    hash: Optional[str] = None
    performance_change: Optional[str] = None


class ReviewedCodePair(CodePairPayload):
    """Code pair denormalized into a review lookup."""
    is_functionality_change: bool


class ReviewSummary(ApiModel):
    """History list entry; code pair bodies are left out to keep listing cheap."""
    id: int
    categories: List[str]


class ReviewDetails(ApiModel):
    id: int
    categories: List[str]
    is_functionality_change: bool
    status: str
    code_pair: ReviewedCodePair


class SavedReview(ApiModel):
    """Result of a submit or update."""
    id: int
    categories: List[str]
    is_functionality_change: bool
    status: str
    created: bool = False
    """True when the submission created the review rather than updating it."""


class Progress(ApiModel):
    total: int
    completed: int
    remaining: int


class NextOrLatest(ApiModel):
    """Either the next pair to review (`new`) or the end of the pool (`completed`)."""
    type: Literal["new", "completed"]
    code_pair: Optional[CodePairPayload] = None


class CodePairDiff(ApiModel):
    """Server-side rendering input for a code pair."""
    code_pair_id: int
    commit_message: str
    items: List[DiffItem]
