"""
Reviewer and validator client state.

States are frozen dataclasses and every change is a named, pure transition
function returning a new state, so a UI layer only ever swaps one state object
for another. Transitions that do not apply in the current phase return the
state unchanged.

Reviewer phases::

    LOADING ──loaded_next──► REVIEWING_NEW ──opened_history_entry──► REVIEWING_HISTORY
       │                          ▲                                      │
       └──────► ALL_COMPLETED ────┘ (after a submission)  ◄──────────────┘
       └──────► EMPTY (nothing could be loaded)
"""

import enum
from dataclasses import dataclass, field, replace

from taxonomy_buddy.api.models import (
    CodePairPayload,
    NextOrLatest,
    Progress,
    ReviewDetails,
    ReviewedCodePair,
    ReviewSummary,
)
from taxonomy_buddy.taxonomy import OTHER, ReviewStatus, add_category, add_custom_category, remove_category_at


class Phase(str, enum.Enum):
    LOADING = "loading"
    REVIEWING_NEW = "reviewing_new"
    REVIEWING_HISTORY = "reviewing_history"
    ALL_COMPLETED = "all_completed"
    EMPTY = "empty"


@dataclass(frozen=True)
class ReviewerState:
    """Everything the reviewer screen renders."""

    phase: Phase = Phase.LOADING
    code_pair: CodePairPayload | None = None
    review_id: int | None = None
    """Id of the history entry on screen; None for a new review."""
    status: ReviewStatus | None = None
    """`NEW` for an unreviewed pair, else the stored status of the history entry."""
    selected: tuple[str, ...] = ()
    is_functionality_change: bool = False
    history: tuple[ReviewSummary, ...] = ()
    history_index: int = -1
    is_editing: bool = False
    progress: Progress = field(default_factory=lambda: Progress(total=0, completed=0, remaining=0))
    error: str | None = None

    @property
    def is_editable(self) -> bool:
        """Category controls are live for a new review or a history entry in edit mode."""
        return self.phase == Phase.REVIEWING_NEW or (
            self.phase == Phase.REVIEWING_HISTORY and self.is_editing
        )

    @property
    def can_submit(self) -> bool:
        return self.is_editable and len(self.selected) > 0

    @property
    def can_go_previous(self) -> bool:
        return history_target(self, -1) is not None

    @property
    def can_go_next(self) -> bool:
        return history_target(self, 1) is not None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def begin_loading(state: ReviewerState) -> ReviewerState:
    return replace(state, phase=Phase.LOADING, error=None)


def loaded_next(state: ReviewerState, result: NextOrLatest) -> ReviewerState:
    """Show the next pair to review, or the completion screen."""
    if result.type == "new":
        return replace(
            state,
            phase=Phase.REVIEWING_NEW,
            code_pair=result.code_pair,
            review_id=None,
            status=ReviewStatus.NEW,
            selected=(),
            is_functionality_change=False,
            history_index=-1,
            is_editing=False,
            error=None,
        )
    return replace(
        state,
        phase=Phase.ALL_COMPLETED,
        code_pair=None,
        review_id=None,
        status=None,
        selected=(),
        is_functionality_change=False,
        history_index=-1,
        is_editing=False,
        error=None,
    )


def loaded_history(state: ReviewerState, reviews) -> ReviewerState:
    return replace(state, history=tuple(reviews))


def loaded_progress(state: ReviewerState, progress: Progress) -> ReviewerState:
    return replace(state, progress=progress)


def failed(state: ReviewerState, message: str) -> ReviewerState:
    """Record an error. A failed load leaves the screen EMPTY; other failures keep the phase."""
    if state.phase == Phase.LOADING:
        return replace(state, phase=Phase.EMPTY, code_pair=None, error=message)
    return replace(state, error=message)


# ---------------------------------------------------------------------------
# History navigation
# ---------------------------------------------------------------------------


def history_target(state: ReviewerState, offset: int) -> int | None:
    """
    Index reached by moving `offset` entries through the history, or None if
    out of range.

    Stepping only works while a history entry is on screen; the history is
    entered by opening an entry directly.
    """
    if state.history_index < 0:
        return None
    index = state.history_index + offset
    if 0 <= index < len(state.history):
        return index
    return None


def opened_history_entry(state: ReviewerState, index: int, review: ReviewDetails) -> ReviewerState:
    """Display a past review read-only."""
    if not 0 <= index < len(state.history):
        return state
    return replace(
        state,
        phase=Phase.REVIEWING_HISTORY,
        code_pair=review.code_pair,
        review_id=review.id,
        status=ReviewStatus(review.status),
        selected=tuple(review.categories),
        is_functionality_change=review.is_functionality_change,
        history_index=index,
        is_editing=False,
        error=None,
    )


def toggle_edit(state: ReviewerState) -> ReviewerState:
    if state.phase != Phase.REVIEWING_HISTORY:
        return state
    return replace(state, is_editing=not state.is_editing)


# ---------------------------------------------------------------------------
# Category selection
# ---------------------------------------------------------------------------


def select_category(state, category: str):
    """Append a category unless it is already selected.

    Selecting "Other" only opens the custom input; it is never stored itself.
    """
    if not state.is_editable or category == OTHER:
        return state
    return replace(state, selected=add_category(state.selected, category))


def add_custom(state, text: str):
    """Append trimmed custom text if it is non-empty and not already selected."""
    if not state.is_editable:
        return state
    return replace(state, selected=add_custom_category(state.selected, text))


def remove_category(state, index: int):
    """Remove the category at `index`; out-of-range indexes are ignored."""
    if not state.is_editable:
        return state
    return replace(state, selected=remove_category_at(state.selected, index))


def set_functionality_change(state, value: bool):
    if not state.is_editable:
        return state
    return replace(state, is_functionality_change=value)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class ValidatorPhase(str, enum.Enum):
    LOADING = "loading"
    READY = "ready"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class ValidatorState:
    """Audit of another reviewer's decision on one code pair."""

    phase: ValidatorPhase = ValidatorPhase.LOADING
    code_pair: ReviewedCodePair | None = None
    previous_categories: tuple[str, ...] = ()
    """The audited reviewer's categories, shown for comparison."""
    selected: tuple[str, ...] = ()
    is_functionality_change: bool = False
    error: str | None = None

    @property
    def is_editable(self) -> bool:
        return self.phase in (ValidatorPhase.READY, ValidatorPhase.SUBMITTED)

    @property
    def can_submit(self) -> bool:
        return self.is_editable and len(self.selected) > 0


def validator_loaded(state: ValidatorState, review: ReviewDetails) -> ValidatorState:
    return replace(
        state,
        phase=ValidatorPhase.READY,
        code_pair=review.code_pair,
        previous_categories=tuple(review.categories),
        error=None,
    )


def validator_submitted(state: ValidatorState) -> ValidatorState:
    return replace(state, phase=ValidatorPhase.SUBMITTED, error=None)


def validator_failed(state: ValidatorState, message: str) -> ValidatorState:
    if state.phase == ValidatorPhase.LOADING:
        return replace(state, phase=ValidatorPhase.FAILED, error=message)
    return replace(state, error=message)
