"""
Reviewer and validator workflows.

The controllers own the current state object and the API client. Each user
action calls the API (one request at a time) and swaps in the state returned
by the matching transition in `taxonomy_buddy.workflow.state`. Failures never
escape: they are recorded as a flat `error` message on the state and the user
retries by repeating the action.
"""

import logging
from uuid import UUID

from taxonomy_buddy.database.core.errors import ReviewAppError
from taxonomy_buddy.workflow import state as transitions
from taxonomy_buddy.workflow.client import ReviewApiClient
from taxonomy_buddy.workflow.state import Phase, ReviewerState, ValidatorState

logger = logging.getLogger(__name__)


class ReviewerController:
    """Drives the reviewer screen: work queue, history and progress."""

    def __init__(self, client: ReviewApiClient, user_id: UUID):
        self.client = client
        self.user_id = user_id
        self.state = ReviewerState()

    def load(self) -> ReviewerState:
        """Fetch the next pair (or completion), the history list and the progress counters."""
        self.state = transitions.begin_loading(self.state)
        try:
            self.state = transitions.loaded_next(self.state, self.client.next_or_latest(self.user_id))
            self.state = transitions.loaded_history(self.state, self.client.list_reviews(self.user_id))
            self.state = transitions.loaded_progress(self.state, self.client.progress(self.user_id))
        except ReviewAppError as e:
            logger.warning("Loading reviews for %s failed: %s", self.user_id, e.message)
            self.state = transitions.failed(self.state, e.message)
        return self.state

    def select_category(self, category: str) -> ReviewerState:
        self.state = transitions.select_category(self.state, category)
        return self.state

    def add_custom_category(self, text: str) -> ReviewerState:
        self.state = transitions.add_custom(self.state, text)
        return self.state

    def remove_category(self, index: int) -> ReviewerState:
        self.state = transitions.remove_category(self.state, index)
        return self.state

    def set_functionality_change(self, value: bool) -> ReviewerState:
        self.state = transitions.set_functionality_change(self.state, value)
        return self.state

    def toggle_edit(self) -> ReviewerState:
        self.state = transitions.toggle_edit(self.state)
        return self.state

    def open_history(self, index: int) -> ReviewerState:
        """Show the history entry at `index` read-only."""
        if not 0 <= index < len(self.state.history):
            return self.state
        try:
            review = self.client.get_review(self.user_id, self.state.history[index].id)
        except ReviewAppError as e:
            self.state = transitions.failed(self.state, e.message)
            return self.state
        self.state = transitions.opened_history_entry(self.state, index, review)
        return self.state

    def navigate(self, offset: int) -> ReviewerState:
        """Step through the history by `offset` entries; out-of-range steps do nothing."""
        index = transitions.history_target(self.state, offset)
        if index is None:
            return self.state
        return self.open_history(index)

    def submit(self) -> bool:
        """
        Submit a new review or update the history entry being edited, then reload.

        Returns
        -------
        bool
            False if nothing could be submitted or the request failed.
        """
        current = self.state
        if not current.can_submit:
            return False
        try:
            if current.phase == Phase.REVIEWING_NEW:
                self.client.submit(
                    self.user_id,
                    current.code_pair.id,
                    current.selected,
                    current.is_functionality_change,
                )
            else:
                self.client.update(current.review_id, current.selected, current.is_functionality_change)
        except ReviewAppError as e:
            logger.warning("Submitting review failed: %s", e.message)
            self.state = transitions.failed(current, e.message)
            return False
        self.load()
        return True


class ValidatorController:
    """Lets a reviewer audit another reviewer's decision on one code pair."""

    def __init__(self, client: ReviewApiClient, user_id: UUID, target_user_id: UUID, code_pair_id: int):
        self.client = client
        self.user_id = user_id
        self.target_user_id = target_user_id
        self.code_pair_id = code_pair_id
        self.state = ValidatorState()

    def load(self) -> ValidatorState:
        """Fetch the audited review together with its code pair."""
        try:
            review = self.client.get_review(self.target_user_id, self.code_pair_id, type="codePairId")
        except ReviewAppError as e:
            self.state = transitions.validator_failed(self.state, e.message)
            return self.state
        self.state = transitions.validator_loaded(self.state, review)
        return self.state

    def select_category(self, category: str) -> ValidatorState:
        self.state = transitions.select_category(self.state, category)
        return self.state

    def add_custom_category(self, text: str) -> ValidatorState:
        self.state = transitions.add_custom(self.state, text)
        return self.state

    def remove_category(self, index: int) -> ValidatorState:
        self.state = transitions.remove_category(self.state, index)
        return self.state

    def set_functionality_change(self, value: bool) -> ValidatorState:
        self.state = transitions.set_functionality_change(self.state, value)
        return self.state

    def submit(self) -> bool:
        """Submit the validator's own categorization of the pair."""
        if not self.state.can_submit:
            return False
        try:
            self.client.submit(
                self.user_id,
                self.code_pair_id,
                self.state.selected,
                self.state.is_functionality_change,
            )
        except ReviewAppError as e:
            self.state = transitions.validator_failed(self.state, e.message)
            return False
        self.state = transitions.validator_submitted(self.state)
        return True
