"""
Change taxonomy, review status and ordered-category helpers.

A review's categories are an ordered sequence of labels without duplicates.
Labels are either one of `TAXONOMY_CATEGORIES` or free text entered through
the "Other" option. The helpers below never mutate their input; they return
new tuples so the client state machine can stay immutable.
"""

import enum

TAXONOMY_CATEGORIES = (
    "Algorithmic Change",
    "Control Flow/Loop Changes",
    "Data Structure & Variable Changes",
    "Refactoring & Code Cleanup",
    "Exception & Input/Output Handling",
    "Concurrency/Parallelism",
    "API/Library Call Changes",
    "Security Fix",
)

OTHER = "Other"
"""Marker option that opens the free-text custom category input."""


class ReviewStatus(str, enum.Enum):
    """Review state machine. ``NEW`` is never persisted: it is the state of a
    (reviewer, pair) that has no record yet."""

    NEW = "new"
    SUBMITTED = "submitted"
    EDITED = "edited"


def add_category(categories: tuple[str, ...], category: str) -> tuple[str, ...]:
    """Append `category` unless it is already selected."""
    if category in categories:
        return categories
    return categories + (category,)


def add_custom_category(categories: tuple[str, ...], text: str) -> tuple[str, ...]:
    """Append trimmed free text; blank or already-present text is ignored."""
    label = text.strip()
    if not label or label == OTHER:
        return categories
    return add_category(categories, label)


def remove_category_at(categories: tuple[str, ...], index: int) -> tuple[str, ...]:
    """Remove the entry at `index`, keeping the order of the rest.

    Out-of-range indexes leave the selection unchanged.
    """
    if index < 0 or index >= len(categories):
        return categories
    return categories[:index] + categories[index + 1:]


def format_categories(categories) -> str:
    """Render a selection the way reviewers see it: ``1. X, 2. Y``."""
    return ", ".join(f"{position}. {label}" for position, label in enumerate(categories, start=1))
