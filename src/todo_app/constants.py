"""Shared constants for todo-app."""

# User-facing strings
INPUT_LABEL = "Add a task"
ADD_ACTION = "Add"
EMPTY_TASK_ERROR = "Task cannot be empty"
EMPTY_TASK_TOAST = "Please enter a task"
ACTIVE_SECTION_TITLE = "Items"
COMPLETED_SECTION_TITLE = "Completed Items"
NO_ITEMS_PLACEHOLDER = "No items yet"
NO_COMPLETED_PLACEHOLDER = "No completed items yet"

# Saved-state wire format version
SAVED_STATE_VERSION = 1

# Content display truncation limit
TEXT_PREVIEW_LENGTH = 40


def truncate(text: str, max_length: int = TEXT_PREVIEW_LENGTH) -> str:
    """Truncate text with ellipsis if it exceeds max_length."""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text
