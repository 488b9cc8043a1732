"""Save/restore of screen state across configuration changes."""

from todo_app.persistence.saved_state import SavedState, deserialize, serialize

__all__ = ["SavedState", "deserialize", "serialize"]
