"""Tests for the application controller."""

from todo_app.constants import EMPTY_TASK_TOAST
from todo_app.store import TodoItem
from todo_app.view import TodoController


class TestEditInput:
    """Tests for editing the pending input."""

    def test_sets_pending_text(self, controller: TodoController, redraws):
        controller.edit_input("buy")
        assert controller.view_state.pending_input == "buy"
        assert redraws.last[1].pending_input == "buy"

    def test_typing_clears_error(self, controller: TodoController):
        controller.submit()
        assert controller.view_state.show_error

        controller.edit_input("b")
        assert controller.view_state.show_error is False

    def test_does_not_touch_store(self, controller: TodoController):
        controller.edit_input("buy milk")
        assert controller.snapshot().is_empty


class TestSubmit:
    """Tests for adding the pending input."""

    def test_adds_and_clears_input(self, controller: TodoController, redraws, notifier):
        controller.edit_input("  buy milk ")
        item = controller.submit()

        assert item == TodoItem(1, "buy milk")
        assert controller.view_state.pending_input == ""
        assert controller.view_state.show_error is False
        snapshot, view_state = redraws.last
        assert snapshot.active == (item,)
        assert view_state.pending_input == ""
        assert notifier.messages == []

    def test_submit_with_text(self, controller: TodoController, redraws):
        item = controller.submit("walk dog")
        assert item is not None and item.text == "walk dog"
        assert len(redraws.calls) == 1

    def test_empty_input_shows_error_and_keeps_text(
        self, controller: TodoController, redraws, notifier
    ):
        controller.edit_input("   ")
        result = controller.submit()

        assert result is None
        assert controller.view_state.show_error is True
        assert controller.view_state.pending_input == "   "
        assert controller.snapshot().is_empty
        assert redraws.last[1].show_error is True
        assert notifier.messages == [EMPTY_TASK_TOAST]

    def test_success_after_error_hides_error(self, controller: TodoController):
        controller.submit("")
        controller.submit("a")
        assert controller.view_state.show_error is False


class TestToggleAndDelete:
    """Tests for forwarding toggle/delete intents."""

    def test_toggle(self, controller: TodoController, redraws):
        controller.submit("a")
        moved = controller.toggle(1)

        assert moved == TodoItem(1, "a", True)
        assert redraws.last[0].completed == (moved,)

    def test_toggle_missing_is_noop(self, controller: TodoController, redraws):
        controller.submit("a")
        before = controller.snapshot()
        count = len(redraws.calls)

        assert controller.toggle(99) is None
        assert controller.snapshot() == before
        assert len(redraws.calls) == count + 1

    def test_delete(self, controller: TodoController):
        controller.submit("a")
        controller.submit("b")
        controller.toggle(1)

        removed = controller.delete(1, from_completed=True)

        assert removed == TodoItem(1, "a", True)
        assert controller.snapshot().completed == ()

    def test_delete_wrong_section_is_noop(self, controller: TodoController, notifier):
        controller.submit("a")
        before = controller.snapshot()

        assert controller.delete(1, from_completed=True) is None
        assert controller.snapshot() == before
        assert notifier.messages == []


class TestRedrawCallback:
    """Tests for redraw wiring."""

    def test_no_callback(self):
        controller = TodoController()
        controller.submit("a")
        controller.request_redraw()
        assert len(controller.snapshot().active) == 1

    def test_replace_callback(self, controller: TodoController, redraws):
        controller.set_redraw_callback(None)
        controller.submit("a")
        assert redraws.calls == []
