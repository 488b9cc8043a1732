"""Tests for the terminal shell and its commands."""

import json
from unittest.mock import patch

import pytest
from conftest import console_text

from todo_app.cli.app import SlashCommandCompleter, TodoCLIApp
from todo_app.constants import EMPTY_TASK_ERROR, EMPTY_TASK_TOAST
from todo_app.errors import SavedStateError
from todo_app.store import TodoItem


def _ids(items) -> list[int]:
    return [item.id for item in items]


class TestPlainInput:
    """Plain lines are typed into the input field and added."""

    @pytest.mark.asyncio
    async def test_line_adds_task(self, app: TodoCLIApp, console):
        await app.process_input("buy milk")

        assert app.controller.snapshot().active == (TodoItem(1, "buy milk"),)
        assert "buy milk" in console_text(console)

    @pytest.mark.asyncio
    async def test_blank_line_shows_error_and_toast(self, app: TodoCLIApp, console):
        await app.process_input("   ")

        output = console_text(console)
        assert EMPTY_TASK_ERROR in output
        assert EMPTY_TASK_TOAST in output
        assert app.controller.view_state.pending_input == "   "
        assert app.controller.snapshot().is_empty


class TestTaskCommands:
    """Tests for /add, /input, /toggle, /delete."""

    @pytest.mark.asyncio
    async def test_add_with_text(self, app: TodoCLIApp):
        await app.process_input("/add walk dog")
        assert app.controller.snapshot().active[0].text == "walk dog"

    @pytest.mark.asyncio
    async def test_input_then_add(self, app: TodoCLIApp):
        await app.process_input("/input call mom")
        assert app.controller.snapshot().is_empty
        assert app.controller.view_state.pending_input == "call mom"

        await app.process_input("/add")

        assert app.controller.snapshot().active == (TodoItem(1, "call mom"),)
        assert app.controller.view_state.pending_input == ""

    @pytest.mark.asyncio
    async def test_add_without_pending_text_fails(self, app: TodoCLIApp):
        await app.process_input("/add")
        assert app.controller.view_state.show_error

    @pytest.mark.asyncio
    async def test_toggle(self, app: TodoCLIApp):
        await app.process_input("a")
        await app.process_input("/toggle 1")

        snapshot = app.controller.snapshot()
        assert snapshot.active == ()
        assert snapshot.completed == (TodoItem(1, "a", True),)

    @pytest.mark.asyncio
    async def test_toggle_alias(self, app: TodoCLIApp):
        await app.process_input("a")
        await app.process_input("/x 1")
        await app.process_input("/x 1")
        assert app.controller.snapshot().active == (TodoItem(1, "a"),)

    @pytest.mark.asyncio
    async def test_toggle_unknown_id(self, app: TodoCLIApp, console):
        await app.process_input("/toggle 5")
        assert "No task with id 5" in console_text(console)

    @pytest.mark.asyncio
    async def test_toggle_invalid_id(self, app: TodoCLIApp, console):
        await app.process_input("/toggle abc")
        assert "Invalid task id: abc" in console_text(console)

    @pytest.mark.asyncio
    async def test_delete_finds_section(self, app: TodoCLIApp):
        await app.process_input("a")
        await app.process_input("b")
        await app.process_input("/toggle 1")

        await app.process_input("/rm 1")

        snapshot = app.controller.snapshot()
        assert _ids(snapshot.active) == [2]
        assert snapshot.completed == ()

    @pytest.mark.asyncio
    async def test_delete_explicit_wrong_section(self, app: TodoCLIApp, console):
        await app.process_input("a")
        await app.process_input("/delete --completed 1")

        assert _ids(app.controller.snapshot().active) == [1]
        assert "Task 1 is not in Completed Items" in console_text(console)

    @pytest.mark.asyncio
    async def test_delete_conflicting_flags(self, app: TodoCLIApp, console):
        await app.process_input("a")
        await app.process_input("/delete 1 --completed --active")

        assert len(app.controller.snapshot().active) == 1
        assert "only one of" in console_text(console)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["--completed=false", "--active=no"])
    async def test_delete_flag_with_value_rejected(self, app: TodoCLIApp, console, flag):
        await app.process_input("a")
        await app.process_input("/toggle 1")
        await app.process_input(f"/delete 1 {flag}")

        assert len(app.controller.snapshot().completed) == 1
        assert "does not take a value" in console_text(console)

    @pytest.mark.asyncio
    async def test_scenario(self, app: TodoCLIApp):
        await app.process_input("a")
        await app.process_input("/toggle 1")
        await app.process_input("b")
        await app.process_input("/delete 1 --completed")

        snapshot = app.controller.snapshot()
        assert snapshot.active == (TodoItem(2, "b"),)
        assert snapshot.completed == ()

    @pytest.mark.asyncio
    async def test_status(self, app: TodoCLIApp, console):
        await app.process_input("a")
        await app.process_input("/status")
        assert "Next id" in console_text(console)


class TestShellCommands:
    """Tests for general commands and dispatch."""

    @pytest.mark.asyncio
    async def test_unknown_command(self, app: TodoCLIApp, console):
        await app.process_input("/frobnicate")

        output = console_text(console)
        assert "Unknown command: /frobnicate" in output
        assert app.controller.snapshot().is_empty

    @pytest.mark.asyncio
    async def test_help(self, app: TodoCLIApp, console):
        await app.process_input("/help")

        output = console_text(console)
        for name in ("/add", "/toggle", "/delete", "/settings", "/exit"):
            assert name in output

    @pytest.mark.asyncio
    async def test_help_for_command(self, app: TodoCLIApp, console):
        await app.process_input("/help rm")
        assert "/delete <id>" in console_text(console)

    @pytest.mark.asyncio
    async def test_exit(self, app: TodoCLIApp):
        await app.process_input("/exit")
        assert app.should_exit

    @pytest.mark.asyncio
    async def test_command_exception_is_reported(self, app: TodoCLIApp, console):
        with patch.object(app.controller, "request_redraw", side_effect=RuntimeError("boom")):
            await app.process_input("/list")
        assert "Error executing command: boom" in console_text(console)


class TestConfigurationChange:
    """State survives configuration changes."""

    @pytest.mark.asyncio
    async def test_reload_preserves_tasks_and_input(self, app: TodoCLIApp):
        await app.process_input("a")
        await app.process_input("b")
        await app.process_input("/toggle 1")
        await app.process_input("/input half typ")
        before = app.controller.snapshot()
        old_controller = app.controller

        await app.process_input("/reload")

        assert app.controller is not old_controller
        assert app.controller.snapshot() == before
        assert app.controller.view_state.pending_input == "half typ"

    @pytest.mark.asyncio
    async def test_old_controller_detached(self, app: TodoCLIApp, console):
        old_controller = app.controller
        app.configuration_change()
        size = len(console_text(console))

        old_controller.request_redraw()

        assert len(console_text(console)) == size

    @pytest.mark.asyncio
    async def test_failed_restore_keeps_controller(self, app: TodoCLIApp, console):
        await app.process_input("a")
        old_controller = app.controller

        with patch("todo_app.cli.app.deserialize", side_effect=SavedStateError("bad")):
            assert app.configuration_change() is False

        assert app.controller is old_controller
        assert "Could not restore state: bad" in console_text(console)

    @pytest.mark.asyncio
    async def test_settings_change_rebuilds_screen(self, app: TodoCLIApp, console):
        await app.process_input("buy milk")
        old_controller = app.controller

        await app.process_input("/settings show_task_ids false")

        assert app.settings.show_task_ids is False
        assert app.controller is not old_controller
        assert app.controller.snapshot().active == (TodoItem(1, "buy milk"),)
        assert "Show Task Ids: False" in console_text(console)

    @pytest.mark.asyncio
    async def test_invalid_setting_value(self, app: TodoCLIApp, console):
        old_controller = app.controller

        await app.process_input("/settings accent_color notacolor")

        assert app.settings.accent_color == "cyan"
        assert app.controller is old_controller
        assert "Invalid value for accent_color" in console_text(console)

    @pytest.mark.asyncio
    async def test_unknown_setting(self, app: TodoCLIApp, console):
        await app.process_input("/settings app_name other")
        assert "Unknown setting: app_name" in console_text(console)

    @pytest.mark.asyncio
    async def test_settings_save(self, app: TodoCLIApp, isolated_settings_sources):
        await app.process_input("/settings accent_color magenta --save")

        path = isolated_settings_sources / ".todo_app" / "settings.json"
        assert json.loads(path.read_text()) == {"accent_color": "magenta"}

    @pytest.mark.asyncio
    async def test_settings_show(self, app: TodoCLIApp, console):
        await app.process_input("/settings")
        output = console_text(console)
        assert "show_task_ids" in output
        assert "accent_color" in output


class TestSlashCommandCompleter:
    def _complete(self, text: str) -> list[str]:
        from prompt_toolkit.document import Document

        completer = SlashCommandCompleter(["add", "delete", "del", "toggle"])
        return [c.text for c in completer.get_completions(Document(text), None)]

    def test_completes_prefix(self):
        assert self._complete("/de") == ["/del", "/delete"]

    def test_ignores_plain_text(self):
        assert self._complete("de") == []

    def test_stops_after_arguments(self):
        assert self._complete("/delete 1") == []
