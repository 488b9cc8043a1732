"""Render the to-do screen as a rich renderable.

Layout, top to bottom:
    input box ("Add a task") with the pending text
    inline error when the last add was empty
    "Items" section, or "No items yet"
    "Completed Items" section, or "No completed items yet" while
    there are active items
"""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todo_app.constants import (
    ACTIVE_SECTION_TITLE,
    ADD_ACTION,
    COMPLETED_SECTION_TITLE,
    EMPTY_TASK_ERROR,
    INPUT_LABEL,
    NO_COMPLETED_PLACEHOLDER,
    NO_ITEMS_PLACEHOLDER,
)
from todo_app.store import Snapshot, TodoItem
from todo_app.view.state import ViewState

CHECKED = "[x]"
UNCHECKED = "[ ]"
DELETE_ICON = "✕"


def render_screen(
    snapshot: Snapshot,
    view_state: ViewState,
    *,
    show_task_ids: bool = True,
    accent_color: str = "cyan",
) -> RenderableType:
    """Build the full screen for a snapshot and input state."""
    parts: list[RenderableType] = [_input_box(view_state, accent_color)]

    if view_state.show_error:
        parts.append(Text(EMPTY_TASK_ERROR, style="bold red"))

    parts.append(Text(""))
    if snapshot.active:
        parts.append(_heading(ACTIVE_SECTION_TITLE, accent_color))
        parts.append(_task_rows(snapshot.active, show_task_ids))
    else:
        parts.append(_placeholder(NO_ITEMS_PLACEHOLDER))

    parts.append(Text(""))
    if snapshot.completed:
        parts.append(_heading(COMPLETED_SECTION_TITLE, accent_color))
        parts.append(_task_rows(snapshot.completed, show_task_ids))
    elif snapshot.active:
        parts.append(_placeholder(NO_COMPLETED_PLACEHOLDER))

    return Group(*parts)


def _input_box(view_state: ViewState, accent_color: str) -> Panel:
    border = "red" if view_state.show_error else accent_color
    return Panel(
        Text(view_state.pending_input),
        title=INPUT_LABEL,
        title_align="left",
        subtitle=f"Enter: {ADD_ACTION}",
        subtitle_align="right",
        border_style=border,
    )


def _heading(title: str, accent_color: str) -> Text:
    return Text(title, style=f"bold {accent_color}")


def _placeholder(message: str) -> Text:
    return Text(message, style="dim italic")


def _task_rows(items: tuple[TodoItem, ...], show_task_ids: bool) -> Table:
    table = Table.grid(padding=(0, 1), expand=True)
    table.add_column("check", no_wrap=True)
    if show_task_ids:
        table.add_column("id", style="dim", justify="right", no_wrap=True)
    table.add_column("text", ratio=1)
    table.add_column("delete", style="red", no_wrap=True)

    for item in items:
        check = CHECKED if item.completed else UNCHECKED
        label = Text(item.text, style="strike dim" if item.completed else "")
        cells: list[RenderableType] = [Text(check)]
        if show_task_ids:
            cells.append(Text(f"{item.id}."))
        cells.extend([label, Text(DELETE_ICON)])
        table.add_row(*cells)
    return table
