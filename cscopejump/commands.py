"""Static command items (the editor's Search > Cscope menu) and their dispatch."""

from __future__ import annotations

from collections.abc import Callable

from .session import TagNavigator

COMMAND_ITEMS: tuple[tuple[str, str], ...] = (
    ("goto", "Goto"),
    ("goto_prompt", "Goto..."),
    ("jump_back", "Jump Back"),
    ("jump_forward", "Jump Forward"),
)


def run_command(
    navigator: TagNavigator,
    command_id: str,
    ask_tag: Callable[[], str | None],
) -> bool:
    """Run one command item; returns whether the caret moved.

    ``goto_prompt`` asks for a tag first and does nothing when the answer is
    empty or the prompt was dismissed.
    """
    if command_id == "goto":
        return navigator.goto_tag()
    if command_id == "goto_prompt":
        name = ask_tag()
        if not name:
            return False
        return navigator.goto_tag(name)
    if command_id == "jump_back":
        return navigator.jump_back()
    if command_id == "jump_forward":
        return navigator.jump_forward()
    raise ValueError(f"unknown command: {command_id!r}")


__all__ = ["COMMAND_ITEMS", "run_command"]
