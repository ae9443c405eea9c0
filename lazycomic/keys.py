"""Key bindings for the viewer loop.

A small combo registry maps key tokens to viewer actions. The registry
hands back whatever the handler returns; the loop decides what it means.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Exact-match key dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def is_bound(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key`` and return its result."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


@dataclass(frozen=True)
class ViewerKeyActions:
    """Callbacks the registry dispatches to."""

    quit: Callable[[], bool | None]
    toggle_help: Callable[[], bool | None]
    next_page: Callable[[], bool | None]
    next_single_page: Callable[[], bool | None]
    previous_page: Callable[[], bool | None]
    previous_single_page: Callable[[], bool | None]
    redraw: Callable[[], bool | None]
    redraw_single: Callable[[], bool | None]
    toggle_page_mode: Callable[[], bool | None]
    first_page: Callable[[], bool | None]
    last_page: Callable[[], bool | None]
    command_prompt: Callable[[], bool | None]


def build_key_registry(actions: ViewerKeyActions) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("q", "CTRL_C"), actions.quit),
        KeyComboBinding(("?",), actions.toggle_help),
        KeyComboBinding(("n", "CTRL_N", "RIGHT", "DOWN"), actions.next_page),
        KeyComboBinding(("N",), actions.next_single_page),
        KeyComboBinding(("p", "CTRL_P", "LEFT", "UP"), actions.previous_page),
        KeyComboBinding(("P",), actions.previous_single_page),
        KeyComboBinding(("ESC", "r", "CTRL_R"), actions.redraw),
        KeyComboBinding(("s",), actions.redraw_single),
        KeyComboBinding(("m",), actions.toggle_page_mode),
        KeyComboBinding(("^", "HOME"), actions.first_page),
        KeyComboBinding(("$", "END"), actions.last_page),
        KeyComboBinding((":",), actions.command_prompt),
    )


def parse_jump_command(command: str, current_index: int) -> int | None:
    """Translate a ``:`` command into a target index.

    ``+N``/``-N`` move relative to the current index; a bare ``N`` is a
    1-based page number. Anything unparsable yields ``None``.
    """
    text = command.strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    if text[0] in "+-":
        return current_index + value
    return value - 1
