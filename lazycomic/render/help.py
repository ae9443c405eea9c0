"""Key-binding help box drawn over the current page.

Content only; the loop decides where and when it is written.
"""

from __future__ import annotations

HELP_BINDINGS: tuple[tuple[str, str], ...] = (
    ("q, Ctrl+C", "Quit"),
    ("n, Ctrl+N, Right, Down", "Next page(s)"),
    ("N", "Next page (force single page)"),
    ("p, Ctrl+P, Left, Up", "Previous page"),
    ("P", "Previous page (force single page)"),
    ("Esc, r, Ctrl+R", "Redraw the current page(s)"),
    ("s", "Redraw (force single page)"),
    ("^, Home", "First page"),
    ("$, End", "Last page"),
    ("m", "Toggle page mode (LTR/RTL)"),
    (":", "Go to page N (1 is the first page), +N/-N relative"),
    ("?", "Toggle this help"),
)

_KEY_SGR = "\033[38;5;229m"
_TITLE_SGR = "\033[1;38;5;81m"
_RESET = "\033[0m"


def help_box_lines(color: bool = True) -> list[str]:
    """Return the framed key-binding table, one string per screen row."""
    key_width = max(len(key) for key, _ in HELP_BINDINGS)
    desc_width = max(len(desc) for _, desc in HELP_BINDINGS)
    inner = key_width + desc_width + 6
    key_sgr, title_sgr, reset = (_KEY_SGR, _TITLE_SGR, _RESET) if color else ("", "", "")

    title = "Key bindings"
    lines = [
        "╭" + "─" * inner + "╮",
        f"│ {title_sgr}{title}{reset}" + " " * (inner - len(title) - 1) + "│",
        "├" + "─" * inner + "┤",
    ]
    for key, desc in HELP_BINDINGS:
        lines.append(f"│ {key_sgr}{key.ljust(key_width)}{reset} => {desc.ljust(desc_width)} │")
    lines.append("╰" + "─" * inner + "╯")
    return lines
