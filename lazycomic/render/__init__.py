"""Presentation helpers that produce text for the viewer screen."""

from .help import HELP_BINDINGS, help_box_lines

__all__ = ["HELP_BINDINGS", "help_box_lines"]
