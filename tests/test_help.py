"""Help box rendering tests."""

from __future__ import annotations

import unittest

from lazycomic.render import HELP_BINDINGS, help_box_lines


class HelpBoxTests(unittest.TestCase):
    def test_plain_box_rows_share_one_width(self) -> None:
        lines = help_box_lines(color=False)

        self.assertEqual(len(lines), len(HELP_BINDINGS) + 4)
        self.assertEqual({len(line) for line in lines}, {len(lines[0])})
        self.assertTrue(lines[0].startswith("╭") and lines[-1].endswith("╯"))

    def test_every_binding_is_listed(self) -> None:
        text = "\n".join(help_box_lines(color=False))
        for key, desc in HELP_BINDINGS:
            self.assertIn(key, text)
            self.assertIn(desc, text)

    def test_color_adds_sgr_sequences_only(self) -> None:
        colored = help_box_lines(color=True)
        plain = help_box_lines(color=False)

        self.assertIn("\033[38;5;229m", colored[3])
        stripped = [
            line.replace("\033[38;5;229m", "").replace("\033[1;38;5;81m", "").replace("\033[0m", "")
            for line in colored
        ]
        self.assertEqual(stripped, plain)

    def test_jump_command_help_says_pages_count_from_one(self) -> None:
        descriptions = dict(HELP_BINDINGS)

        self.assertIn("1 is the first page", descriptions[":"])


if __name__ == "__main__":
    unittest.main()
