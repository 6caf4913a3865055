"""JSON highlighting used by the print modes."""

import json
import re
import unittest

from lazyhub.highlight import available_style_names, render_json

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


class RenderJsonTests(unittest.TestCase):
    def test_no_color_is_plain_indented_json(self) -> None:
        text = render_json({"login": "octocat", "id": 1}, no_color=True)
        self.assertEqual(text, '{\n  "login": "octocat",\n  "id": 1\n}\n')

    def test_color_output_strips_back_to_same_json(self) -> None:
        data = [{"login": "mönä", "followers": 3}]
        rendered = render_json(data, "monokai")
        self.assertIn("\x1b[", rendered)
        self.assertEqual(json.loads(ANSI_RE.sub("", rendered)), data)

    def test_unknown_style_falls_back_to_default(self) -> None:
        rendered = render_json({"a": 1}, "no-such-style")
        self.assertEqual(json.loads(ANSI_RE.sub("", rendered)), {"a": 1})

    def test_style_names_include_default(self) -> None:
        self.assertIn("monokai", available_style_names())


if __name__ == "__main__":
    unittest.main()
