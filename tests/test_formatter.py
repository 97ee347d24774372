from __future__ import annotations

import unittest

from agent.models import Variation
from bot.formatter import (
    escape,
    escape_code,
    format_error,
    format_platform_result,
    format_variation,
    format_vibes,
)


def _variation(n=1, tags=("launch", "robots"), hook="Wait for it...") -> Variation:
    return Variation(topic=f"Robot arm #{n}", hook=hook, description="Built in a weekend.", tags=tags)


class FormatterTests(unittest.TestCase):
    def test_escape(self):
        self.assertEqual(escape("a.b!c"), "a\\.b\\!c")
        self.assertEqual(escape_code("x`y\\z"), "x\\`y\\\\z")

    def test_variation_has_copyable_blocks(self):
        text = format_variation(0, _variation())

        self.assertTrue(text.startswith("*Variation 1*: _Robot arm \\#1_"))
        self.assertIn("```\nWait for it...\n```", text)
        self.assertIn("```\nlaunch robots\n```", text)

    def test_variation_without_tags_omits_tag_block(self):
        self.assertNotIn("Tags:", format_variation(2, _variation(tags=())))

    def test_platform_result_fits_one_message(self):
        messages = format_platform_result("tiktok", (_variation(1), _variation(2), _variation(3)))

        self.assertEqual(len(messages), 1)
        self.assertIn("TikTok / Shorts", messages[0])
        for n in (1, 2, 3):
            self.assertIn(f"*Variation {n}*", messages[0])

    def test_long_fields_are_clipped_and_fences_stay_balanced(self):
        long_description = "word " * 1200
        variations = tuple(
            Variation(topic="t" * 900, hook="h`\\" * 500, description=long_description, tags=("tag",) * 300)
            for _ in range(3)
        )
        messages = format_platform_result("youtube", variations)

        self.assertEqual(len(messages), 3)
        for message in messages:
            self.assertLessEqual(len(message), 4000)
            self.assertEqual(message.count("```") % 2, 0)
            self.assertIn("…[truncated]", message)
        self.assertEqual(sum(m.count("*Variation") for m in messages), 3)

    def test_short_fields_are_untouched(self):
        text = format_variation(0, _variation(hook="x" * 600))
        self.assertIn("x" * 600, text)
        self.assertNotIn("truncated", text)

    def test_error_and_vibes(self):
        self.assertEqual(format_error("Invalid YouTube URL."), "❌ Invalid YouTube URL\\.")
        vibes = format_vibes(["Excited", "Funny"], default="Funny")
        self.assertIn("`Funny` \\(default\\)", vibes)
        self.assertNotIn("`Excited` \\(default\\)", vibes)


if __name__ == "__main__":
    unittest.main()
