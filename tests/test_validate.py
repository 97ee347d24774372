from __future__ import annotations

import json
import unittest

from agent.errors import (
    InvalidArity,
    InvalidItemShape,
    InvalidRootShape,
    MalformedJSON,
    MissingContent,
    ResponseValidationError,
)
from agent.models import Variation
from agent.modules.validate import validate
from tests.helpers import variation

SCENARIO_A = (
    '[{"topic":"t","hook":"h","description":"d","tags":["x","y"]},'
    '{"topic":"t2","hook":"h2","description":"d2","tags":[]},'
    '{"topic":"t3","hook":"h3","description":"d3","tags":["z"]}]'
)
SCENARIO_B = '{"variations":' + SCENARIO_A + "}"


class ValidateScenarioTests(unittest.TestCase):
    def test_bare_array_returns_triple_in_order(self):
        result = validate("tiktok", SCENARIO_A)

        self.assertIsInstance(result, tuple)
        self.assertEqual(len(result), 3)
        self.assertEqual([v.topic for v in result], ["t", "t2", "t3"])
        self.assertEqual(result[0].tags, ("x", "y"))
        self.assertEqual(result[1].tags, ())
        self.assertEqual(result[2], Variation(topic="t3", hook="h3", description="d3", tags=("z",)))

    def test_wrapped_form_matches_bare_form(self):
        self.assertEqual(validate("tiktok", SCENARIO_B), validate("tiktok", SCENARIO_A))

    def test_not_json_is_malformed(self):
        with self.assertRaises(MalformedJSON) as ctx:
            validate("tiktok", "not json")
        self.assertEqual(ctx.exception.platform, "tiktok")

    def test_single_incomplete_item_fails_arity_before_shape(self):
        with self.assertRaises(InvalidArity) as ctx:
            validate("tiktok", '[{"topic":"t"}]')
        self.assertEqual(ctx.exception.got, 1)

    def test_idempotent(self):
        self.assertEqual(validate("twitter", SCENARIO_B), validate("twitter", SCENARIO_B))


class ValidatePresenceAndParseTests(unittest.TestCase):
    def test_none_and_empty_are_missing_content(self):
        for raw in (None, ""):
            with self.subTest(raw=raw):
                with self.assertRaises(MissingContent):
                    validate("twitter", raw)

    def test_whitespace_only_is_present_but_malformed(self):
        with self.assertRaises(MalformedJSON):
            validate("twitter", "   \n ")

    def test_truncated_and_trailing_comma_are_malformed(self):
        for raw in (SCENARIO_A[:-5], SCENARIO_A[:-1] + ",]"):
            with self.subTest(raw=raw[-10:]):
                with self.assertRaises(MalformedJSON):
                    validate("twitter", raw)

    def test_markdown_fences_are_not_stripped(self):
        with self.assertRaises(MalformedJSON):
            validate("twitter", f"```json\n{SCENARIO_B}\n```")

    def test_prose_around_json_is_not_extracted(self):
        with self.assertRaises(MalformedJSON):
            validate("twitter", f"Here you go: {SCENARIO_B}")


class ValidateRootShapeTests(unittest.TestCase):
    def test_scalars_and_unwrapped_objects_are_rejected(self):
        cases = [
            "42",
            '"text"',
            "null",
            "true",
            json.dumps(variation(1)),
            json.dumps({"items": [variation(1), variation(2), variation(3)]}),
            json.dumps({"variations": "three"}),
            json.dumps({"variations": {"a": variation(1)}}),
            json.dumps(["a", "b", "c"]),
            json.dumps([1, 2, 3]),
            json.dumps({"variations": [None, None, None]}),
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidRootShape):
                    validate("instagram", raw)

    def test_envelope_extra_keys_are_ignored(self):
        raw = json.dumps({"variations": json.loads(SCENARIO_A), "note": "enjoy"})
        self.assertEqual(validate("instagram", raw), validate("instagram", SCENARIO_A))


class ValidateArityTests(unittest.TestCase):
    def test_two_and_four_items_fail(self):
        for n in (2, 4):
            items = [variation(i) for i in range(n)]
            for raw in (json.dumps(items), json.dumps({"variations": items})):
                with self.subTest(n=n, raw=raw[:15]):
                    with self.assertRaises(InvalidArity) as ctx:
                        validate("youtube", raw)
                    self.assertEqual(ctx.exception.got, n)

    def test_empty_list_fails_arity(self):
        with self.assertRaises(InvalidArity) as ctx:
            validate("youtube", "[]")
        self.assertEqual(ctx.exception.got, 0)


class ValidateItemShapeTests(unittest.TestCase):
    def _raw_with_second(self, second) -> str:
        return json.dumps([variation(1), second, variation(3)])

    def test_missing_tags_on_second_item_reports_index_1(self):
        second = variation(2)
        del second["tags"]
        with self.assertRaises(InvalidItemShape) as ctx:
            validate("tiktok", self._raw_with_second(second))
        self.assertEqual(ctx.exception.index, 1)
        self.assertIn("Variation 2", ctx.exception.message)

    def test_wrong_types_are_not_coerced(self):
        bad_items = [
            {**variation(2), "hook": 7},
            {**variation(2), "topic": None},
            {**variation(2), "tags": "x, y"},
            {**variation(2), "tags": ["ok", 3]},
            {**variation(2), "tags": {"a": "b"}},
            {**variation(2), "description": ["d"]},
            None,
            "variation",
            [1, 2],
        ]
        for item in bad_items:
            with self.subTest(item=item):
                with self.assertRaises(InvalidItemShape) as ctx:
                    validate("tiktok", self._raw_with_second(item))
                self.assertEqual(ctx.exception.index, 1)

    def test_first_bad_index_wins(self):
        raw = json.dumps([variation(1), {"topic": "x"}, {"hook": "y"}])
        with self.assertRaises(InvalidItemShape) as ctx:
            validate("tiktok", raw)
        self.assertEqual(ctx.exception.index, 1)

    def test_extra_item_fields_are_ignored(self):
        raw = json.dumps([{**variation(i), "score": 9} for i in range(3)])
        result = validate("tiktok", raw)
        self.assertFalse(hasattr(result[0], "score"))

    def test_empty_strings_and_duplicate_tags_are_accepted(self):
        item = {"topic": "", "hook": "", "description": "", "tags": ["a", "a", ""]}
        result = validate("tiktok", json.dumps([item, item, item]))
        self.assertEqual(result[0].hook, "")
        self.assertEqual(result[0].tags, ("a", "a", ""))

    def test_all_errors_share_base_class(self):
        with self.assertRaises(ResponseValidationError):
            validate("tiktok", '{"nope": 1}')


if __name__ == "__main__":
    unittest.main()
