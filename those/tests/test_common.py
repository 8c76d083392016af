import datetime
import os
import tempfile
import unittest
from decimal import Decimal

from ..common import ANY, MISSING, Kind, Policy, kind_of, get_property, resolve_path, own_properties, \
    load_policy
from ..exceptions import ThoseValidationException
from ..sequence import those


class Slotted:
    __slots__ = ('a', 'b')

    def __init__(self):
        self.a = 1


class TestKinds(unittest.TestCase):
    def test_kind_table(self):
        cases = [
            (MISSING, Kind.UNDEFINED),
            (None, Kind.NULL),
            (True, Kind.BOOLEAN),
            (3, Kind.NUMBER),
            (2.5, Kind.NUMBER),
            (Decimal("1.1"), Kind.NUMBER),
            ("x", Kind.STRING),
            (datetime.date(2024, 1, 1), Kind.DATE),
            (datetime.datetime(2024, 1, 1, 12), Kind.DATE),
            (datetime.time(8, 30), Kind.DATE),
            (len, Kind.FUNCTION),
            (lambda: None, Kind.FUNCTION),
            ([1], Kind.ARRAY),
            ((1,), Kind.ARRAY),
            (those([1]), Kind.ARRAY),
            ({"a": 1}, Kind.OBJECT),
            (object(), Kind.OBJECT),
            (dict, Kind.OBJECT),
        ]
        for value, kind in cases:
            with self.subTest(value=value):
                self.assertEqual(kind_of(value), kind)

    def test_sentinels_are_falsy_and_distinct(self):
        self.assertFalse(MISSING)
        self.assertFalse(ANY)
        self.assertIsNot(MISSING, ANY)
        self.assertEqual(repr(ANY), "ANY")


class TestPropertyAccess(unittest.TestCase):
    def test_get_property(self):
        self.assertEqual(get_property({"a": 1}, "a"), 1)
        self.assertIs(get_property({"a": 1}, "b"), MISSING)
        self.assertEqual(get_property([1, 2, 3], -1), 3)
        self.assertIs(get_property([1, 2, 3], 5), MISSING)
        self.assertIs(get_property([1, 2, 3], True), MISSING)
        self.assertEqual(get_property(datetime.date(2024, 2, 3), "month"), 2)
        self.assertIs(get_property(None, "a"), MISSING)
        self.assertIs(get_property(5, "a"), MISSING)

    def test_get_property_skips_methods_of_arrays_and_strings(self):
        self.assertIs(get_property([1, 2], "count"), MISSING)
        self.assertIs(get_property((1, 2), "index"), MISSING)
        self.assertIs(get_property("abc", "upper"), MISSING)
        self.assertIs(get_property("abc", 0), MISSING)
        self.assertIs(resolve_path({"tags": ["a"]}, "tags.count"), MISSING)

    def test_resolve_path(self):
        self.assertEqual(resolve_path({"a": {"b": {"c": 1}}}, "a.b.c"), 1)
        self.assertEqual(resolve_path({"a.b": 2, "a": {"b": 3}}, "a.b"), 2)
        self.assertIs(resolve_path({"a": {}}, "a.b"), MISSING)
        self.assertIs(resolve_path({"a": None}, "a.b"), MISSING)

    def test_own_properties(self):
        self.assertEqual(own_properties({"a": 1}), [("a", 1)])
        self.assertEqual(own_properties(["x", "y"]), [(0, "x"), (1, "y")])
        self.assertEqual(own_properties(Slotted()), [("a", 1)])
        self.assertIsNone(own_properties(frozenset()))
        self.assertIsNone(own_properties(Slotted))
        self.assertIsNone(own_properties(bool))


class TestPolicy(unittest.TestCase):
    def test_defaults(self):
        policy = Policy()
        self.assertEqual(policy.matching, "alike")
        self.assertEqual(policy.on_predicate_error, "raise")

    def test_rejects_unknown_values(self):
        with self.assertRaises(ThoseValidationException):
            Policy(matching="fuzzy")
        with self.assertRaises(ThoseValidationException):
            Policy(on_predicate_error="retry")

    def test_from_environ(self):
        policy = Policy.from_environ({"THOSE_MATCHING": " Exact ", "THOSE_ON_PREDICATE_ERROR": "ignore"})
        self.assertEqual(policy, Policy(matching="exact", on_predicate_error="ignore"))
        self.assertEqual(Policy.from_environ({}), Policy())

    def test_from_environ_rejects_bad_values(self):
        with self.assertRaises(ThoseValidationException) as ctx:
            Policy.from_environ({"THOSE_ON_PREDICATE_ERROR": "retry"})
        self.assertIn("THOSE_ON_PREDICATE_ERROR='retry'", ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__, ThoseValidationException)

    def test_load_policy(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "those.ini")
            with open(path, "w") as f:
                f.write("[those]\nmatching = exact\n\n[other]\nmatching = nonsense\n")
            self.assertEqual(load_policy(path), Policy(matching="exact"))
            with self.assertRaises(ThoseValidationException):
                load_policy(path, section="other")
            self.assertEqual(load_policy(path, section="absent"), Policy())

    def test_load_policy_missing_file(self):
        with self.assertRaises(ThoseValidationException):
            load_policy(os.path.join(tempfile.gettempdir(), "does-not-exist-those.ini"))


if __name__ == '__main__':
    unittest.main()
