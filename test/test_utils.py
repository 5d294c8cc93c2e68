# python
"""
Tests for the internal helpers (Unset, coalesce, mirror, ordinal).
"""
import unittest
from unittest import TestCase

from argsmith.utils import *


class TestUnset(TestCase):

    def testSingletonAndFalsy(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subtype(UnsetType):
                pass

    def testUnionWithTypes(self):
        self.assertIsInstance("", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class TestCoalesce(TestCase):

    def testReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(None, "fallback"))


class TestMirror(TestCase):

    def testReadOnlyProperty(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = 42

        holder = Holder()
        self.assertEqual(holder.value, 42)
        with self.assertRaises(AttributeError):
            holder.value = 0

    def testRequiresString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(13), "13th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(101), "101st")

    def testRejectsNonIntegers(self):
        for value in ("1", 1.0, True):
            with self.assertRaises(TypeError):
                ordinal(value)


if __name__ == "__main__":
    unittest.main()
