"""
Tests for the sentinels and helpers in sextant.utils.

This module verifies:
- Unset and Present singleton identity, truthiness and representation.
- Copying preserves the Present marker's identity.
- Finality (neither sentinel type can be subclassed).
- coalesce() only replaces Unset.
- mirror() hands out copies of containers.
- ordinal() labels.
"""
import copy
import unittest
from unittest import TestCase

from sextant.utils import *


class SentinelTest(TestCase):
    """
    Test suite for the Unset and Present singletons.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(PresentType(), Present)

    def testTruthiness(self) -> None:
        self.assertFalse(Unset)
        self.assertTrue(Present)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(repr(Present), "Present")

    def testPresentIsNotAString(self) -> None:
        # a bare flag and an empty value must stay distinguishable
        self.assertNotEqual(Present, "")
        self.assertNotEqual(Present, True)

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Present), Present)
        self.assertIs(copy.deepcopy({"flag": Present})["flag"], Present)

    def testUnionWithUnset(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("value", str | Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})
        with self.assertRaises(TypeError):
            type("Subclass", (PresentType,), {})


class HelperTest(TestCase):
    """
    Test suite for coalesce(), mirror(), rename() and ordinal().
    """

    def testCoalesceReplacesOnlyUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "fallback"), "")

    def testMirrorHandsOutCopies(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", "b"]

        holder = Holder()
        holder.items.append("c")
        self.assertEqual(holder.items, ["a", "b"])
        with self.assertRaises(AttributeError):
            holder.items = []

    def testRenameForms(self) -> None:
        def function():
            pass

        self.assertEqual(rename(function, "renamed").__name__, "renamed")
        self.assertEqual(rename("decorated")(function).__qualname__, "decorated")
        with self.assertRaises(TypeError):
            rename()

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(113), "113th")

    def testOrdinalRejectsNonIntegers(self) -> None:
        with self.assertRaises(TypeError):
            ordinal(True)
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
