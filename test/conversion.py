"""
Conversion tests (strto / strfrom / converter registry).

Scope
- Permissive numeric reads behave like C strtol/strtod (leading number, else zero).
- Strict reads reject anything that is not a complete literal.
- Custom converters and the constructor fallback for unregistered types.
"""
import unittest
from fractions import Fraction
from unittest import TestCase

from optparser import strto, strfrom, converter, UncastableValueError


class TestPermissive(TestCase):

    def testStringPassthrough(self):
        self.assertEqual(strto(" raw text "), " raw text ")
        self.assertEqual(strto("42", str), "42")

    def testIntegerPrefix(self):
        self.assertEqual(strto("42", int), 42)
        self.assertEqual(strto("  -7", int), -7)
        self.assertEqual(strto("+3px", int), 3)
        self.assertEqual(strto("12.9", int), 12)

    def testIntegerGarbageIsZero(self):
        self.assertEqual(strto("", int), 0)
        self.assertEqual(strto("abc", int), 0)
        self.assertEqual(strto("- 4", int), 0)

    def testFloatPrefix(self):
        self.assertEqual(strto("2.5", float), 2.5)
        self.assertEqual(strto(".5x", float), 0.5)
        self.assertEqual(strto("1e3kg", float), 1000.0)
        self.assertEqual(strto("-4.", float), -4.0)
        self.assertEqual(strto("Infinity", float), float("inf"))

    def testFloatGarbageIsZero(self):
        self.assertEqual(strto("e5", float), 0.0)
        self.assertIsInstance(strto("nope", float), float)

    def testBool(self):
        self.assertTrue(strto("yes", bool))
        self.assertTrue(strto(" TRUE ", bool))
        self.assertFalse(strto("off", bool))
        self.assertFalse(strto("maybe", bool))

    def testConstructorFallback(self):
        self.assertEqual(strto("1/3", Fraction), Fraction(1, 3))
        self.assertEqual(strto("not a fraction", Fraction), Fraction())


class TestStrict(TestCase):

    def testStrictInteger(self):
        self.assertEqual(strto(" 15 ", int, strict=True), 15)
        with self.assertRaises(UncastableValueError) as context:
            strto("15px", int, strict=True)
        self.assertEqual(str(context.exception), "cannot convert '15px' to int")
        self.assertEqual(context.exception.options["text"], "15px")

    def testStrictFloat(self):
        self.assertEqual(strto("1e-2", float, strict=True), 0.01)
        with self.assertRaises(ValueError):
            strto("1e-2s", float, strict=True)

    def testStrictBool(self):
        self.assertFalse(strto("0", bool, strict=True))
        with self.assertRaises(UncastableValueError):
            strto("maybe", bool, strict=True)

    def testStrictRejectsPythonOnlyLiterals(self):
        self.assertEqual(strto("1_000", int), 1)
        with self.assertRaises(UncastableValueError):
            strto("1_000", int, strict=True)
        self.assertEqual(strto("1_0.5", float), 1.0)
        with self.assertRaises(UncastableValueError):
            strto("1_0.5", float, strict=True)

    def testNonAsciiDigitsAreNotNumbers(self):
        self.assertEqual(strto("\u0663", int), 0)
        self.assertEqual(strto("\u0663", float), 0.0)
        with self.assertRaises(UncastableValueError):
            strto("\u0663", int, strict=True)

    def testStrictAgreesWithPermissive(self):
        for text in ("0", "42", " -7 ", "+3", "007"):
            with self.subTest(text=text):
                self.assertEqual(strto(text, int, strict=True), strto(text, int))
        for text in ("2.5", ".5", "-4.", "1e3", " 1E-2 ", "inf", "-Infinity"):
            with self.subTest(text=text):
                self.assertEqual(strto(text, float, strict=True), strto(text, float))

    def testStrictConstructorFallback(self):
        with self.assertRaises(UncastableValueError):
            strto("not a fraction", Fraction, strict=True)


class TestRegistry(TestCase):

    def testCustomConverter(self):
        class Point(tuple):
            pass

        @converter(Point)
        def _(text, strict):
            return Point(map(int, text.split(",")))

        self.assertEqual(strto("1,2", Point), (1, 2))

    def testConverterRequiresType(self):
        with self.assertRaises(TypeError):
            converter("int")

    def testStrtoRejectsNonString(self):
        with self.assertRaises(TypeError):
            strto(5, int)


class TestStrfrom(TestCase):

    def testValues(self):
        self.assertEqual(strfrom(3), "3")
        self.assertEqual(strfrom(2.5), "2.5")
        self.assertEqual(strfrom("text"), "text")
        self.assertEqual(strfrom(True), "true")
        self.assertEqual(strfrom(False), "false")

    def testBoolReadsBack(self):
        self.assertTrue(strto(strfrom(True), bool, strict=True))


if __name__ == "__main__":
    unittest.main()
