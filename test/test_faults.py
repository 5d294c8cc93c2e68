# python
"""
Fault taxonomy and trigger tests.

Scope
- Validate the error/warning hierarchy, default titles and codes.
- Validate options immutability and copy.replace support.
- Validate trigger(): raise, warn, or render + exit in shell mode.
- Validate FaultCode.normalize() and rich rendering shapes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import sys
import unittest
import warnings
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console, Group
from rich.panel import Panel

from argsmith import (
    ArgumentError,
    ArgumentNotFoundError,
    ArgumentWarning,
    DuplicateNameWarning,
    FaultCode,
    MissingArgumentError,
    ParseError,
    UnknownArgumentError,
    ValidationError,
    trigger,
)
from argsmith import faults


class TestHierarchy(TestCase):
    """Behavioral tests for the fault classes."""

    def testErrorsShareOneBase(self):
        for error in (UnknownArgumentError, ParseError, ValidationError, MissingArgumentError, ArgumentNotFoundError):
            self.assertTrue(issubclass(error, ArgumentError), error)

    def testWarningsAreUserWarnings(self):
        self.assertTrue(issubclass(DuplicateNameWarning, ArgumentWarning))
        self.assertTrue(issubclass(ArgumentWarning, UserWarning))

    def testDefaultCodes(self):
        self.assertEqual(UnknownArgumentError().code, FaultCode.UNKNOWN_ARGUMENT)
        self.assertEqual(ParseError().code, FaultCode.MISSING_VALUE)
        self.assertEqual(ValidationError().code, FaultCode.INVALID_VALUE)
        self.assertEqual(MissingArgumentError().code, FaultCode.MISSING_ARGUMENT)
        self.assertEqual(ArgumentNotFoundError().code, FaultCode.ARGUMENT_NOT_FOUND)
        self.assertEqual(DuplicateNameWarning().code, FaultCode.DUPLICATED_NAME)

    def testOptionsOverrideDefaults(self):
        error = ParseError("flag '--quiet' cannot have a value", code=FaultCode.FLAG_ASSIGNMENT, title="flag value")
        self.assertEqual(error.code, FaultCode.FLAG_ASSIGNMENT)
        self.assertEqual(error.title, "flag value")
        self.assertEqual(str(error), "flag '--quiet' cannot have a value")

    def testOptionsAreReadOnly(self):
        error = ValidationError("bad", hint="try again")
        with self.assertRaises(TypeError):
            error.options["hint"] = "other"

    def testReplaceKeepsTypeAndMessage(self):
        error = ValidationError("bad", hint="try again")
        replaced = copy.replace(error, index=3)
        self.assertIsInstance(replaced, ValidationError)
        self.assertEqual(str(replaced), "bad")
        self.assertEqual(replaced.options["index"], 3)
        self.assertEqual(replaced.options["hint"], "try again")
        self.assertNotIn("index", error.options)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testErrorIsRaisedWithOptions(self):
        with self.assertRaises(UnknownArgumentError) as context:
            trigger(UnknownArgumentError("unknown option '-x'"), index=1)
        self.assertEqual(context.exception.options["index"], 1)

    def testWarningGoesThroughWarnings(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(DuplicateNameWarning("name 'v' overridden"))
        self.assertEqual(len(caught), 1)
        self.assertIsInstance(caught[0].message, DuplicateNameWarning)

    def testShellModeRendersAndExits(self):
        buffer = io.StringIO()
        with patch.object(faults, "console", Console(file=buffer, width=200)):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingArgumentError("missing required positional 'file'"), shell=True, prog="cat")
        self.assertEqual(context.exception.code, 1)
        output = buffer.getvalue()
        self.assertIn("cat", output)
        self.assertIn("11125", output)
        self.assertIn("missing required positional 'file'", output)

    def testShellModeWarningDoesNotExit(self):
        buffer = io.StringIO()
        with patch.object(faults, "console", Console(file=buffer, width=200)):
            trigger(DuplicateNameWarning("name 'v' overridden", hint="rename one of them"), shell=True)
        self.assertIn("name 'v' overridden", buffer.getvalue())
        self.assertIn("rename one of them", buffer.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestRendering(TestCase):
    """Behavioral tests for FaultCode.normalize() and __rich__."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11117")

    def testNormalizeUsesMainCodes(self):
        codes = {FaultCode.MISSING_VALUE: "E-VALUE"}
        with patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.INVALID_VALUE.normalize(), "11124")

    def testPlainRenderIsGroup(self):
        self.assertIsInstance(ValidationError("bad").__rich__(), Group)

    def testFancyRenderIsPanel(self):
        self.assertIsInstance(ValidationError("bad", fancy=True).__rich__(), Panel)


if __name__ == "__main__":
    unittest.main()
