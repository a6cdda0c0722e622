# python
"""
Faults module behavioral tests (options, rendering, triggering).

Scope
- Validate per-class defaults for code, title and hint and their overrides.
- Validate rendering as plain lines and as a panel.
- Validate trigger(): raise outside shell mode, print (and optionally exit) inside it.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes to an in-memory rich console without colors.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from sextant import (
    ConfigurationError,
    ConsoleException,
    FaultCode,
    FlagValueError,
    NoCommandError,
    OptionValueRequiredError,
    RequiredArgumentError,
    RequiredOptionError,
    ValidationError,
    trigger,
)


def render(fault):
    console = Console(file=io.StringIO(), width=200)
    console.print(fault)
    return console.file.getvalue()


class TestFaultOptions(TestCase):
    """Behavioral tests for fault defaults and overrides."""

    def testClassDefaults(self):
        fault = RequiredOptionError("Required option '--env' not provided.")
        self.assertEqual(fault.code, FaultCode.REQUIRED_OPTION)
        self.assertEqual(fault.options["title"], "required option")
        self.assertTrue(fault.hint)
        self.assertEqual(str(fault), "Required option '--env' not provided.")

    def testTaxonomy(self):
        for kind in (RequiredOptionError, OptionValueRequiredError, FlagValueError, RequiredArgumentError):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, ValidationError))
        for kind in (ConfigurationError, ValidationError, NoCommandError):
            with self.subTest(kind=kind.__name__):
                self.assertTrue(issubclass(kind, ConsoleException))

    def testOverrides(self):
        fault = ConfigurationError("bad", code=FaultCode.DUPLICATED_DESCRIPTOR, hint="rename it")
        self.assertEqual(fault.code, FaultCode.DUPLICATED_DESCRIPTOR)
        self.assertEqual(fault.hint, "rename it")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            ConfigurationError("bad").options["code"] = 0

    def testMessageIsOptional(self):
        self.assertEqual(str(NoCommandError()), "")

    def testReplaceKeepsMessageAndType(self):
        fault = NoCommandError("No valid commands found.", hint="available commands: build")
        replaced = fault.__replace__(shell=True)
        self.assertIsInstance(replaced, NoCommandError)
        self.assertEqual(str(replaced), "No valid commands found.")
        self.assertEqual(replaced.hint, "available commands: build")
        self.assertTrue(replaced.options["shell"])
        self.assertFalse(fault.options["shell"])

    def testNormalizedCode(self):
        self.assertEqual(FaultCode.NO_COMMAND.normalize(), "21121")


class TestRendering(TestCase):
    """Behavioral tests for __rich__()."""

    def testPlainRendering(self):
        written = render(NoCommandError("No valid commands found.", prog="tool"))
        self.assertIn("[ tool — 21121 | No Command ]", written)
        self.assertIn("No valid commands found.", written)
        self.assertIn("→ run the 'help' command", written)

    def testPanelRendering(self):
        written = render(ConfigurationError("bad descriptor", fancy=True, hint=""))
        self.assertIn("Configuration Error", written)
        self.assertIn("bad descriptor", written)
        self.assertNotIn("→", written)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(ConfigurationError) as context:
            trigger(ConfigurationError("bad"), hint="fix it")
        self.assertEqual(context.exception.hint, "fix it")

    def testDeferredShellPrints(self):
        console = Console(file=io.StringIO(), width=200)
        self.assertIsNone(trigger(ValidationError("invalid"), shell=True, deferred=True, console=console))
        self.assertIn("invalid", console.file.getvalue())

    def testShellExits(self):
        console = Console(file=io.StringIO(), width=200)
        with self.assertRaises(SystemExit) as context:
            trigger(ValidationError("invalid"), shell=True, console=console)
        self.assertEqual(context.exception.code, 1)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
