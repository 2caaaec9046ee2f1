"""
Usage/help rendering tests.

Scope
- Metavar resolution and the usage token of every arity kind.
- Usage line ordering (optionals, then positionals, registration order).
- Full help layout: usage, description, positional and optional sections.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import Arity, Cell, HelpEntry, HelpFormatter, Parser, Registry, Typed, append


class TestHelpEntry(TestCase):

    def testOptionalMetavarIsUpperCasedName(self):
        entry = HelpEntry("-op")
        self.assertEqual(entry.metavarname(), "OP")
        self.assertEqual(entry.usage(), "[-op OP]")
        self.assertEqual(entry.command(), "-op OP")

    def testFlagHasNoMetavar(self):
        entry = HelpEntry("-h", count=Arity.NONE)
        self.assertEqual(entry.usage(), "[-h]")
        self.assertEqual(entry.command(), "-h")

    def testExplicitMetavar(self):
        entry = HelpEntry("-strings", metavar="string", count=Arity.AT_LEAST_ONE)
        self.assertEqual(entry.usage(), "[-strings string [string ...]]")
        self.assertEqual(entry.command(), "-strings string [string ...]")

    def testPositionalUsesItsName(self):
        entry = HelpEntry("compiler")
        self.assertTrue(not entry.optional)
        self.assertEqual(entry.usage(), "compiler")
        self.assertEqual(entry.command(), "compiler")

    def testPositionalMetavarOverride(self):
        entry = HelpEntry("compiler", metavar="CC")
        self.assertEqual(entry.usage(), "CC")
        self.assertEqual(entry.command(), "CC")

    def testArityShapes(self):
        shapes = {
            Arity.exact(2): "N N",
            Arity.AT_LEAST_ONE: "N [N ...]",
            Arity.ZERO_OR_ONE: "[N]",
            Arity.ZERO_OR_MORE: "[N [N ...]]",
            Arity.NONE: "",
        }
        for count, expected in shapes.items():
            self.assertEqual(HelpEntry("N", count=count).metavarrep(), expected, count)

    def testBlankMetavarFallsBackToName(self):
        for metavar in ("", "  "):
            entry = HelpEntry("-x", metavar=metavar)
            self.assertIsNone(entry.metavar)
            self.assertEqual(entry.usage(), "[-x X]")
        self.assertEqual(HelpEntry("files", metavar="").command(), "files")

    def testBlankMetavarThroughParser(self):
        parser = Parser(prog="prog").add("-x", Cell(""), metavar="")
        self.assertEqual(parser.format_usage(), "usage: prog [-h] [-x X]\n")

    def testHelpIsStripped(self):
        self.assertEqual(HelpEntry("-x", "  some help \n").help, "some help")


class TestHelpFormatter(TestCase):

    def setUp(self):
        self.registry = Registry()
        for name, count in (("compiler", Arity.exact(1)), ("-op", Arity.exact(1)), ("-v", Arity.NONE)):
            self.registry.insert(name, Typed(Cell(""), count), HelpEntry(name, count=count))

    def testUsageListsOptionalsFirst(self):
        usage = HelpFormatter().format_usage("prog", self.registry)
        self.assertEqual(usage.plain, "usage: prog [-op OP] [-v] compiler\n")

    def testHelpSections(self):
        help = HelpFormatter().format_help("prog", "", self.registry)
        self.assertEqual(
            help.plain,
            "usage: prog [-op OP] [-v] compiler\n"
            "\n"
            "positional arguments:\n"
            "  compiler\t\n"
            "\n"
            "optional arguments:\n"
            "  -op OP\t\n"
            "  -v\t\n",
        )

    def testColorfulKeepsTheSameText(self):
        plain = HelpFormatter().format_help("prog", "description", self.registry)
        styled = HelpFormatter(colorful=True).format_help("prog", "description", self.registry)
        self.assertEqual(plain.plain, styled.plain)
        self.assertFalse(plain.spans)
        self.assertTrue(styled.spans)


class TestParserHelp(TestCase):

    def setUp(self):
        self.parser = (
            Parser("description", "prog")
            ("compiler", Cell(""), help="compiler to drive")
            ("int", Cell(0))
            ("-op", Cell(2), help="optimization level")
        )

    def testUsage(self):
        self.assertEqual(self.parser.format_usage(), "usage: prog [-h] [-op OP] compiler int\n")

    def testHelp(self):
        self.assertEqual(
            self.parser.format_help(),
            "usage: prog [-h] [-op OP] compiler int\n"
            "\n"
            "description\n"
            "\n"
            "positional arguments:\n"
            "  compiler\tcompiler to drive\n"
            "  int\t\n"
            "\n"
            "optional arguments:\n"
            "  -h\tshow this help message and exit\n"
            "  -op OP\toptimization level\n",
        )

    def testVariadicOptionalInUsage(self):
        self.parser.add("-strings", Cell([]), count=Arity.AT_LEAST_ONE, metavar="string", combiner=append)
        self.assertEqual(
            self.parser.format_usage(),
            "usage: prog [-h] [-op OP] [-strings string [string ...]] compiler int\n",
        )

    def testOnlyHelpFlag(self):
        self.assertEqual(
            Parser(prog="tool").format_help(),
            "usage: tool [-h]\n"
            "\n"
            "optional arguments:\n"
            "  -h\tshow this help message and exit\n",
        )

    def testProgOverride(self):
        self.assertEqual(self.parser.format_usage("other"), "usage: other [-h] [-op OP] compiler int\n")


if __name__ == "__main__":
    unittest.main()
