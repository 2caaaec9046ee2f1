"""
Usage and help rendering.

HelpEntry is the read-only projection of one registration (name, help text,
metavar override, arity) taken at registration time. HelpFormatter turns the
entries of a Registry into Rich Text; Text.plain is the exact text written to
non-terminal sinks.

Usage tokens by arity (NAME is the resolved metavar)
- NONE          -> ""
- exact(n)      -> "NAME NAME ..." (n times)
- AT_LEAST_ONE  -> "NAME [NAME ...]"
- ZERO_OR_ONE   -> "[NAME]"
- ZERO_OR_MORE  -> "[NAME [NAME ...]]"
Optionals wrap the flag name and that token in brackets: "[-op OP]", "[-h]".

Metavar resolution
- explicit non-blank metavar, else
- optional: the flag name without its marker, upper-cased ("-op" -> "OP"),
- positional: the registered name as-is.

Palette
- usage-label, program-name, description, section-label, option-name,
  positional-name, metavar, help-text. A __styles__ mapping in __main__
  overrides entries; styles only apply when colorful.
"""
from collections import defaultdict

from rich.text import Text

from .arity import Arity, ArityKind
from .tokens import isoptional, MARKER
from .utils import *


class HelpEntry:
    """
    help metadata of one registered argument (immutable after creation).
    """

    __slots__ = ("_name", "_help", "_metavar", "_count")

    def __init__(self, name, /, help="", metavar=Unset, count=Unset):
        if not isinstance(name, str):
            raise TypeError("help entry 'name' must be a string")
        if not isinstance(help, str):
            raise TypeError("help entry 'help' must be a string")
        if not isinstance(metavar, str | Unset):
            raise TypeError("help entry 'metavar' must be a string")
        if isinstance(metavar, str) and not (metavar := metavar.strip()):
            # blank means "derive it from the name"
            metavar = Unset
        self._name = name
        self._help = help.strip()
        self._metavar = metavar
        self._count = Arity.coerce(coalesce(count, Arity.exact(1)))

    @property
    def name(self):
        return self._name

    @property
    def help(self):
        return self._help

    @property
    def metavar(self):
        return coalesce(self._metavar)

    @property
    def count(self):
        return self._count

    @property
    def optional(self):
        return isoptional(self._name)

    def metavarname(self):
        if self._metavar:
            return self._metavar
        if self.optional:
            return upper(self._name.removeprefix(MARKER))
        return self._name

    def metavarrep(self):
        name = self.metavarname()
        match self._count.kind:
            case ArityKind.NONE:
                return ""
            case ArityKind.EXACT:
                return " ".join(name for _ in range(self._count.count))
            case ArityKind.AT_LEAST_ONE:
                return "%s [%s ...]" % (name, name)
            case ArityKind.ZERO_OR_ONE:
                return "[%s]" % name
            case ArityKind.ZERO_OR_MORE:
                return "[%s [%s ...]]" % (name, name)
            case _:
                raise RuntimeError("internal error, invalid arity kind %r" % (self._count.kind,))

    def usage(self):
        if self.optional:
            return "[%s]" % " ".join(filter(None, (self._name, self.metavarrep())))
        return self.metavarrep()

    def command(self):
        if self.optional:
            return " ".join(filter(None, (self._name, self.metavarrep())))
        return self.metavarname()

    def __repr__(self):
        return "HelpEntry(%r, help=%r, metavar=%r, count=%r)" % (self._name, self._help, self.metavar, self._count)


class HelpFormatter:
    """
    render usage/help Text from registry metadata (read-only).
    """

    def __init__(self, *, colorful=False):
        self.colorful = bool(colorful)
        self.styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # cyan headline
            "program-name": "bold #FF4D94",  # magenta-pink brand pop
            "description": "italic #A3A3A3",  # neutral gray
            "section-label": "bold #FFFFFF",  # white headers
            "option-name": "bold #00E6FF",  # cyan for optionals
            "positional-name": "bold #22C55E",  # green for positionals
            "metavar": "bold #FFD600",  # amber for placeholders
            "help-text": "#9CA3AF",  # muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(self, style):
        return self.styles[style] if self.colorful else ""

    def _usage_token(self, entry):
        metavar = Text(entry.metavarrep(), self.styler("metavar"))
        if not entry.optional:
            return metavar
        token = Text.assemble("[", Text(entry.name, self.styler("option-name")))
        if metavar:
            token.append(" ").append(metavar)
        return token.append("]")

    def _command(self, entry):
        if not entry.optional:
            return Text(entry.metavarname(), self.styler("positional-name"))
        command = Text(entry.name, self.styler("option-name"))
        if metavar := entry.metavarrep():
            command.append(" ").append(metavar, self.styler("metavar"))
        return command

    def format_usage(self, prog, registry, /):
        """
        "usage: <prog> <optional tokens...> <positional tokens...>\\n"
        """
        usage = Text()
        usage.append("usage", self.styler("usage-label")).append(": ")
        usage.append(prog, self.styler("program-name"))
        for entry in (*registry.entries(optional=True), *registry.entries(optional=False)):
            # an arity that renders nothing (exact(0) positional) adds no token
            if token := self._usage_token(entry):
                usage.append(" ").append(token)
        return usage.append("\n")

    def format_help(self, prog, description, registry, /):
        """
        usage, description, then the positional and optional sections, blank
        line separated. Entries read "  <command-form>\\t<description>".
        """
        blocks = [self.format_usage(prog, registry)]

        if description:
            blocks.append(Text(description, self.styler("description")).append("\n"))

        for optional, label in ((False, "positional arguments"), (True, "optional arguments")):
            if not (entries := registry.entries(optional=optional)):
                continue
            section = Text()
            section.append(label, self.styler("section-label")).append(":\n")
            for entry in entries:
                section.append("  ").append(self._command(entry)).append("\t")
                section.append(entry.help, self.styler("help-text")).append("\n")
            blocks.append(section)

        return Text("\n").join(blocks)


__all__ = (
    "HelpEntry",
    "HelpFormatter",
)
