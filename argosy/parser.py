"""
Argosy parser: registration API and the token-dispatch loop.

What this module provides
- Parser: holds a Registry, exposes chainable registration, runs parses and
  renders usage/help to the configured sinks.
- Running: the per-run context handed to every argument (program name, output
  sink, parser, halt request).
- ParseStatus / ParseOutcome: the terminal result of one run.

Dispatch loop (one run)
- classify the next token with isoptional():
  • optional: consume it as the name, look it up by exact match, let the
    argument consume what its arity needs.
  • positional: hand the stream to the positional at the cursor, then advance
    the cursor by one no matter how many tokens it took.
- at end of input every positional must have been visited, otherwise the run
  fails with "too few arguments".
- the cursor lives in the run, not in the parser, so one parser can be reused
  for sequential runs.

Failures
- any ParserError aborts the whole run; the parser writes usage, a blank line
  and "<prog>: error: <message>" to the error sink and returns FAILED.
- other exceptions (e.g. an invalid arity tag) are defects and propagate.

Help
- "-h" is pre-registered. It writes the help text to the output sink and stops
  the run with HELP_REQUESTED; with exit_on_help=True it exits the process with
  status 0 instead.

Quick start
    from argosy import Parser, Cell, Arity, append

    compiler, number, op, strings = Cell(""), Cell(0), Cell(2), Cell([])
    outcome = (
        Parser("description")
        ("compiler", compiler)
        ("int", number)
        ("-op", op)
        .add("-strings", strings, count=Arity.AT_LEAST_ONE, metavar="string", combiner=append)
        .parse_args()
    )
"""
import logging
import os.path
import shlex
import sys
from collections import namedtuple
from collections.abc import Iterable, Sequence
from enum import IntEnum

from rich.console import Console
from rich.text import Text

from .arguments import Typed, Callback
from .arity import Arity
from .faults import *
from .help import HelpEntry, HelpFormatter
from .registry import Registry
from .targets import assign
from .tokens import isoptional, TokenStream
from .utils import *

logger = logging.getLogger(__name__)


class ParseStatus(IntEnum):
    COMPLETE = 0
    FAILED = 1
    HELP_REQUESTED = 2


class ParseOutcome(namedtuple("ParseOutcome", ("status", "message"), defaults=(None,))):
    """
    terminal result of one run; truthy only when COMPLETE.

    message carries the diagnostic of a FAILED run (without the program prefix).
    """
    __slots__ = ()

    def __bool__(self):
        return self.status is ParseStatus.COMPLETE


class Running:
    """
    variables that only exist while a run is in flight.
    """

    __slots__ = ("parser", "app", "out", "_halted")

    def __init__(self, parser, app, out, /):
        self.parser = parser
        self.app = app
        self.out = out
        self._halted = False

    @property
    def halted(self):
        return self._halted

    def halt(self):
        """
        request that no further tokens are processed in this run.
        """
        self._halted = True


class Parser:
    """
    Declarative command-line parser.

    Parameters
    - description: str, shown below the usage line in help.
    - prog: Unset | str, program name; defaults to argv[0] of the run.
    - out / err: text sinks for help and failures (default: sys.stdout /
      sys.stderr, looked up at write time).
    - colorful: Unset | bool; Unset means "style when the sink is a terminal".
    - exit_on_help: when True, "-h" exits the process with status 0 after
      writing help instead of returning HELP_REQUESTED.
    """

    def __init__(self, description="", prog=Unset, *, out=Unset, err=Unset, colorful=Unset, exit_on_help=False):
        if not isinstance(description, str):
            raise TypeError("parser 'description' must be a string")
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        if not isinstance(colorful, bool | Unset):
            raise TypeError("parser 'colorful' must be a boolean")
        for sink in (out, err):
            if sink is not Unset and not callable(getattr(sink, "write", None)):
                raise TypeError("parser sinks must provide a write() method")

        self.description = description.strip()
        self._prog = prog
        self._out = out
        self._err = err
        self.colorful = colorful
        self.exit_on_help = bool(exit_on_help)
        self._registry = Registry()

        self.callback("-h", self._helper, count=Arity.NONE, help="show this help message and exit")

    @property
    def prog(self):
        return coalesce(self._prog, os.path.basename(sys.argv[0]) if sys.argv else "")

    @property
    def out(self):
        return coalesce(self._out, sys.stdout)

    @property
    def err(self):
        return coalesce(self._err, sys.stderr)

    @property
    def registry(self):
        return self._registry

    # ===============
    # Registration
    # ===============
    def __call__(self, name, target, /, **extra):
        """
        chainable shorthand: a callable without a 'value' registers a callback,
        anything else a typed argument.
        """
        if callable(target) and not hasattr(target, "value"):
            return self.callback(name, target, **extra)
        return self.add(name, target, **extra)

    def add(self, name, target, /, *, count=Unset, help="", metavar=Unset, type=Unset, converter=Unset, combiner=assign):
        """
        register a typed argument writing into 'target'.

        names starting with "-" are optionals, everything else is positional
        (consumed in registration order).
        """
        argument = Typed(target, count, type=type, converter=converter, combiner=combiner)
        self._registry.insert(name, argument, HelpEntry(name, help, metavar, argument.count))
        return self

    def callback(self, name, action=Unset, /, *, count=Unset, help="", metavar=Unset):
        """
        register a side-effecting argument.

        action(running, stream, name) is called when the argument is met; the
        arity (default NONE) shapes usage/help. Without 'action' this returns a
        decorator:

            @parser.callback("-V", help="show version")
            def version(running, stream, name):
                running.out.write("1.0\\n")
                running.halt()
        """
        if action is Unset:
            @rename("callback")
            def wrapper(action, /):
                self.callback(name, action, count=count, help=help, metavar=metavar)
                return action
            return wrapper

        argument = Callback(action, count)
        self._registry.insert(name, argument, HelpEntry(name, help, metavar, argument.count))
        return self

    # ===============
    # Parsing
    # ===============
    def parse_args(self, argv=Unset, /):
        """
        parse an argv-style sequence; argv[0] is the program path and is skipped.

        without an explicit prog, the basename of argv[0] names the program, the
        same rule the 'prog' property applies to sys.argv.
        """
        argv = coalesce(argv, sys.argv)
        if isinstance(argv, str) or not isinstance(argv, Sequence):
            raise TypeError("parse_args() argument must be a sequence of strings")
        app = coalesce(self._prog, os.path.basename(argv[0]) if argv else self.prog)
        return self._parseargs(argv[1:], app)

    def parse(self, prompt=Unset, /):
        """
        parse a shell-like string (split with shlex) or an iterable of tokens.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return self._parseargs(tokens, self.prog)

    def _parseargs(self, tokens, app):
        running = Running(self, app, self.out)
        stream = TokenStream(tokens)
        positionals = self._registry.positionals
        cursor = 0

        logger.debug("parsing %d token(s) for %r", len(stream), app)
        try:
            while stream:
                if isoptional(token := stream.peek()):
                    name = stream.get()
                    try:
                        argument = self._registry.lookup(name)
                    except KeyError:
                        raise UnknownOptionalError("unknown optional argument: %s" % name, input=name) from None
                else:
                    if cursor >= len(positionals):
                        raise UnexpectedPositionalError(
                            "all positional arguments have been consumed: %s" % token,
                            input=token,
                        )
                    name, argument = positionals[cursor]
                    cursor += 1

                logger.debug("dispatching %r", name)
                argument.consume(running, stream, name)

                if running.halted:
                    logger.debug("run halted by %r", name)
                    if self.exit_on_help:
                        sys.exit(0)
                    return ParseOutcome(ParseStatus.HELP_REQUESTED)

            if cursor != len(positionals):
                raise MissingPositionalsError(
                    "too few arguments",
                    missing=tuple(name for name, _ in positionals[cursor:]),
                )
        except ParserError as fault:
            logger.debug("parse failed: %s", fault.message)
            self._fail(app, fault)
            return ParseOutcome(ParseStatus.FAILED, fault.message)

        return ParseOutcome(ParseStatus.COMPLETE)

    def _fail(self, app, fault):
        sink = self.err
        colorful = self._colorful(sink)
        rendered = self._formatter(sink).format_usage(app, self._registry)
        rendered.append("\n")
        rendered.append(fault.__replace__(prog=app, colorful=colorful).__rich__())
        rendered.append("\n")
        self._emit(sink, rendered)

    def _helper(self, running, stream, name):
        self._emit(running.out, self._formatter(running.out).format_help(running.app, self.description, self._registry))
        running.halt()

    # ===============
    # Rendering
    # ===============
    def format_usage(self, prog=Unset):
        return HelpFormatter().format_usage(coalesce(prog, self.prog), self._registry).plain

    def format_help(self, prog=Unset):
        return HelpFormatter().format_help(coalesce(prog, self.prog), self.description, self._registry).plain

    def print_usage(self, file=Unset):
        sink = coalesce(file, self.out)
        self._emit(sink, self._formatter(sink).format_usage(self.prog, self._registry))

    def print_help(self, file=Unset):
        sink = coalesce(file, self.out)
        self._emit(sink, self._formatter(sink).format_help(self.prog, self.description, self._registry))

    def _colorful(self, sink):
        if self.colorful is not Unset:
            return self.colorful
        isatty = getattr(sink, "isatty", None)
        return bool(callable(isatty) and isatty())

    def _formatter(self, sink):
        return HelpFormatter(colorful=self._colorful(sink))

    def _emit(self, sink, text):
        if self._colorful(sink):
            console = Console(file=sink, force_terminal=True, highlight=False, markup=False, emoji=False, soft_wrap=True)
            console.print(text, end="")
        else:
            # plain sinks get the exact text, tabs included
            sink.write(text.plain)
        flush = getattr(sink, "flush", None)
        if callable(flush):
            flush()


__all__ = (
    "ParseStatus",
    "ParseOutcome",
    "Running",
    "Parser",
)
