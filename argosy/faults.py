"""
Argosy faults (parse errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing parse failure,
  grouped by domain so logs and searches stay predictable.
- ParserError: the single parse-error kind. Subclasses only narrow the cause;
  the message carries everything a user needs.
- Rendering: every fault knows how to render itself as a Rich Text line
  "<prog>: error: <message>", styled when the sink is colorful.

Integration
- Arity, converters and the parser raise faults; Parser catches them once at the
  top of a parse run, writes usage plus the rendered fault to the error sink and
  reports a FAILED outcome.
- Registration mistakes are programming errors and are raised as TypeError or
  ValueError instead; they never travel through this module.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - dispatch (1110x): UNKNOWN_OPTIONAL, UNEXPECTED_POSITIONAL, MISSING_POSITIONALS
    - arity (1111x): NO_MORE_TOKENS, NOT_ENOUGH_VALUES, AT_LEAST_ONE_VALUE_REQUIRED
    - conversion (1112x): CONVERSION_FAILED

    codes are informative only; the message is the contract.
    """
    # --- dispatch errors ---
    UNKNOWN_OPTIONAL            = 11101
    UNEXPECTED_POSITIONAL       = 11102
    MISSING_POSITIONALS         = 11103

    # --- arity errors ---
    NO_MORE_TOKENS              = 11111
    NOT_ENOUGH_VALUES           = 11112
    AT_LEAST_ONE_VALUE_REQUIRED = 11113

    # --- conversion errors ---
    CONVERSION_FAILED           = 11121


class ParserError(Exception):
    """
    user-input fault raised while consuming the token stream.

    attributes
    - message: human-readable diagnostic (lowercase, no program prefix).
    - options: read-only mapping with any extra context (argument name, token,
      prog, colorful...). __replace__ merges new options in.
    - code: FaultCode of the concrete subclass.
    """
    code = FaultCode.NO_MORE_TOKENS

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "error: %s" % (self.message or "")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "#C8C8D0",  # soft light gray message
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        return Text.assemble(
            text(self.options.get("prog", ""), "prog-name"),
            ": ",
            text("error", "error-label"),
            ": ",
            text(self.message or "", "error-message"),
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionalError(ParserError):
    code = FaultCode.UNKNOWN_OPTIONAL


class UnexpectedPositionalError(ParserError):
    code = FaultCode.UNEXPECTED_POSITIONAL


class MissingPositionalsError(ParserError):
    code = FaultCode.MISSING_POSITIONALS


class NotEnoughValuesError(ParserError):
    code = FaultCode.NOT_ENOUGH_VALUES


class AtLeastOneValueRequiredError(ParserError):
    code = FaultCode.AT_LEAST_ONE_VALUE_REQUIRED


class ConversionError(ParserError):
    code = FaultCode.CONVERSION_FAILED


__all__ = (
    "FaultCode",
    "ParserError",
    "UnknownOptionalError",
    "UnexpectedPositionalError",
    "MissingPositionalsError",
    "NotEnoughValuesError",
    "AtLeastOneValueRequiredError",
    "ConversionError",
)
