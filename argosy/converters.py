"""
Converters: one token in, one typed value out.

A converter is any callable taking a single string. It either returns the
converted value or raises; Typed arguments wrap foreign exceptions into
ConversionError so every failure reaches the user as a parse error.

- standard(type): the default. Calls type(token) and requires the whole token
  to convert (int("5x") fails, it is never read as 5). bool resolves to boolean.
- boolean: strict truth-word parser.
- choices(mapping): exact-name lookup, e.g. for enumerations.
"""
import functools
from collections.abc import Mapping

from .faults import ConversionError
from .utils import rename

_TRUTHY = frozenset({"true", "yes", "on", "1"})
_FALSY = frozenset({"false", "no", "off", "0"})


@functools.cache
def standard(type=str, /):
    """
    build the default converter for 'type'.

    the converter is cached per type so that repeated registrations share it.
    """
    if not callable(type):
        raise TypeError("standard() argument must be callable")
    if type is str:
        return rename(lambda token: token, "standard[str]")
    if type is bool:
        return boolean

    typename = getattr(type, "__name__", repr(type))

    @rename("standard[%s]" % typename)
    def converter(token):
        try:
            return type(token)
        except (TypeError, ValueError, ArithmeticError) as exception:
            raise ConversionError("failed to parse %r as %s" % (token, typename), token=token) from exception

    return converter


def boolean(token, /):
    """
    parse a truth word: true/false, yes/no, on/off, 1/0 (case-insensitive).
    """
    if (folded := token.casefold()) in _TRUTHY:
        return True
    if folded in _FALSY:
        return False
    raise ConversionError("failed to parse %r as bool" % token, token=token)


def choices(mapping, /):
    """
    build a converter that maps exact token names to values.

        >>> level = choices({"low": 1, "high": 9})
        >>> level("high")
        9
    """
    if not isinstance(mapping, Mapping):
        raise TypeError("choices() argument must be a mapping")
    if not mapping:
        raise ValueError("choices() argument cannot be empty")
    for name in mapping:
        if not isinstance(name, str):
            raise TypeError("choices() names must be strings")
    table = dict(mapping)

    @rename("choices")
    def converter(token):
        try:
            return table[token]
        except KeyError:
            raise ConversionError(
                "invalid choice %r (choose from %s)" % (token, ", ".join(map(repr, table))),
                token=token,
            ) from None

    return converter


__all__ = (
    "standard",
    "boolean",
    "choices",
)
