"""
Arity: how many tokens one argument invocation consumes.

Overview
- ArityKind: the closed set of cardinality policies.
  • EXACT          exactly n tokens, no look-ahead (an optional-looking token is
                   consumed like any other value)
  • AT_LEAST_ONE   one mandatory token, then ZERO_OR_MORE
  • ZERO_OR_MORE   tokens while the stream is non-empty and the next token is
                   not optional-looking
  • ZERO_OR_ONE    at most one token, same stopping rule as ZERO_OR_MORE
  • NONE           nothing (pure side-effecting flags, e.g. help)

- Arity: immutable (kind, count) pair. count is only meaningful for EXACT.
  Arity.draw(stream, name) is the state machine: a generator that hands out the
  tokens one by one so each can be converted and combined before the next one
  is pulled. A failure part-way therefore leaves earlier combines applied.

Shorthands accepted by Arity.coerce (argparse-style, as used for 'nargs')
- int n -> Arity.exact(n)
- "+"   -> Arity.AT_LEAST_ONE
- "*"   -> Arity.ZERO_OR_MORE
- "?"   -> Arity.ZERO_OR_ONE

Quick example:
    >>> stream = TokenStream(["a", "b", "-x"])
    >>> list(Arity.ZERO_OR_MORE.draw(stream, "files"))
    ['a', 'b']
"""
from enum import IntEnum

from .faults import NotEnoughValuesError, AtLeastOneValueRequiredError
from .tokens import isoptional


class ArityKind(IntEnum):
    EXACT = 0
    AT_LEAST_ONE = 1
    ZERO_OR_MORE = 2
    ZERO_OR_ONE = 3
    NONE = 4


class Arity:
    """
    cardinality policy of one argument.

    construction
    - Arity.exact(n) for a fixed count (n >= 0; 0 is legal and consumes nothing).
    - Arity.AT_LEAST_ONE / ZERO_OR_MORE / ZERO_OR_ONE / NONE for the others.
    - Arity(kind, count=0) is the raw form; count must be 0 for non-EXACT kinds.
    """

    __slots__ = ("_kind", "_count")

    def __init__(self, kind, count=0, /):
        kind = ArityKind(kind)
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError("arity 'count' must be an integer")
        if count < 0:
            raise ValueError("arity 'count' must be a non-negative integer")
        if kind is not ArityKind.EXACT and count:
            raise ValueError("only an exact arity can carry a count")
        self._kind = kind
        self._count = count

    @classmethod
    def exact(cls, count, /):
        return cls(ArityKind.EXACT, count)

    @classmethod
    def coerce(cls, object, /):
        """
        normalize an Arity or an argparse-style shorthand into an Arity.
        """
        if isinstance(object, Arity):
            return object
        if isinstance(object, bool):
            raise TypeError("arity must be an Arity, an integer, or one of '+', '*', '?'")
        if isinstance(object, int):
            return cls.exact(object)
        if isinstance(object, str):
            try:
                return {
                    "+": cls.AT_LEAST_ONE,
                    "*": cls.ZERO_OR_MORE,
                    "?": cls.ZERO_OR_ONE,
                }[object]
            except KeyError:
                raise ValueError("arity shorthand must be one of '+', '*', '?'") from None
        raise TypeError("arity must be an Arity, an integer, or one of '+', '*', '?'")

    @property
    def kind(self):
        return self._kind

    @property
    def count(self):
        return self._count

    def draw(self, stream, name, /):
        """
        yield the tokens one invocation of argument 'name' consumes.

        faults
        - NotEnoughValuesError: EXACT ran out of tokens (message says how many
          were already given).
        - AtLeastOneValueRequiredError: AT_LEAST_ONE found the stream empty.
        - RuntimeError: the kind is not one of the five policies (a defect in the
          caller's registration, never a user-input error).
        """
        match self._kind:
            case ArityKind.EXACT:
                for index in range(self._count):
                    if not stream:
                        if self._count == 1:
                            message = "argument %s: expected one argument" % name
                        else:
                            message = "argument %s: expected %d arguments, %d already given" % (
                                name, self._count, index
                            )
                        raise NotEnoughValuesError(message, argument=name, given=index)
                    # no look-ahead here: explicit arity beats the optional heuristic
                    yield stream.get()
            case ArityKind.AT_LEAST_ONE:
                if not stream:
                    raise AtLeastOneValueRequiredError(
                        "argument %s: expected at least one argument" % name,
                        argument=name,
                    )
                yield stream.get()
                yield from self._variadic(stream)
            case ArityKind.ZERO_OR_MORE:
                yield from self._variadic(stream)
            case ArityKind.ZERO_OR_ONE:
                if stream and not isoptional(stream.peek()):
                    yield stream.get()
            case ArityKind.NONE:
                return
            case _:
                raise RuntimeError("internal error, invalid arity kind %r" % (self._kind,))

    @staticmethod
    def _variadic(stream):
        while stream and not isoptional(stream.peek()):
            yield stream.get()

    def __eq__(self, other):
        if not isinstance(other, Arity):
            return NotImplemented
        return (self._kind, self._count) == (other._kind, other._count)

    def __hash__(self):
        return hash((Arity, self._kind, self._count))

    def __repr__(self):
        if self._kind is ArityKind.EXACT:
            return "Arity.exact(%d)" % self._count
        return "Arity.%s" % self._kind.name


Arity.AT_LEAST_ONE = Arity(ArityKind.AT_LEAST_ONE)
Arity.ZERO_OR_MORE = Arity(ArityKind.ZERO_OR_MORE)
Arity.ZERO_OR_ONE = Arity(ArityKind.ZERO_OR_ONE)
Arity.NONE = Arity(ArityKind.NONE)


__all__ = (
    "ArityKind",
    "Arity",
)
