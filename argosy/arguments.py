"""
Argosy argument specifications.

Overview
- Typed: binds a write target, an Arity, a Converter and a Combiner. Each token
  the arity draws is converted, then folded into the target, before the next
  token is pulled.
- Callback: binds an arbitrary action and an Arity. The action receives the
  running context, the remaining token stream and the matched name; the arity
  only shapes usage/help (the action pulls whatever it needs). The built-in
  help flag is a Callback.

Both variants expose the same capability:

    consume(running, stream, name) -> None

and raise ParserError subclasses on bad input. Anything else escaping a
Callback action is a defect in that action and propagates unchanged.

Introspection
- ArgumentType metaclass gives stable __repr__/__rich_repr__ and read-only
  properties for the names listed in __introspectable__.

Quick example:
    >>> op = Cell(2)
    >>> argument = Typed(op, count=Arity.exact(1), type=int)
    >>> argument.consume(None, TokenStream(["9"]), "-op"); op.value
    9
"""
import builtins
import functools
import operator
import re

from .arity import Arity
from .converters import standard
from .faults import ParserError, ConversionError
from .targets import assign
from .utils import *


class ArgumentType(type):
    """
    Metaclass providing readable reprs and read-only fields for specs.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - every name in __introspectable__ becomes a property mirroring "_<name>".
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_count(cls, metadata, /):
    try:
        metadata["count"] = Arity.coerce(metadata["count"])
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'count' must be an Arity, an integer, or one of '+', '*', '?'") from None
    except ValueError as exception:
        raise ValueError(f"{cls.__typename__} 'count' is invalid: {exception}") from None


def _sanitize_typed_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the value-bearing fields of a Typed spec.

    - count: coerced through Arity.coerce (default exact(1)).
    - type/converter: mutually exclusive. When neither is given, the converter is
      standard(<type of the target's current value>), falling back to str for
      None and container values.
    - combiner: must be callable (default assign).
    """
    _sanitize_count(cls, metadata)

    type = metadata.pop("type")
    if metadata["converter"] is Unset:
        if type is Unset:
            current = getattr(metadata["target"], "value", None)
            if current is None or isinstance(current, list | tuple | set | dict):
                type = str
            else:
                type = builtins.type(current)
        if not callable(type):
            raise TypeError(f"{cls.__typename__} 'type' must be callable")
        metadata["converter"] = standard(type)
    elif type is not Unset:
        raise TypeError(f"{cls.__typename__} cannot have both 'type' and 'converter'")
    elif not callable(metadata["converter"]):
        raise TypeError(f"{cls.__typename__} 'converter' must be callable")

    if not callable(metadata["combiner"]):
        raise TypeError(f"{cls.__typename__} 'combiner' must be callable")


class Typed[_T](metaclass=ArgumentType):
    """
    Value-bearing argument specification.

    Parameters
    - target: the caller's write target (usually a Cell); never copied.
    - count: Arity or shorthand, default exact(1).
    - type: value type used to build the default converter.
    - converter: Callable[[str], _V], overrides 'type'.
    - combiner: Callable[[target, _V], None], default assign.
    """

    __introspectable__ = (
        "target",
        "count",
        "converter",
        "combiner",
    )

    def __init__(self, target, /, count=Unset, *, type=Unset, converter=Unset, combiner=assign):
        if target is Unset:
            raise TypeError(f"{builtins.type(self).__typename__} must specify a target")
        metadata = {
            "target": target,
            "count": coalesce(count, Arity.exact(1)),
            "type": type,
            "converter": converter,
            "combiner": combiner,
        }
        _sanitize_typed_metadata(builtins.type(self), metadata)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def consume(self, running, stream, name, /):
        for token in self._count.draw(stream, name):
            try:
                value = self._converter(token)
            except ConversionError as fault:
                raise ConversionError(
                    "argument %s: %s" % (name, fault.message),
                    **(dict(fault.options) | {"argument": name}),
                ) from fault
            except ParserError:
                raise
            except Exception as exception:
                # foreign converter failure: keep it calm and name the token
                raise ConversionError(
                    "argument %s: failed to parse %r" % (name, token),
                    token=token,
                    argument=name,
                ) from exception
            # already-applied combines stay applied if a later token fails
            self._combiner(self._target, value)


class Callback(metaclass=ArgumentType):
    """
    Side-effecting argument specification.

    Parameters
    - action: Callable[[Running, TokenStream, str], None]
    - count: Arity or shorthand shown in usage, default Arity.NONE.
    """

    __introspectable__ = (
        "action",
        "count",
    )

    def __init__(self, action, /, count=Unset):
        if not callable(action):
            raise TypeError(f"{type(self).__typename__} 'action' must be callable")
        metadata = {
            "action": action,
            "count": coalesce(count, Arity.NONE),
        }
        _sanitize_count(type(self), metadata)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def consume(self, running, stream, name, /):
        self._action(running, stream, name)


__all__ = (
    "Typed",
    "Callback",
)

# Keep the metaclass out of star-imports and docs.
del ArgumentType
