"""
Registry of optional and positional arguments.

- optionals: name -> argument, looked up by exact token match.
- positionals: (name, argument) pairs in registration order, which is the order
  of consumption.
- a parallel HelpEntry per registration, kept in registration order per kind.

A name may be registered once across both collections. A second registration
of the same name is a programming error (ValueError), not a parse failure.
"""
import logging
from types import MappingProxyType

from .help import HelpEntry
from .tokens import isoptional
from .utils import Unset

logger = logging.getLogger(__name__)


class Registry:
    """
    routing store for argument specs and their help metadata.
    """

    def __init__(self):
        self._optionals = {}
        self._positionals = []
        self._entries = {True: [], False: []}

    def insert(self, name, argument, entry, /):
        """
        route 'argument' by the lexical rule and record its help entry.
        """
        if not isinstance(name, str):
            raise TypeError("argument name must be a string")
        if not hasattr(argument, "consume") or not callable(argument.consume):
            raise TypeError("argument must provide a consume() method")
        if not isinstance(entry, HelpEntry):
            raise TypeError("entry must be a HelpEntry")
        if entry.name != name:
            raise ValueError("help entry name %r does not match %r" % (entry.name, name))
        if name in self:
            raise ValueError("argument name %r is already registered" % name)

        if optional := isoptional(name):
            self._optionals[name] = argument
        else:
            self._positionals.append((name, argument))
        self._entries[optional].append(entry)
        logger.debug("registered %s argument %r", "optional" if optional else "positional", name)

    @property
    def optionals(self):
        return MappingProxyType(self._optionals)

    @property
    def positionals(self):
        return tuple(self._positionals)

    def entries(self, *, optional=Unset):
        """
        help entries in registration order; optionals first when 'optional' is Unset.
        """
        if optional is Unset:
            return (*self._entries[True], *self._entries[False])
        return tuple(self._entries[bool(optional)])

    def lookup(self, name, /):
        """
        return the optional registered under exactly 'name' (KeyError if none).
        """
        return self._optionals[name]

    def __contains__(self, name):
        return name in self._optionals or any(name == other for other, _ in self._positionals)

    def __len__(self):
        return len(self._optionals) + len(self._positionals)


__all__ = (
    "Registry",
)
