"""
Token stream and the optional-vs-positional lexical rule.

A token is "optional" iff it is non-empty and starts with the marker "-".
The same rule routes names at registration time and raw tokens at parse time.
"""
from collections import deque
from collections.abc import Iterable

from .faults import ParserError

MARKER = "-"


def isoptional(token, /):
    """
    return True when 'token' names (or invokes) an optional argument.

    empty strings are positional; this is a documented edge case, not an error.
    """
    if not isinstance(token, str):
        raise TypeError("isoptional() argument must be a string")
    return token[:1] == MARKER


class TokenStream:
    """
    the remaining, not yet consumed command-line tokens of one parse run.

    the stream owns its tokens; get() hands each one out exactly once.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("TokenStream() argument must be an iterable of strings")
        self._tokens = deque()
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("TokenStream() tokens must be strings")
            self._tokens.append(token)

    @property
    def empty(self):
        return not self._tokens

    def peek(self):
        """
        return the next token without consuming it.
        """
        if not self._tokens:
            raise ParserError("no more arguments available")
        return self._tokens[0]

    def get(self):
        """
        consume and return the next token.
        """
        if not self._tokens:
            raise ParserError("no more arguments available")
        return self._tokens.popleft()

    def __len__(self):
        return len(self._tokens)

    def __bool__(self):
        return bool(self._tokens)

    def __iter__(self):
        # Read-only walk over what is left; use get() to consume.
        return iter(tuple(self._tokens))

    def __repr__(self):
        return "TokenStream(%r)" % list(self._tokens)


__all__ = (
    "MARKER",
    "isoptional",
    "TokenStream",
)
