"""
Write targets and combiners.

Cell[_T] is the caller-owned storage an argument writes into. The parser only
holds it for as long as the caller keeps the registration; each parse run
mutates cell.value through the argument's combiner and nothing else.

Combiners fold one converted value into a cell:
- assign(cell, value):    overwrite (default)
- append(cell, value):    add to a list (created on first use if the cell holds None)
- extend(cell, values):   add every item of an iterable value
- increment(cell, value): numeric accumulation; a None value counts as one

Flag actions (for Callback arguments, which pull no value of their own):
- store(cell, value=True): set a constant when the flag is present
- tally(cell):             count how many times the flag is present
"""
from .utils import rename


class Cell[_T]:
    """
    exclusively-owned mutable cell.

        >>> op = Cell(2)
        >>> assign(op, 9); op.value
        9
    """

    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    def __repr__(self):
        return "Cell(%r)" % (self.value,)


def assign(cell, value, /):
    cell.value = value


def append(cell, value, /):
    if cell.value is None:
        cell.value = []
    cell.value.append(value)


def extend(cell, values, /):
    if cell.value is None:
        cell.value = []
    cell.value.extend(values)


def increment(cell, value=None, /):
    cell.value = (cell.value or 0) + (1 if value is None else value)


def store(cell, value=True, /):
    @rename("store")
    def action(running, stream, name):
        assign(cell, value)
    return action


def tally(cell, /):
    @rename("tally")
    def action(running, stream, name):
        increment(cell)
    return action


__all__ = (
    "Cell",
    "assign",
    "append",
    "extend",
    "increment",
    "store",
    "tally",
)
