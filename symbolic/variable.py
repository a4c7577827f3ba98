# symbolic/variable.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Identity-bearing symbolic variables

"""Symbolic variables.

A ``Variable`` is identified by a process-unique id handed out at creation
time, not by its name: ``Variable("x")`` twice yields two distinct variables
that merely print the same. Ids increase monotonically, so ordering variables
by id orders them by creation.
"""

from __future__ import annotations

import itertools
import threading

_id_lock = threading.Lock()
_id_counter = itertools.count()


def _next_id() -> int:
    with _id_lock:
        return next(_id_counter)


class Variable:
    """Symbolic leaf with a stable unique id and a display name."""

    __slots__ = ("_id", "_name")

    def __init__(self, name: str):
        if not isinstance(name, str):
            raise TypeError(f"Variable name must be a string, got {type(name).__name__}")
        self._id = _next_id()
        self._name = name

    def get_id(self) -> int:
        return self._id

    def get_name(self) -> str:
        return self._name

    def get_hash(self) -> int:
        return hash(self._id)

    def to_string(self) -> str:
        return self._name

    # Arithmetic builds expressions
    def __neg__(self):
        from .expression import Expression

        return -Expression(self)

    def __add__(self, other):
        from .expression import Expression

        return Expression(self) + other

    def __radd__(self, other):
        from .expression import Expression

        return other + Expression(self)

    def __sub__(self, other):
        from .expression import Expression

        return Expression(self) - other

    def __rsub__(self, other):
        from .expression import Expression

        return other - Expression(self)

    def __mul__(self, other):
        from .expression import Expression

        return Expression(self) * other

    def __rmul__(self, other):
        from .expression import Expression

        return other * Expression(self)

    def __truediv__(self, other):
        from .expression import Expression

        return Expression(self) / other

    def __rtruediv__(self, other):
        from .expression import Expression

        return other / Expression(self)

    # Identity and ordering are by id
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variable):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Variable):
            return NotImplemented
        return self._id < other._id

    def __hash__(self) -> int:
        return self.get_hash()

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Variable({self._name!r}, id={self._id})"
