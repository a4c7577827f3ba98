# symbolic/variables.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Immutable ordered sets of symbolic variables

"""Ordered, immutable sets of ``Variable`` objects.

Iteration yields variables in ascending id (creation) order, which makes
display and hashing deterministic for a given set.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Tuple

from .variable import Variable


class Variables:
    """Immutable set of variables with set algebra and ordered iteration."""

    __slots__ = ("_members", "_ordered", "_hash")

    def __init__(self, variables: Iterable[Variable] = ()):
        members = frozenset(variables)
        for v in members:
            if not isinstance(v, Variable):
                raise TypeError(f"Variables can only hold Variable, got {type(v).__name__}")
        self._members: FrozenSet[Variable] = members
        self._ordered: Tuple[Variable, ...] = tuple(sorted(members))
        self._hash = hash(tuple(v.get_id() for v in self._ordered))

    def get_hash(self) -> int:
        return self._hash

    def size(self) -> int:
        return len(self._members)

    def empty(self) -> bool:
        return not self._members

    def include(self, v: Variable) -> bool:
        return v in self._members

    def union(self, other: Variables) -> Variables:
        return Variables(self._members | other._members)

    def difference(self, other: Variables) -> Variables:
        return Variables(self._members - other._members)

    def intersection(self, other: Variables) -> Variables:
        return Variables(self._members & other._members)

    def to_string(self) -> str:
        return "{" + ", ".join(v.to_string() for v in self._ordered) + "}"

    def __or__(self, other):
        if not isinstance(other, Variables):
            return NotImplemented
        return self.union(other)

    def __sub__(self, other):
        if not isinstance(other, Variables):
            return NotImplemented
        return self.difference(other)

    def __and__(self, other):
        if not isinstance(other, Variables):
            return NotImplemented
        return self.intersection(other)

    def __contains__(self, v: object) -> bool:
        return v in self._members

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variables):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Variables({self.to_string()})"
