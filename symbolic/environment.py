# symbolic/environment.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Variable assignments used for evaluation

"""Immutable mapping from variables to numeric values."""

from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .exceptions import UnboundVariableError
from .variable import Variable
from .variables import Variables

Assignment = Union[Mapping[Variable, float], Iterable[Tuple[Variable, float]]]


class Environment:
    """Assignment of float values to variables.

    Lookups of unbound variables raise ``UnboundVariableError``; there is no
    default value.
    """

    __slots__ = ("_map",)

    def __init__(self, assignment: Optional[Union[Assignment, "Environment"]] = None):
        if isinstance(assignment, Environment):
            self._map = dict(assignment._map)
            return
        items = assignment.items() if isinstance(assignment, Mapping) else (assignment or ())
        values: Dict[Variable, float] = {}
        for var, value in items:
            values[var] = _checked_value(var, value)
        self._map = values

    def insert(self, var: Variable, value: float) -> Environment:
        """Return a new environment that also binds ``var`` to ``value``."""
        extended = Environment()
        extended._map = dict(self._map)
        extended._map[var] = _checked_value(var, value)
        return extended

    def lookup(self, var: Variable) -> float:
        try:
            return self._map[var]
        except KeyError:
            raise UnboundVariableError(var) from None

    def domain(self) -> Variables:
        return Variables(self._map)

    def to_string(self) -> str:
        body = ", ".join(f"{v} -> {self._map[v]}" for v in sorted(self._map))
        return "{" + body + "}"

    def __getitem__(self, var: Variable) -> float:
        return self.lookup(var)

    def __contains__(self, var: object) -> bool:
        return var in self._map

    def __iter__(self) -> Iterator[Variable]:
        return iter(sorted(self._map))

    def __len__(self) -> int:
        return len(self._map)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Environment({self.to_string()})"


def _checked_value(var: Variable, value: float) -> float:
    if not isinstance(var, Variable):
        raise TypeError(f"Environment keys must be Variable, got {type(var).__name__}")
    value = float(value)
    if math.isnan(value):
        raise ValueError(f"NaN is not a valid value for variable '{var}'")
    return value
