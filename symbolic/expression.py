# symbolic/expression.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Immutable arithmetic terms over symbolic variables

"""Arithmetic expressions used as the operands of relational formulas.

An ``Expression`` is an immutable term built from float constants, variables
and the binary operators ``+ - * /`` plus unary negation. Terms are not
simplified; ``x + 0`` stays ``(x + 0)``. Like formulas, every term carries a
precomputed hash and compares structurally through ``equal_to``.

The rich comparison operators do not return booleans. They build formulas:

    >>> x = Variable("x")
    >>> str(Expression(x) < 3)
    '(x < 3)'
"""

from __future__ import annotations

import numbers
import operator
from enum import Enum
from typing import Set, Tuple, Union

from .variable import Variable
from .variables import Variables


class ExpressionKind(Enum):
    """Closed set of arithmetic term kinds."""

    CONSTANT = "constant"
    VAR = "var"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    NEG = "neg"


_BINARY_OPS = {
    ExpressionKind.ADD: operator.add,
    ExpressionKind.SUB: operator.sub,
    ExpressionKind.MUL: operator.mul,
    ExpressionKind.DIV: operator.truediv,
}

Term = Union["Expression", Variable, float, int]


class Expression:
    """Immutable arithmetic term.

    ``Expression(2.5)`` is a constant, ``Expression(x)`` wraps a variable and
    ``Expression()`` is the constant zero. Composite terms come from the
    arithmetic operators.

    Because ``==`` builds a formula, anything that asks Python for a plain
    truth value of ``==`` evaluates that formula under an empty environment.
    ``Expression(x) in [Expression(y)]`` therefore raises
    ``UnboundVariableError``, and so does a hash collision between two
    variable terms used as set members or dict keys. Compare terms with
    ``equal_to`` when a boolean is wanted.
    """

    __slots__ = ("_kind", "_value", "_operands", "_hash")

    def __init__(self, value: Union[float, int, Variable, Expression] = 0.0):
        if isinstance(value, Expression):
            self._kind = value._kind
            self._value = value._value
            self._operands = value._operands
            self._hash = value._hash
        elif isinstance(value, Variable):
            self._init(ExpressionKind.VAR, value, ())
        elif isinstance(value, numbers.Real) and not isinstance(value, bool):
            self._init(ExpressionKind.CONSTANT, float(value), ())
        else:
            raise TypeError(f"Cannot build an Expression from {type(value).__name__}")

    def _init(self, kind: ExpressionKind, value, operands: Tuple[Expression, ...]) -> None:
        self._kind = kind
        self._value = value
        self._operands = operands
        if operands:
            self._hash = hash((kind.value,) + tuple(e._hash for e in operands))
        else:
            self._hash = hash((kind.value, value))

    @classmethod
    def _compose(cls, kind: ExpressionKind, *operands: Expression) -> Expression:
        e = cls.__new__(cls)
        e._init(kind, None, operands)
        return e

    def get_kind(self) -> ExpressionKind:
        return self._kind

    def get_hash(self) -> int:
        return self._hash

    def get_value(self) -> float:
        """Return the value of a constant term."""
        if self._kind is not ExpressionKind.CONSTANT:
            raise TypeError(f"{self} is not a constant")
        return self._value

    def get_variable(self) -> Variable:
        """Return the variable of a variable term."""
        if self._kind is not ExpressionKind.VAR:
            raise TypeError(f"{self} is not a variable")
        return self._value

    def get_operands(self) -> Tuple[Expression, ...]:
        return self._operands

    def equal_to(self, other: Expression) -> bool:
        """Structural equality; identity, kind and hash are checked first."""
        if self is other:
            return True
        if self._kind is not other._kind or self._hash != other._hash:
            return False
        if not self._operands:
            return self._value == other._value
        return all(a.equal_to(b) for a, b in zip(self._operands, other._operands))

    def get_variables(self) -> Variables:
        found: Set[Variable] = set()
        self.collect_variables(found)
        return Variables(found)

    def collect_variables(self, into: Set[Variable]) -> None:
        """Add every variable of the term to ``into``."""
        pending = [self]
        while pending:
            e = pending.pop()
            if e._kind is ExpressionKind.VAR:
                into.add(e._value)
            else:
                pending.extend(e._operands)

    def evaluate(self, env) -> float:
        """Evaluate the term under ``env``.

        Raises:
            UnboundVariableError: A variable of the term is missing from env
            ZeroDivisionError: A divisor evaluates to zero
        """
        kind = self._kind
        if kind is ExpressionKind.CONSTANT:
            return self._value
        if kind is ExpressionKind.VAR:
            return env.lookup(self._value)
        if kind is ExpressionKind.NEG:
            return -self._operands[0].evaluate(env)
        e1, e2 = self._operands
        return _BINARY_OPS[kind](e1.evaluate(env), e2.evaluate(env))

    def to_string(self) -> str:
        kind = self._kind
        if kind is ExpressionKind.CONSTANT:
            return format(self._value, ".15g")
        if kind is ExpressionKind.VAR:
            return self._value.to_string()
        if kind is ExpressionKind.NEG:
            return f"(-{self._operands[0].to_string()})"
        e1, e2 = self._operands
        return f"({e1.to_string()} {kind.value} {e2.to_string()})"

    # Arithmetic
    def __neg__(self) -> Expression:
        return Expression._compose(ExpressionKind.NEG, self)

    def __add__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.ADD, self, to_expression(other))

    def __radd__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.ADD, to_expression(other), self)

    def __sub__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.SUB, self, to_expression(other))

    def __rsub__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.SUB, to_expression(other), self)

    def __mul__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.MUL, self, to_expression(other))

    def __rmul__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.MUL, to_expression(other), self)

    def __truediv__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.DIV, self, to_expression(other))

    def __rtruediv__(self, other: Term) -> Expression:
        return Expression._compose(ExpressionKind.DIV, to_expression(other), self)

    # Relations build formulas
    def __eq__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import eq

        return eq(self, other)

    def __ne__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import neq

        return neq(self, other)

    def __lt__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import lt

        return lt(self, other)

    def __le__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import leq

        return leq(self, other)

    def __gt__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import gt

        return gt(self, other)

    def __ge__(self, other: Term):
        if not is_term(other):
            return NotImplemented
        from .formula import geq

        return geq(self, other)

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<Expression '{self.to_string()}'>"


def is_term(value: object) -> bool:
    """Return True if ``value`` can be coerced into an ``Expression``."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (Expression, Variable, numbers.Real))


def to_expression(value: Term) -> Expression:
    """Coerce a number, variable or expression into an ``Expression``."""
    if isinstance(value, Expression):
        return value
    return Expression(value)
