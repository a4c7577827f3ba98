# symbolic/formula.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Formula handle and canonicalizing constructors

"""Symbolic formulas over arithmetic expressions.

A ``Formula`` is a cheap, immutable handle on a shared ``FormulaCell``.
Formulas are only built through the constructors in this module, which
simplify statically decidable cases before allocating a cell:

    and_(False, f) -> False      and_(True, f) -> f
    or_(True, f)   -> True       or_(False, f) -> f
    not_(True)     -> False      not_(False)   -> True
    eq/leq/geq(e, e) -> True     neq/lt/gt(e, e) -> False

Double negation is kept as written and ``forall`` is never simplified.

Example:
    >>> x, y = Variable("x"), Variable("y")
    >>> f = and_(eq(x, y), lt(y, 3))
    >>> str(f)
    '((x = y) and (y < 3))'
    >>> f.evaluate(Environment({x: 1.0, y: 1.0}))
    True
"""

from __future__ import annotations

from typing import Iterable, Optional, Type, Union

from utils.logger import get_logger

from .environment import Environment
from .exceptions import InvalidFormulaError
from .expression import Term, to_expression
from .formula_cell import (
    FormulaAnd,
    FormulaCell,
    FormulaEq,
    FormulaFalse,
    FormulaForall,
    FormulaGeq,
    FormulaGt,
    FormulaKind,
    FormulaLeq,
    FormulaLt,
    FormulaNeq,
    FormulaNot,
    FormulaOr,
    FormulaTrue,
    FormulaVisitor,
    RelationalCell,
)
from .variable import Variable
from .variables import Variables

logger = get_logger()


class Formula:
    """Immutable handle on a formula cell.

    Copying a handle shares the cell. ``Formula()`` is an empty handle; every
    operation on it raises ``InvalidFormulaError``.

    ``==`` is structural equality and ``hash()`` the precomputed cell hash,
    so formulas can be used in sets and as dict keys. ``&``, ``|`` and ``~``
    are the canonicalizing ``and_``, ``or_`` and ``not_``.
    """

    __slots__ = ("_cell",)

    def __init__(self, cell: Optional[FormulaCell] = None):
        self._cell = cell

    @property
    def cell(self) -> FormulaCell:
        """The underlying cell.

        Raises:
            InvalidFormulaError: The handle is empty
        """
        if self._cell is None:
            raise InvalidFormulaError("Operation on an empty Formula handle")
        return self._cell

    def is_valid(self) -> bool:
        return self._cell is not None

    @classmethod
    def true(cls) -> Formula:
        return _TRUE

    @classmethod
    def false(cls) -> Formula:
        return _FALSE

    def get_kind(self) -> FormulaKind:
        return self.cell.kind

    def get_hash(self) -> int:
        return self.cell.hash_value

    def get_free_variables(self) -> Variables:
        """Return the variables occurring unbound in this formula."""
        return self.cell.get_free_variables()

    def equal_to(self, other: Formula) -> bool:
        """Structural equality.

        Checks run cheapest first: cell identity, then kind, then hash, and
        only then a walk over pairs of children, each pair going through the
        same checks. Equal hashes alone prove nothing since collisions are
        possible.

        Raises:
            TypeError: other is not a Formula
        """
        mine, theirs = self.cell, _check_formula(other).cell
        if mine is theirs:
            return True
        if mine.kind is not theirs.kind:
            return False
        if mine.hash_value != theirs.hash_value:
            return False
        return mine.equal_to(theirs)

    def evaluate(self, env: Optional[Environment] = None) -> bool:
        """Evaluate the formula under ``env``.

        Args:
            env: Values for the free variables; defaults to an empty environment

        Returns:
            Truth value of the formula

        Raises:
            UnboundVariableError: A free variable has no value in env
            NotImplementedError: A forall formula is reached
        """
        if env is None:
            env = Environment()
        return self.cell.evaluate(env)

    def accept(self, v: FormulaVisitor):
        return self.cell.accept(v)

    def to_string(self) -> str:
        return self.cell.display()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self.equal_to(other)

    def __hash__(self) -> int:
        return self.get_hash()

    def __bool__(self) -> bool:
        # Closed formulas only; free variables raise UnboundVariableError
        return self.evaluate()

    def __and__(self, other: Formula) -> Formula:
        if not isinstance(other, Formula):
            return NotImplemented
        return and_(self, other)

    def __or__(self, other: Formula) -> Formula:
        if not isinstance(other, Formula):
            return NotImplemented
        return or_(self, other)

    def __invert__(self) -> Formula:
        return not_(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        if self._cell is None:
            return "<Formula (empty)>"
        return f"<Formula '{self.to_string()}'>"


_TRUE = Formula(FormulaTrue())
_FALSE = Formula(FormulaFalse())


def _new(cell: FormulaCell) -> Formula:
    logger.node_allocated(cell.kind.value, cell.hash_value)
    return Formula(cell)


def _check_formula(f: object) -> Formula:
    if not isinstance(f, Formula):
        raise TypeError(f"Expected a Formula, got {type(f).__name__}")
    return f


# ─────────────────────────────────────────────
#  BOOLEAN CONNECTIVES
# ─────────────────────────────────────────────


def and_(f1: Formula, f2: Formula) -> Formula:
    """Conjunction of ``f1`` and ``f2`` with constant folding."""
    k1 = _check_formula(f1).get_kind()
    k2 = _check_formula(f2).get_kind()
    if k1 is FormulaKind.FALSE or k2 is FormulaKind.FALSE:
        logger.simplification_applied("and with False", "False")
        return _FALSE
    if k1 is FormulaKind.TRUE:
        logger.simplification_applied("and(True, f)", "f")
        return f2
    if k2 is FormulaKind.TRUE:
        logger.simplification_applied("and(f, True)", "f")
        return f1
    return _new(FormulaAnd(f1, f2))


def or_(f1: Formula, f2: Formula) -> Formula:
    """Disjunction of ``f1`` and ``f2`` with constant folding."""
    k1 = _check_formula(f1).get_kind()
    k2 = _check_formula(f2).get_kind()
    if k1 is FormulaKind.TRUE or k2 is FormulaKind.TRUE:
        logger.simplification_applied("or with True", "True")
        return _TRUE
    if k1 is FormulaKind.FALSE:
        logger.simplification_applied("or(False, f)", "f")
        return f2
    if k2 is FormulaKind.FALSE:
        logger.simplification_applied("or(f, False)", "f")
        return f1
    return _new(FormulaOr(f1, f2))


def not_(f: Formula) -> Formula:
    """Negation of ``f``; only the constants are folded."""
    kind = _check_formula(f).get_kind()
    if kind is FormulaKind.TRUE:
        logger.simplification_applied("not(True)", "False")
        return _FALSE
    if kind is FormulaKind.FALSE:
        logger.simplification_applied("not(False)", "True")
        return _TRUE
    return _new(FormulaNot(f))


def forall(variables: Union[Variables, Iterable[Variable]], f: Formula) -> Formula:
    """Universal quantification of ``f`` over ``variables``; never simplified."""
    if not isinstance(variables, Variables):
        variables = Variables(variables)
    return _new(FormulaForall(variables, _check_formula(f)))


# ─────────────────────────────────────────────
#  RELATIONS
# ─────────────────────────────────────────────


def _relational(
    cell_type: Type[RelationalCell], e1: Term, e2: Term, when_equal: Formula
) -> Formula:
    lhs, rhs = to_expression(e1), to_expression(e2)
    if lhs.equal_to(rhs):
        if logger.is_debug_enabled():
            logger.simplification_applied(f"{cell_type.kind.value}(e, e)", when_equal.to_string())
        return when_equal
    return _new(cell_type(lhs, rhs))


def eq(e1: Term, e2: Term) -> Formula:
    """``e1 = e2``; True when both sides are structurally equal."""
    return _relational(FormulaEq, e1, e2, _TRUE)


def neq(e1: Term, e2: Term) -> Formula:
    """``e1 != e2``; False when both sides are structurally equal."""
    return _relational(FormulaNeq, e1, e2, _FALSE)


def lt(e1: Term, e2: Term) -> Formula:
    """``e1 < e2``; False when both sides are structurally equal."""
    return _relational(FormulaLt, e1, e2, _FALSE)


def leq(e1: Term, e2: Term) -> Formula:
    """``e1 <= e2``; True when both sides are structurally equal."""
    return _relational(FormulaLeq, e1, e2, _TRUE)


def gt(e1: Term, e2: Term) -> Formula:
    """``e1 > e2``; False when both sides are structurally equal."""
    return _relational(FormulaGt, e1, e2, _FALSE)


def geq(e1: Term, e2: Term) -> Formula:
    """``e1 >= e2``; True when both sides are structurally equal."""
    return _relational(FormulaGeq, e1, e2, _TRUE)
