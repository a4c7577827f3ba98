# symbolic/__init__.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Public API for symbolic formulas and their arithmetic operands

"""Immutable symbolic formulas over arithmetic terms.

Formulas combine relations between arithmetic expressions with boolean
connectives and universal quantification. They are simplified while being
built, compare structurally, hash consistently with that comparison, report
their free variables, evaluate under a variable assignment and render to a
deterministic fully parenthesized text.

Core Types:
    Variable, Variables: Symbolic leaves and ordered sets of them
    Environment: Assignment of float values to variables
    Expression: Arithmetic terms over variables and constants
    Formula: Handle on an immutable formula cell

Constructors:
    and_, or_, not_, forall
    eq, neq, lt, leq, gt, geq

Example:
    >>> from symbolic import Variable, Environment, eq
    >>> x = Variable("x")
    >>> f = eq(1.0, x)
    >>> f.evaluate(Environment({x: 1.0}))
    True
"""

from .environment import Environment
from .exceptions import InvalidFormulaError, SymbolicError, UnboundVariableError
from .expression import Expression, ExpressionKind
from .formula import Formula, and_, eq, forall, geq, gt, leq, lt, neq, not_, or_
from .formula_cell import FormulaKind, FormulaVisitor
from .variable import Variable
from .variables import Variables

__all__ = [
    "Environment",
    "Expression",
    "ExpressionKind",
    "Formula",
    "FormulaKind",
    "FormulaVisitor",
    "InvalidFormulaError",
    "SymbolicError",
    "UnboundVariableError",
    "Variable",
    "Variables",
    "and_",
    "eq",
    "forall",
    "geq",
    "gt",
    "leq",
    "lt",
    "neq",
    "not_",
    "or_",
]

__version__ = "1.0.0"
__description__ = "Immutable symbolic formulas with construction-time simplification"
