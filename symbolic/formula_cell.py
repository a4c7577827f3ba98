# symbolic/formula_cell.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Immutable node classes behind the Formula handle

"""Formula cells: the closed family of immutable formula nodes.

Every ``Formula`` handle points at exactly one cell. A cell records its kind
and a hash precomputed from the kind and the hashes of its children, taken
in a fixed order. Cells are frozen once built, so a sub-formula may be shared
by any number of parents and the resulting graph is a DAG.

Node Types:
    FormulaTrue, FormulaFalse: Boolean constants
    FormulaEq, FormulaNeq, FormulaLt, FormulaLeq, FormulaGt, FormulaGeq:
        Relations between two arithmetic expressions
    FormulaAnd, FormulaOr, FormulaNot: Boolean connectives
    FormulaForall: Universal quantification over a set of variables

Cells are never created directly by user code; the canonicalizing
constructors in ``symbolic.formula`` decide whether a new cell is needed.
All cells support the visitor pattern for traversal.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, Protocol, Set

from utils.logger import get_logger

from .expression import Expression
from .variable import Variable
from .variables import Variables

if TYPE_CHECKING:
    from .environment import Environment
    from .formula import Formula


class FormulaKind(Enum):
    """Closed set of formula node kinds."""

    TRUE = "True"
    FALSE = "False"
    EQ = "Eq"
    NEQ = "Neq"
    GT = "Gt"
    GEQ = "Geq"
    LT = "Lt"
    LEQ = "Leq"
    AND = "And"
    OR = "Or"
    NOT = "Not"
    FORALL = "Forall"


RELATIONAL_KINDS = frozenset(
    {
        FormulaKind.EQ,
        FormulaKind.NEQ,
        FormulaKind.GT,
        FormulaKind.GEQ,
        FormulaKind.LT,
        FormulaKind.LEQ,
    }
)


def hash_combine(*hashes) -> int:
    """Combine hash values in order; swapping arguments changes the result."""
    return hash(hashes)


class FormulaVisitor(Protocol):
    """Interface for visitors over formula cells."""

    def visit_constant(self, cell: FormulaTrue | FormulaFalse): ...

    def visit_relational(self, cell: RelationalCell): ...

    def visit_and(self, cell: FormulaAnd): ...

    def visit_or(self, cell: FormulaOr): ...

    def visit_not(self, cell: FormulaNot): ...

    def visit_forall(self, cell: FormulaForall): ...


@dataclass(frozen=True, slots=True, eq=False)
class FormulaCell:
    """Base class for all formula nodes.

    Subclasses set ``kind`` and implement the per-kind operations. Cells hash
    and compare by identity; structural comparison lives in ``equal_to`` and
    is only reached after the handle has compared identity, kind and hash.
    """

    kind: ClassVar[FormulaKind]

    hash_value: int = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(
            self, "hash_value", hash_combine(self.kind.value, *self.child_hashes())
        )

    def child_hashes(self) -> tuple:
        raise NotImplementedError

    def children(self) -> tuple:
        """Child cells in operand order; empty for leaves."""
        return ()

    def display_parts(self) -> tuple:
        """Display text of a non-leaf, with child cells standing in for their text."""
        raise NotImplementedError

    def get_free_variables(self) -> Variables:
        raise NotImplementedError

    def equal_to(self, other: FormulaCell) -> bool:
        raise NotImplementedError

    def evaluate(self, env: Environment) -> bool:
        raise NotImplementedError

    def display(self) -> str:
        raise NotImplementedError

    def accept(self, v: FormulaVisitor):
        raise NotImplementedError


@dataclass(frozen=True, slots=True, eq=False)
class FormulaTrue(FormulaCell):
    kind: ClassVar[FormulaKind] = FormulaKind.TRUE

    def child_hashes(self) -> tuple:
        return (hash("True"),)

    def get_free_variables(self) -> Variables:
        return Variables()

    def equal_to(self, other: FormulaCell) -> bool:
        return other.kind is self.kind

    def evaluate(self, env: Environment) -> bool:
        return True

    def display(self) -> str:
        return "True"

    def accept(self, v: FormulaVisitor):
        return v.visit_constant(self)


@dataclass(frozen=True, slots=True, eq=False)
class FormulaFalse(FormulaCell):
    kind: ClassVar[FormulaKind] = FormulaKind.FALSE

    def child_hashes(self) -> tuple:
        return (hash("False"),)

    def get_free_variables(self) -> Variables:
        return Variables()

    def equal_to(self, other: FormulaCell) -> bool:
        return other.kind is self.kind

    def evaluate(self, env: Environment) -> bool:
        return False

    def display(self) -> str:
        return "False"

    def accept(self, v: FormulaVisitor):
        return v.visit_constant(self)


@dataclass(frozen=True, slots=True, eq=False)
class RelationalCell(FormulaCell):
    """Relation between two expressions; ``e1`` and ``e2`` keep their order.

    Concrete relations only pick the kind, the display symbol and the numeric
    comparison applied during evaluation.
    """

    symbol: ClassVar[str]
    relation: ClassVar[Callable[[float, float], bool]]

    e1: Expression
    e2: Expression

    def child_hashes(self) -> tuple:
        return (self.e1.get_hash(), self.e2.get_hash())

    def get_free_variables(self) -> Variables:
        found: Set[Variable] = set()
        self.e1.collect_variables(found)
        self.e2.collect_variables(found)
        return Variables(found)

    def equal_to(self, other: FormulaCell) -> bool:
        if other.kind is not self.kind:
            return False
        return self.e1.equal_to(other.e1) and self.e2.equal_to(other.e2)

    def evaluate(self, env: Environment) -> bool:
        return type(self).relation(self.e1.evaluate(env), self.e2.evaluate(env))

    def display(self) -> str:
        return f"({self.e1.to_string()} {self.symbol} {self.e2.to_string()})"

    def accept(self, v: FormulaVisitor):
        return v.visit_relational(self)


class FormulaEq(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.EQ
    symbol = "="
    relation = operator.eq


class FormulaNeq(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.NEQ
    symbol = "!="
    relation = operator.ne


class FormulaGt(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.GT
    symbol = ">"
    relation = operator.gt


class FormulaGeq(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.GEQ
    symbol = ">="
    relation = operator.ge


class FormulaLt(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.LT
    symbol = "<"
    relation = operator.lt


class FormulaLeq(RelationalCell):
    __slots__ = ()
    kind = FormulaKind.LEQ
    symbol = "<="
    relation = operator.le


@dataclass(frozen=True, slots=True, eq=False)
class FormulaAnd(FormulaCell):
    """Conjunction. Operand order matters for hashing and display."""

    kind: ClassVar[FormulaKind] = FormulaKind.AND

    f1: Formula
    f2: Formula

    def child_hashes(self) -> tuple:
        return (self.f1.get_hash(), self.f2.get_hash())

    def children(self) -> tuple:
        return (self.f1.cell, self.f2.cell)

    def display_parts(self) -> tuple:
        return ("(", self.f1.cell, " and ", self.f2.cell, ")")

    def get_free_variables(self) -> Variables:
        return _free_variables(self)

    def equal_to(self, other: FormulaCell) -> bool:
        return _structurally_equal(self, other)

    def evaluate(self, env: Environment) -> bool:
        return _evaluate(self, env)

    def display(self) -> str:
        return _display(self)

    def accept(self, v: FormulaVisitor):
        return v.visit_and(self)


@dataclass(frozen=True, slots=True, eq=False)
class FormulaOr(FormulaCell):
    """Disjunction. Operand order matters for hashing and display."""

    kind: ClassVar[FormulaKind] = FormulaKind.OR

    f1: Formula
    f2: Formula

    def child_hashes(self) -> tuple:
        return (self.f1.get_hash(), self.f2.get_hash())

    def children(self) -> tuple:
        return (self.f1.cell, self.f2.cell)

    def display_parts(self) -> tuple:
        return ("(", self.f1.cell, " or ", self.f2.cell, ")")

    def get_free_variables(self) -> Variables:
        return _free_variables(self)

    def equal_to(self, other: FormulaCell) -> bool:
        return _structurally_equal(self, other)

    def evaluate(self, env: Environment) -> bool:
        return _evaluate(self, env)

    def display(self) -> str:
        return _display(self)

    def accept(self, v: FormulaVisitor):
        return v.visit_or(self)


@dataclass(frozen=True, slots=True, eq=False)
class FormulaNot(FormulaCell):
    kind: ClassVar[FormulaKind] = FormulaKind.NOT

    f: Formula

    def child_hashes(self) -> tuple:
        return (self.f.get_hash(),)

    def children(self) -> tuple:
        return (self.f.cell,)

    def display_parts(self) -> tuple:
        return ("!(", self.f.cell, ")")

    def get_free_variables(self) -> Variables:
        return _free_variables(self)

    def equal_to(self, other: FormulaCell) -> bool:
        return _structurally_equal(self, other)

    def evaluate(self, env: Environment) -> bool:
        return _evaluate(self, env)

    def display(self) -> str:
        return _display(self)

    def accept(self, v: FormulaVisitor):
        return v.visit_not(self)


@dataclass(frozen=True, slots=True, eq=False)
class FormulaForall(FormulaCell):
    """Universal quantification of ``f`` over the bound variables ``vars``.

    Bound variables are removed from the free variables of the body.
    Evaluation would need a search for a counterexample to ``f`` over the
    bound variables, which is not supported.
    """

    kind: ClassVar[FormulaKind] = FormulaKind.FORALL

    vars: Variables
    f: Formula

    def child_hashes(self) -> tuple:
        return (self.vars.get_hash(), self.f.get_hash())

    def children(self) -> tuple:
        return (self.f.cell,)

    def display_parts(self) -> tuple:
        return (f"forall({self.vars.to_string()}. ", self.f.cell, ")")

    def get_free_variables(self) -> Variables:
        return _free_variables(self)

    def equal_to(self, other: FormulaCell) -> bool:
        return _structurally_equal(self, other)

    def evaluate(self, env: Environment) -> bool:
        logger = get_logger()
        if logger.is_debug_enabled():
            logger.evaluation_failed(self.display(), "forall is not supported")
        raise NotImplementedError("Evaluation of forall formulas is not implemented")

    def display(self) -> str:
        return _display(self)

    def accept(self, v: FormulaVisitor):
        return v.visit_forall(self)


# ─────────────────────────────────────────────
#  TRAVERSALS
# ─────────────────────────────────────────────
#
# Connectives and quantifiers are walked with explicit stacks, so nesting
# depth is not bounded by the interpreter's recursion limit. Leaves
# (constants and relations) answer for themselves.


def _display(root: FormulaCell) -> str:
    out = []
    pending = [root]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            out.append(item)
        elif item.children():
            pending.extend(reversed(item.display_parts()))
        else:
            out.append(item.display())
    return "".join(out)


def _free_variables(root: FormulaCell) -> Variables:
    found: Set[Variable] = set()
    seen = set()
    pending = [(root, frozenset())]
    while pending:
        entry = pending.pop()
        if entry in seen:
            continue
        seen.add(entry)
        cell, bound = entry
        if cell.kind in RELATIONAL_KINDS:
            local: Set[Variable] = set()
            cell.e1.collect_variables(local)
            cell.e2.collect_variables(local)
            found.update(local - bound)
            continue
        if cell.kind is FormulaKind.FORALL:
            bound = bound | frozenset(cell.vars)
        for child in cell.children():
            pending.append((child, bound))
    return Variables(found)


def _evaluate(root: FormulaCell, env: Environment) -> bool:
    values = []
    # (cell, expanded): expanded cells already have their first operand's value on top
    pending = [(root, False)]
    while pending:
        cell, expanded = pending.pop()
        kind = cell.kind
        if kind is FormulaKind.AND or kind is FormulaKind.OR:
            if not expanded:
                pending.append((cell, True))
                pending.append((cell.f1.cell, False))
                continue
            first = values.pop()
            if first == (kind is FormulaKind.OR):
                values.append(first)
            else:
                # The second operand decides; its value becomes ours
                pending.append((cell.f2.cell, False))
        elif kind is FormulaKind.NOT:
            if not expanded:
                pending.append((cell, True))
                pending.append((cell.f.cell, False))
            else:
                values.append(not values.pop())
        else:
            values.append(cell.evaluate(env))
    return values.pop()


def _structurally_equal(a: FormulaCell, b: FormulaCell) -> bool:
    pending = [(a, b)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if a.kind is not b.kind or a.hash_value != b.hash_value:
            return False
        mine = a.children()
        if not mine:
            if not a.equal_to(b):
                return False
            continue
        if a.kind is FormulaKind.FORALL and a.vars != b.vars:
            return False
        pending.extend(zip(reversed(mine), reversed(b.children())))
    return True
