# utils/formula_visualizer.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Graphviz rendering of formula DAGs

"""Draw formulas as Graphviz graphs.

Each distinct cell becomes exactly one node, so a sub-formula shared by
several parents shows up once with several incoming edges. That makes the
DAG structure built by the canonicalizing constructors visible.
"""

import os
from typing import Dict, Optional

from graphviz import Digraph

from symbolic.formula import Formula
from symbolic.formula_cell import (
    FormulaAnd,
    FormulaCell,
    FormulaForall,
    FormulaNot,
    FormulaOr,
    RelationalCell,
)
from utils.logger import get_logger

logger = get_logger()

VISUALIZATION_OUTPUT_FOLDER = "formula_visualizations"

_CONSTANT_COLOR = "lightgrey"
_RELATION_COLOR = "lightskyblue"
_CONNECTIVE_COLOR = "lightgoldenrodyellow"
_QUANTIFIER_COLOR = "lightcoral"


class _DigraphBuilder:
    """Visitor that adds one node per distinct cell to a Digraph."""

    def __init__(self, dot: Digraph):
        self.dot = dot
        self._node_ids: Dict[FormulaCell, str] = {}

    def add(self, f: Formula) -> str:
        cell = f.cell
        if cell in self._node_ids:
            return self._node_ids[cell]
        node_id = f"n{len(self._node_ids)}"
        self._node_ids[cell] = node_id
        cell.accept(_NodeVisitor(self, node_id))
        return node_id


class _NodeVisitor:
    def __init__(self, builder: _DigraphBuilder, node_id: str):
        self.builder = builder
        self.node_id = node_id

    def _node(self, label: str, color: str, shape: str = "ellipse"):
        self.builder.dot.node(self.node_id, label, shape=shape, style="filled", fillcolor=color)

    def _edge(self, child: Formula, label: Optional[str] = None):
        child_id = self.builder.add(child)
        self.builder.dot.edge(self.node_id, child_id, label=label)

    def visit_constant(self, cell):
        self._node(cell.display(), _CONSTANT_COLOR, shape="box")

    def visit_relational(self, cell: RelationalCell):
        self._node(cell.display(), _RELATION_COLOR, shape="box")

    def visit_and(self, cell: FormulaAnd):
        self._node("and", _CONNECTIVE_COLOR)
        self._edge(cell.f1, "f1")
        self._edge(cell.f2, "f2")

    def visit_or(self, cell: FormulaOr):
        self._node("or", _CONNECTIVE_COLOR)
        self._edge(cell.f1, "f1")
        self._edge(cell.f2, "f2")

    def visit_not(self, cell: FormulaNot):
        self._node("not", _CONNECTIVE_COLOR)
        self._edge(cell.f)

    def visit_forall(self, cell: FormulaForall):
        self._node(f"forall {cell.vars.to_string()}", _QUANTIFIER_COLOR, shape="diamond")
        self._edge(cell.f, "body")


def formula_to_digraph(f: Formula, fmt: str = "png") -> Digraph:
    """Build a Graphviz graph of ``f`` with shared sub-formulas drawn once.

    Args:
        f: Formula to draw
        fmt: Output format used when the graph is rendered

    Returns:
        Digraph whose root node is ``n0``
    """
    dot = Digraph(comment=f.to_string(), format=fmt)
    dot.attr(rankdir="TB", nodesep="0.4", ranksep="0.5")
    _DigraphBuilder(dot).add(f)
    return dot


def visualize_formula(f: Formula, base_filename: str, fmt: str = "png") -> str:
    """Render ``f`` into ``VISUALIZATION_OUTPUT_FOLDER``.

    Requires the Graphviz ``dot`` executable; its absence is reported by
    graphviz as ``ExecutableNotFound``.

    Args:
        f: Formula to draw
        base_filename: The base name for the output file
        fmt: The output format for the image (e.g., "png", "svg")

    Returns:
        Path of the rendered file
    """
    os.makedirs(VISUALIZATION_OUTPUT_FOLDER, exist_ok=True)
    output_path = os.path.join(VISUALIZATION_OUTPUT_FOLDER, base_filename)

    rendered = formula_to_digraph(f, fmt=fmt).render(output_path, cleanup=True)
    logger.visualization_written(rendered)
    return rendered
