# tests/symbolic_tests/test_formula_evaluation.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Tests for free variables and evaluation of formulas

"""Free-variable algebra and evaluation under variable assignments."""

import operator

import pytest
from symbolic import (
    Environment,
    Expression,
    Formula,
    UnboundVariableError,
    Variables,
    and_,
    eq,
    forall,
    geq,
    gt,
    leq,
    lt,
    neq,
    not_,
    or_,
)

RELATIONS = [
    (eq, operator.eq),
    (neq, operator.ne),
    (lt, operator.lt),
    (leq, operator.le),
    (gt, operator.gt),
    (geq, operator.ge),
]

VALUE_PAIRS = [(0.0, 0.0), (1.0, 2.0), (2.0, 1.0), (-1.5, -1.5), (3.0, -3.0)]


class TestFreeVariables:
    def test_constants_have_none(self):
        assert Formula.true().get_free_variables() == Variables()
        assert Formula.false().get_free_variables() == Variables()

    def test_relational_union(self, x, y, z):
        assert eq(x + y, z).get_free_variables() == Variables([x, y, z])
        assert lt(x, 3).get_free_variables() == Variables([x])
        assert gt(1.0, 2.0).get_free_variables() == Variables()

    def test_connectives(self, x, y, z):
        f1, f2 = lt(x, y), geq(y, z)
        union = f1.get_free_variables() | f2.get_free_variables()
        assert and_(f1, f2).get_free_variables() == union
        assert or_(f1, f2).get_free_variables() == union
        assert not_(f1).get_free_variables() == f1.get_free_variables()

    def test_forall_removes_bound_variables(self, x, y, z):
        body = and_(lt(x, y), gt(x, z))
        f = forall(Variables([x]), body)
        assert f.get_free_variables() == body.get_free_variables() - Variables([x])
        assert f.get_free_variables() == Variables([y, z])

    def test_forall_binding_unused_variable(self, x, y, z):
        assert forall([z], lt(x, y)).get_free_variables() == Variables([x, y])

    def test_nested_forall(self, x, y, z):
        inner = forall([y], and_(lt(x, y), lt(y, z)))
        outer = forall([x], inner)
        assert inner.get_free_variables() == Variables([x, z])
        assert outer.get_free_variables() == Variables([z])


class TestEvaluation:
    def test_literal_scenario(self, x):
        f = eq(1.0, x)
        assert f.evaluate(Environment({x: 1.0})) is True
        assert f.evaluate(Environment({x: 2.0})) is False

    def test_constants(self):
        assert Formula.true().evaluate(Environment()) is True
        assert Formula.false().evaluate() is False

    @pytest.mark.parametrize("builder, relation", RELATIONS)
    @pytest.mark.parametrize("vx, vy", VALUE_PAIRS)
    def test_relations_match_numeric_comparison(self, builder, relation, vx, vy, x, y):
        e1 = Expression(x) * 2
        e2 = Expression(y) + x
        env = Environment({x: vx, y: vy})
        expected = relation(e1.evaluate(env), e2.evaluate(env))
        assert builder(e1, e2).evaluate(env) == expected

    @pytest.mark.parametrize("vx, vy", VALUE_PAIRS)
    def test_connectives_match_boolean_logic(self, vx, vy, x, y):
        f1, f2 = lt(x, y), geq(x, 0)
        env = Environment({x: vx, y: vy})
        b1, b2 = f1.evaluate(env), f2.evaluate(env)
        assert and_(f1, f2).evaluate(env) == (b1 and b2)
        assert or_(f1, f2).evaluate(env) == (b1 or b2)
        assert not_(f1).evaluate(env) == (not b1)
        assert not_(not_(f1)).evaluate(env) == b1

    def test_missing_binding_fails(self, x, y):
        with pytest.raises(UnboundVariableError):
            lt(x, y).evaluate(Environment({x: 1.0}))
        with pytest.raises(UnboundVariableError):
            not_(eq(x, 0)).evaluate()

    def test_bool_of_closed_formulas(self, x, y):
        assert bool(Formula.true())
        assert not Formula.false()
        assert bool(Expression(x) == Expression(x))
        with pytest.raises(UnboundVariableError):
            bool(lt(x, y))

    def test_extra_bindings_are_ignored(self, x, y, z):
        env = Environment({x: 1.0, y: 2.0, z: 3.0})
        assert lt(x, y).evaluate(env) is True


class TestForallEvaluation:
    @pytest.mark.parametrize(
        "assignment",
        [{}, {"x": 1.0}, {"x": 1.0, "y": 2.0}, {"x": -4.0, "y": 0.0, "z": 9.0}],
    )
    def test_always_not_implemented(self, assignment, variables):
        by_name = {v.get_name(): v for v in variables}
        x, y, _ = variables
        env = Environment({by_name[name]: value for name, value in assignment.items()})
        f = forall([x], lt(x, y))
        with pytest.raises(NotImplementedError):
            f.evaluate(env)

    def test_trivial_body_still_fails(self, x):
        with pytest.raises(NotImplementedError):
            forall([x], Formula.true()).evaluate()
        with pytest.raises(NotImplementedError):
            forall([], Formula.false()).evaluate(Environment())

    def test_failure_propagates_through_connectives(self, x, y):
        f = and_(lt(x, y), forall([x], gt(x, y)))
        with pytest.raises(NotImplementedError):
            f.evaluate(Environment({x: 0.0, y: 1.0}))

    def test_no_side_effects(self, x, y):
        f = forall([x], lt(x, y))
        before = (f.get_hash(), f.to_string(), f.get_free_variables())
        for _ in range(3):
            with pytest.raises(NotImplementedError):
                f.evaluate(Environment({y: 1.0}))
        assert (f.get_hash(), f.to_string(), f.get_free_variables()) == before
