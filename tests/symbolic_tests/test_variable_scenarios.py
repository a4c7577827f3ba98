# tests/symbolic_tests/test_variable_scenarios.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Tests for variables, variable sets and environments

"""Variable identity, Variables set algebra and Environment lookups."""

import math

import pytest
from symbolic import Environment, UnboundVariableError, Variable, Variables


class TestVariable:
    def test_same_name_distinct_ids(self):
        x = Variable("x")
        x_prime = Variable("x")
        assert x.get_id() != x_prime.get_id()
        assert x.get_name() == x_prime.get_name()
        assert x != x_prime

    def test_copy_preserves_identity(self):
        x = Variable("x")
        alias = x
        assert alias.get_id() == x.get_id()
        assert alias.get_hash() == x.get_hash()
        assert alias == x

    def test_ordering_follows_creation(self, x, y, z):
        assert not (x < x)
        assert x < y < z
        assert not (z < y)
        assert sorted([z, x, y]) == [x, y, z]

    def test_display(self, x, y):
        assert x.to_string() == "x"
        assert str(y) == "y"
        assert "id=" in repr(x)

    def test_name_must_be_string(self):
        with pytest.raises(TypeError):
            Variable(42)

    def test_usable_as_dict_key(self, x, y):
        table = {x: 1.0, y: 2.0}
        assert table[x] == 1.0
        assert Variable("x") not in table


class TestVariables:
    def test_empty(self):
        empty = Variables()
        assert empty.empty()
        assert len(empty) == 0
        assert empty.to_string() == "{}"

    def test_iteration_in_id_order(self, x, y, z):
        assert list(Variables([z, x, y])) == [x, y, z]
        assert str(Variables([y, x])) == "{x, y}"

    def test_equality_ignores_construction_order(self, x, y):
        a = Variables([x, y])
        b = Variables([y, x, y])
        assert a == b
        assert a.get_hash() == b.get_hash()
        assert hash(a) == hash(b)
        assert a.size() == 2

    def test_set_algebra(self, x, y, z):
        xy = Variables([x, y])
        yz = Variables([y, z])
        assert xy | yz == Variables([x, y, z])
        assert xy - yz == Variables([x])
        assert xy & yz == Variables([y])
        assert xy - xy == Variables()

    def test_membership(self, x, y, z):
        xy = Variables([x, y])
        assert xy.include(x)
        assert y in xy
        assert z not in xy

    def test_rejects_non_variables(self, x):
        with pytest.raises(TypeError):
            Variables([x, "y"])


class TestEnvironment:
    def test_lookup(self, x, y):
        env = Environment({x: 1.0, y: 2})
        assert env.lookup(x) == 1.0
        assert env[y] == 2.0
        assert isinstance(env[y], float)
        assert len(env) == 2

    def test_missing_variable_raises(self, x, y):
        env = Environment({x: 1.0})
        with pytest.raises(UnboundVariableError) as exc_info:
            env.lookup(y)
        assert exc_info.value.variable is y
        assert "y" in str(exc_info.value)

    def test_missing_variable_is_a_key_error(self, x):
        with pytest.raises(KeyError):
            Environment()[x]

    def test_insert_returns_new_environment(self, x, y):
        env = Environment({x: 1.0})
        extended = env.insert(y, 3.0)
        assert y in extended
        assert y not in env
        assert extended[x] == 1.0

    def test_construct_from_pairs(self, x, y):
        env = Environment([(x, 1.0), (y, -1.0)])
        assert env.domain() == Variables([x, y])
        assert list(env) == [x, y]

    def test_nan_rejected(self, x):
        with pytest.raises(ValueError):
            Environment({x: math.nan})
        with pytest.raises(ValueError):
            Environment().insert(x, float("nan"))

    def test_non_variable_key_rejected(self):
        with pytest.raises(TypeError):
            Environment({"x": 1.0})

    def test_display(self, x, y):
        env = Environment({y: 2.0, x: 1.0})
        assert env.to_string() == "{x -> 1.0, y -> 2.0}"

    def test_copy_from_environment(self, x):
        env = Environment({x: 1.0})
        copied = Environment(env)
        assert copied[x] == 1.0
        assert copied is not env
