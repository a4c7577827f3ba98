# tests/conftest.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for the symform test suite.

Puts the project root on ``sys.path`` so the top-level ``symbolic`` and
``utils`` packages import without installation, and provides the variables
and expressions most tests are written against.
"""

import sys
from pathlib import Path

import pytest

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify the packages under test are importable before any test runs."""
    try:
        import symbolic
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def variables():
    """Provide three fresh variables named x, y and z."""
    from symbolic import Variable

    return Variable("x"), Variable("y"), Variable("z")


@pytest.fixture
def x(variables):
    return variables[0]


@pytest.fixture
def y(variables):
    return variables[1]


@pytest.fixture
def z(variables):
    return variables[2]


@pytest.fixture
def ex(x):
    from symbolic import Expression

    return Expression(x)


@pytest.fixture
def ey(y):
    from symbolic import Expression

    return Expression(y)


@pytest.fixture
def ez(z):
    from symbolic import Expression

    return Expression(z)
