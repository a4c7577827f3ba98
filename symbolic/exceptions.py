# symbolic/exceptions.py
# This file is part of symform - Symbolic Formulas over Arithmetic Terms
#
# Custom exceptions for formula construction and evaluation

"""Domain-specific exceptions for symbolic formula processing.

Evaluating a ``Forall`` formula raises the builtin ``NotImplementedError``;
everything else the package raises on purpose derives from ``SymbolicError``.
"""


class SymbolicError(RuntimeError):
    """Base class for errors raised by the symbolic package."""

    pass


class InvalidFormulaError(SymbolicError):
    """Raised when an operation is invoked on an empty ``Formula`` handle.

    An empty handle is a caller contract violation, not a data error, so
    there is nothing to recover from at this layer.
    """

    pass


class UnboundVariableError(SymbolicError, KeyError):
    """Raised when an environment has no value for a required variable.

    Attributes:
        variable: The variable that was looked up
    """

    def __init__(self, variable):
        super().__init__(f"Variable '{variable}' is not bound in the environment")
        self.variable = variable

    def __str__(self) -> str:
        # KeyError would otherwise render the message with quotes
        return self.args[0]
