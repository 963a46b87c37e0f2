"""
Exceptions raised by poredft. Every exception records which computation produced it, being either the
construction of an object, a solve, or the name of an analysis metric.
"""


class Error(Exception):
    """Base class for exceptions in poredft.

    Attributes:
        computation (str) : The computation that failed.
        message (str) : Explanation of the error.
    """
    def __init__(self, computation, message):
        self.computation = computation
        self.message = message
        super().__init__(f'{computation}: {message}')


class ConstructionError(Error, ValueError):
    """Invalid geometry or grid parameters."""
    pass


class PreconditionError(Error, ValueError):
    """Input that violates the preconditions of an operation, such as degenerate bulk phases or
    out-of-range arguments."""
    pass


class ShapeMismatchError(PreconditionError):
    """A density or potential array whose shape is inconsistent with the grid.

    Attributes:
        expected (tuple) : The required shape
        received (tuple) : The shape that was supplied
    """
    def __init__(self, computation, expected, received):
        self.expected = tuple(expected)
        self.received = tuple(received)
        super().__init__(computation, f'Expected array of shape {self.expected}, got {self.received}.')


class NumericalError(Error, ArithmeticError):
    """A non-finite result where a finite one is required.

    Attributes:
        value (float) : The offending value
    """
    def __init__(self, computation, message, value):
        self.value = value
        super().__init__(computation, f'{message} (got {value})')


class SolverError(Error, RuntimeError):
    """Non-convergence or overflow in the density profile solver.

    Attributes:
        iterations (int) : Total number of iterations performed
        residual (float) : Residual when the solver gave up
    """
    def __init__(self, computation, message, iterations=None, residual=None):
        self.iterations = iterations
        self.residual = residual
        super().__init__(computation, message)
