from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from lpsolver.domain.schema import SolveResult


class DomainError(ValueError):
    """Invalid model/input in a domain sense (bad numerals, missing bounds, etc.)."""


class InvalidDecimalFormat(DomainError):
    """A string handed to the decimal engine is not a decimal numeral."""


class MissingBoundsError(DomainError):
    """A bound spec has no usable lower/upper value for its (inferred) type."""


class SolverFailure(RuntimeError):
    """The continuous solver could not produce a usable solution."""


class LpFormatError(SolverFailure):
    """LP text rejected by the reader."""


class InfeasibleProblem(SolverFailure):
    """Raised for infeasible models."""


class UnboundedProblem(SolverFailure):
    """Raised for unbounded models."""


class InternalSolverError(SolverFailure):
    """Solver ended without a usable status (invalid model, abnormal stop, ...)."""


class InfeasibleIntegerSolution(SolverFailure):
    """Neither floor nor ceiling fixing of `variable` kept the model feasible.

    `result` holds the last feasible continuous solution.
    """

    def __init__(self, variable: str, result: Optional["SolveResult"] = None):
        super().__init__(
            f"No feasible integer rounding found for variable '{variable}'."
        )
        self.variable = variable
        self.result = result


class SolverNotReady(RuntimeError):
    """The solver backend is unavailable or has not been initialized."""


class HandleStateError(RuntimeError):
    """Solver handle used after release, or released twice."""
