"""
Public entry points: serialize models, solve them, round big numerals.

``LPSolver`` composes the LP writer, an injected continuous-solver handle
factory (GLOP by default), the solution extractor and the integer rounding
search. It has two solve paths:

- ``solve_strict`` raises every failure (infeasible, unbounded, internal
  error, bad LP text, no integer rounding);
- ``solve`` is the exploratory path and returns ``None`` instead of raising
  solver failures or schema mismatches. DomainError (bad numerals, missing
  bounds, bad precision) is still raised.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from ortools import __version__ as ORTOOLS_VERSION
from pydantic import ValidationError

from lpsolver.core.errors import (
    DomainError,
    InfeasibleIntegerSolution,
    SolverFailure,
    SolverNotReady,
)
from lpsolver.domain.normalize import normalize_model
from lpsolver.domain.schema import (  # noqa: F401  (re-exported constants)
    GLP_DB,
    GLP_FR,
    GLP_FX,
    GLP_LO,
    GLP_MAX,
    GLP_MIN,
    GLP_UP,
    LPModel,
    SolveResult,
)
from lpsolver.domain.validate import validate_model, validate_precision
from lpsolver.lpformat.write import create_lp as _write_lp
from lpsolver.numerics import decimal
from lpsolver.solvers.lp.capability import ContinuousSolver
from lpsolver.solvers.lp.extract import DEFAULT_PRECISION
from lpsolver.solvers.lp.handle import GlopHandle
from lpsolver.solvers.lp.solver import solve_lp
from lpsolver.solvers.mip.rounding import IntegerSearch

logger = logging.getLogger(__name__)

Problem = Union[LPModel, Dict[str, Any], str]


class RuntimeState(str, Enum):
    NOT_READY = "not_ready"
    READY = "ready"


class LPSolver:
    def __init__(
        self,
        handle_factory: Callable[[], ContinuousSolver] = GlopHandle,
        default_precision: int = DEFAULT_PRECISION,
    ):
        validate_precision(default_precision)
        self._handle_factory = handle_factory
        self._default_precision = default_precision
        self.state = RuntimeState.NOT_READY

    def initialize(self) -> "LPSolver":
        """Open one handle against the backend; solver operations are refused until this succeeds."""
        with self._handle_factory() as handle:
            handle.load_problem([], [], [], [], [], [])
        self.state = RuntimeState.READY
        logger.info("LP solver ready (OR-Tools %s)", ORTOOLS_VERSION)
        return self

    # ----------------------------
    # Pure operations
    # ----------------------------

    @staticmethod
    def version() -> str:
        return ORTOOLS_VERSION

    @staticmethod
    def create_lp(model: Union[LPModel, Dict[str, Any]]) -> str:
        return _write_lp(_prepare(model))

    bn_round = staticmethod(decimal.bn_round)
    bn_ceil = staticmethod(decimal.bn_ceil)
    bn_floor = staticmethod(decimal.bn_floor)

    # ----------------------------
    # Solving
    # ----------------------------

    def open(self) -> ContinuousSolver:
        if self.state != RuntimeState.READY:
            raise SolverNotReady("LPSolver.initialize() has not completed.")
        return self._handle_factory()

    def solve_strict(
        self, problem: Problem, precision: Optional[int] = None
    ) -> SolveResult:
        validate_precision(precision)
        text = problem if isinstance(problem, str) else self.create_lp(problem)

        with self.open() as handle:
            handle.load_lp(text)
            if handle.integer_columns and precision is not None:
                return IntegerSearch(handle, precision).run()
            return solve_lp(
                handle, precision if precision is not None else self._default_precision
            )

    def solve(
        self, problem: Problem, precision: Optional[int] = None
    ) -> Optional[SolveResult]:
        try:
            return self.solve_strict(problem, precision)
        except InfeasibleIntegerSolution as e:
            logger.info("%s Returning the continuous solution.", e)
            return e.result
        except SolverFailure as e:
            logger.warning("Solve failed: %s", e)
            return None
        except ValidationError as e:
            domain = _domain_error(e)
            if domain is not None:
                raise domain from e
            logger.warning("Solve failed: model does not match the schema: %s", e)
            return None


def _prepare(model: Union[LPModel, Dict[str, Any]]) -> LPModel:
    if not isinstance(model, LPModel):
        model = LPModel.model_validate(model)
    model = normalize_model(model)
    validate_model(model)
    return model


def _domain_error(e: ValidationError) -> Optional[DomainError]:
    """The DomainError (bad numeral, ...) behind a validation error, if any."""
    for err in e.errors():
        cause = err.get("ctx", {}).get("error")
        if isinstance(cause, DomainError):
            return cause
    return None
