"""
One-pass floor/ceiling rounding of a continuous relaxation.

For every integer column (declaration order) the floor and ceiling of the
relaxed value are taken with the exact decimal engine, and the column is fixed
to one of them before re-solving. A value within solver noise of an integer
(the tighter of 1e-6 and half a unit at the requested precision) is fixed to
that integer alone.
Fixes are never revisited, so the search runs exactly once per integer column.

This is a heuristic, not branch-and-bound: a fix that is feasible for the
current column may leave a later column with no feasible rounding, in which
case the search stops with InfeasibleIntegerSolution.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from lpsolver.core.errors import InfeasibleIntegerSolution
from lpsolver.domain.schema import SolveResult
from lpsolver.numerics.decimal import bn_ceil, bn_floor, bn_round, normalize_numeral
from lpsolver.solvers.lp.capability import ContinuousSolver, SolveStatus
from lpsolver.solvers.lp.extract import extract_result

logger = logging.getLogger(__name__)

# Relative slack when comparing objective values across re-solves.
_OBJ_TOL = 1e-9
# Largest distance from an integer still treated as that integer.
_INT_TOL = 1e-6

_SOLVED = (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE)


class SearchState(str, Enum):
    RELAXED = "relaxed"
    ROUNDING = "rounding"
    RESOLVED = "resolved"
    INTEGER = "integer"
    INFEASIBLE = "infeasible"


class IntegerSearch:
    def __init__(self, solver: ContinuousSolver, precision: int):
        self._solver = solver
        self._precision = precision
        self._maximize = solver.is_maximization()
        self.state: Optional[SearchState] = None

    def run(self) -> SolveResult:
        s = self._solver
        status = s.primal()
        extract_result(s, status, self._precision)  # raises if the relaxation failed
        self._set_state(SearchState.RELAXED)

        names = s.column_names
        coefs = s.objective_coefficients()
        values: List[float] = s.solution()
        objective = s.objective_value()

        for j in s.integer_columns:
            self._set_state(SearchState.ROUNDING, names[j])
            low, high = self._candidates(values[j])
            original = s.column_bounds(j)

            chosen = self._fix(j, low, high, values[j], coefs[j], objective)
            if chosen is None:
                s.set_column_bounds(j, *original)
                result = extract_result(s, s.primal(), self._precision)
                self._set_state(SearchState.INFEASIBLE, names[j])
                raise InfeasibleIntegerSolution(names[j], result)

            values = s.solution()
            objective = s.objective_value()
            self._set_state(SearchState.RESOLVED, f"{names[j]}={chosen}")

        self.state = SearchState.INTEGER
        return extract_result(
            s, SolveStatus.OPTIMAL, self._precision, integer_solution=True
        )

    def _candidates(self, value: float) -> Tuple[str, str]:
        numeral = normalize_numeral(value)
        nearest = bn_round(numeral)
        tol = min(_INT_TOL, 0.5 * 10.0 ** -self._precision)
        if abs(value - float(nearest)) <= tol:
            return nearest, nearest
        return bn_floor(numeral), bn_ceil(numeral)

    def _fix(
        self,
        j: int,
        low: str,
        high: str,
        relaxed: float,
        coef: float,
        baseline: float,
    ) -> Optional[str]:
        floor_obj = self._try(j, low)
        if floor_obj is not None and self._within_contribution(
            floor_obj, baseline, coef * (relaxed - float(low))
        ):
            return low
        if high == low:
            return low if floor_obj is not None else None

        ceil_obj = self._try(j, high)
        if ceil_obj is not None and (
            floor_obj is None or self._better(ceil_obj, floor_obj)
        ):
            return high
        if floor_obj is not None:
            # Ties and worse ceilings go back to the floor.
            self._try(j, low)
            return low
        return None

    def _try(self, j: int, value: str) -> Optional[float]:
        v = float(value)
        self._solver.set_column_bounds(j, v, v)
        if self._solver.primal() not in _SOLVED:
            return None
        return self._solver.objective_value()

    def _worsening(self, candidate: float, baseline: float) -> float:
        return baseline - candidate if self._maximize else candidate - baseline

    def _within_contribution(
        self, candidate: float, baseline: float, contribution: float
    ) -> bool:
        slack = _OBJ_TOL * max(1.0, abs(baseline))
        return self._worsening(candidate, baseline) <= abs(contribution) + slack

    def _better(self, a: float, b: float) -> bool:
        slack = _OBJ_TOL * max(1.0, abs(b))
        return self._worsening(a, b) < -slack

    def _set_state(self, state: SearchState, detail: str = "") -> None:
        self.state = state
        logger.debug("integer search: %s %s", state.value, detail)
