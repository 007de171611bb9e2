from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.linear_solver import pywraplp

from lpsolver.core.errors import HandleStateError
from lpsolver.lpformat.read import read_lp
from lpsolver.solvers.lp.build import LPBuild, build_dense, build_lp
from lpsolver.solvers.lp.capability import NumericType, SolveStatus

logger = logging.getLogger(__name__)

# OR-Tools returns an int status code; this alias makes typing intent explicit.
_LpStatus = int

_STATUS_MAP: Dict[_LpStatus, SolveStatus] = {
    pywraplp.Solver.OPTIMAL: SolveStatus.OPTIMAL,
    pywraplp.Solver.FEASIBLE: SolveStatus.FEASIBLE,
    pywraplp.Solver.INFEASIBLE: SolveStatus.INFEASIBLE,
    pywraplp.Solver.UNBOUNDED: SolveStatus.UNBOUNDED,
    pywraplp.Solver.NOT_SOLVED: SolveStatus.NOT_SOLVED,
}


class GlopHandle:
    """ContinuousSolver backed by OR-Tools GLOP.

    The handle owns one pywraplp model. Release it exactly once, ideally by
    using the handle as a context manager; any use after release raises
    HandleStateError.
    """

    def __init__(self) -> None:
        self._built: Optional[LPBuild] = None
        self._status = SolveStatus.NOT_SOLVED
        self._released = False
        logger.debug("GLOP handle %x acquired", id(self))

    def __enter__(self) -> "GlopHandle":
        self._check_alive()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._released:
            self.release()

    # ----------------------------
    # Loading
    # ----------------------------

    def load_lp(self, text: str) -> None:
        self._check_alive()
        self._replace(build_lp(read_lp(text)))

    def load_problem(
        self,
        objective: Sequence[NumericType],
        col_lb: Sequence[NumericType],
        col_ub: Sequence[NumericType],
        row_lb: Sequence[NumericType],
        row_ub: Sequence[NumericType],
        matrix: Sequence[NumericType],
        names: Optional[Sequence[str]] = None,
        maximize: bool = False,
    ) -> None:
        self._check_alive()
        self._replace(
            build_dense(objective, col_lb, col_ub, row_lb, row_ub, matrix, names, maximize)
        )

    def _replace(self, built: LPBuild) -> None:
        if self._built is not None:
            self._built.solver.Clear()
        self._built = built
        self._status = SolveStatus.NOT_SOLVED
        logger.debug(
            "Loaded problem with %d columns and %d rows",
            len(built.columns),
            len(built.rows),
        )

    # ----------------------------
    # Solving
    # ----------------------------

    def primal(self) -> SolveStatus:
        return self._run(self._loaded(), "primal")

    def dual(self) -> SolveStatus:
        built = self._loaded()
        built.solver.SetSolverSpecificParametersAsString("use_dual_simplex: true")
        try:
            return self._run(built, "dual")
        finally:
            built.solver.SetSolverSpecificParametersAsString("")

    def _run(self, built: LPBuild, method: str) -> SolveStatus:
        code = built.solver.Solve()
        self._status = _STATUS_MAP.get(code, SolveStatus.ERROR)
        logger.debug(
            "GLOP %s simplex finished with status %s (code %s)",
            method,
            self._status.value,
            code,
        )
        return self._status

    # ----------------------------
    # Problem accessors
    # ----------------------------

    @property
    def column_names(self) -> List[str]:
        return [v.name() for v in self._loaded().columns]

    @property
    def integer_columns(self) -> List[int]:
        return list(self._loaded().integer_columns)

    def objective_coefficients(self) -> List[float]:
        return list(self._loaded().objective)

    def is_maximization(self) -> bool:
        return self._loaded().maximize

    def column_bounds(self, index: int) -> Tuple[float, float]:
        var = self._loaded().columns[index]
        return var.Lb(), var.Ub()

    def set_column_bounds(self, index: int, lb: float, ub: float) -> None:
        self._loaded().columns[index].SetBounds(lb, ub)
        self._status = SolveStatus.NOT_SOLVED

    # ----------------------------
    # Solution accessors
    # ----------------------------

    def solution(self) -> List[float]:
        built = self._solved()
        return [v.solution_value() for v in built.columns]

    def unbounded_ray(self) -> List[float]:
        # GLOP does not expose ray certificates through pywraplp.
        self._solved()
        return []

    def infeasibility_ray(self) -> List[float]:
        self._solved()
        return []

    def objective_value(self) -> float:
        return self._solved().solver.Objective().Value()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def release(self) -> None:
        if self._released:
            raise HandleStateError("Solver handle released twice.")
        if self._built is not None:
            self._built.solver.Clear()
        self._built = None
        self._released = True
        logger.debug("GLOP handle %x released", id(self))

    @property
    def released(self) -> bool:
        return self._released

    def _check_alive(self) -> None:
        if self._released:
            raise HandleStateError("Solver handle used after release.")

    def _loaded(self) -> LPBuild:
        self._check_alive()
        if self._built is None:
            raise HandleStateError("No problem loaded into the solver handle.")
        return self._built

    def _solved(self) -> LPBuild:
        built = self._loaded()
        if self._status == SolveStatus.NOT_SOLVED:
            raise HandleStateError("Solver handle has not been solved since the last change.")
        return built
