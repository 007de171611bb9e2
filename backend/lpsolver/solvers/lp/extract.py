from __future__ import annotations

from typing import List

from lpsolver.core.errors import (
    InfeasibleProblem,
    InternalSolverError,
    UnboundedProblem,
)
from lpsolver.domain.schema import SolveResult
from lpsolver.numerics.decimal import format_fixed
from lpsolver.solvers.lp.capability import ContinuousSolver, SolveStatus

DEFAULT_PRECISION = 2


def extract_result(
    solver: ContinuousSolver,
    status: SolveStatus,
    precision: int = DEFAULT_PRECISION,
    integer_solution: bool = False,
) -> SolveResult:
    # FEASIBLE is accepted as-is: GLOP only reports it when stopped by a limit.
    if status == SolveStatus.INFEASIBLE:
        raise InfeasibleProblem("Model is infeasible.")
    if status == SolveStatus.UNBOUNDED:
        raise UnboundedProblem("Model is unbounded.")
    if status not in (SolveStatus.OPTIMAL, SolveStatus.FEASIBLE):
        raise InternalSolverError(_status_message(status))

    return SolveResult(
        objective_value=format_fixed(solver.objective_value(), precision),
        variables=solver.column_names,
        solution=_render(solver.solution(), precision),
        unbounded_ray=_render(solver.unbounded_ray(), precision),
        infeasibility_ray=_render(solver.infeasibility_ray(), precision),
        integer_solution=integer_solution,
    )


def _render(values: List[float], precision: int) -> List[str]:
    return [format_fixed(v, precision) for v in values]


def _status_message(status: SolveStatus) -> str:
    if status == SolveStatus.NOT_SOLVED:
        return "Model not solved (solver did not run or stopped early)."
    if status == SolveStatus.ERROR:
        return "Solver ended abnormally (invalid model or internal error)."
    return f"Unknown solver status: {status}"
