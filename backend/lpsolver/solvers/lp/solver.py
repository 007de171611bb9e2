from __future__ import annotations

from lpsolver.domain.schema import SolveResult
from lpsolver.solvers.lp.capability import ContinuousSolver
from lpsolver.solvers.lp.extract import DEFAULT_PRECISION, extract_result


def solve_lp(solver: ContinuousSolver, precision: int = DEFAULT_PRECISION) -> SolveResult:
    status = solver.primal()
    return extract_result(solver, status, precision)
