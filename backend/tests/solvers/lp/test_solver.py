from __future__ import annotations

import pytest

from lpsolver.core.errors import InfeasibleProblem, SolverFailure, UnboundedProblem
from lpsolver.lpformat.write import create_lp
from lpsolver.solvers.lp.capability import SolveStatus
from lpsolver.solvers.lp.handle import GlopHandle
from lpsolver.solvers.lp.solver import solve_lp

from tests.fake_solver import FakeSolver
from tests.lp_model_factory import LPModelFactory


class TestSolveLp:
    def test_solve_small_lp_with_glop(self):
        with GlopHandle() as h:
            h.load_lp(LPModelFactory.small_lp())
            res = solve_lp(h)

        assert res.variables == ["x", "y"]
        assert res.solution == ["0.60", "0.20"]
        assert res.objective_value == "0.46"
        assert res.integer_solution is False

    def test_tinlake_relaxation(self):
        with GlopHandle() as h:
            h.load_lp(create_lp(LPModelFactory.tinlake()))
            res = solve_lp(h, precision=0)

        assert res.objective_value == "311640000"
        assert res.solution == ["124", "400", "100", "300"]

    def test_infeasible_model_raises_solver_failure(self):
        with GlopHandle() as h:
            h.load_lp(create_lp(LPModelFactory.infeasible()))
            with pytest.raises(SolverFailure):
                solve_lp(h)

    def test_solves_exactly_once(self):
        s = FakeSolver(["x"], lambda bounds: (SolveStatus.OPTIMAL, [1.5], 1.5))
        res = solve_lp(s, precision=1)

        assert s.solve_calls == 1
        assert res.solution == ["1.5"]

    @pytest.mark.parametrize(
        "status, exc",
        [(SolveStatus.INFEASIBLE, InfeasibleProblem), (SolveStatus.UNBOUNDED, UnboundedProblem)],
    )
    def test_status_is_mapped(self, status, exc):
        s = FakeSolver(["x"], lambda bounds: (status, [], 0.0))
        with pytest.raises(exc):
            solve_lp(s)
