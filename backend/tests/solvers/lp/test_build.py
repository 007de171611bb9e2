import math

import pytest
from ortools.linear_solver import pywraplp

from lpsolver.core.errors import DomainError, SolverNotReady
from lpsolver.lpformat.read import read_lp
from lpsolver.lpformat.write import create_lp
from lpsolver.solvers.lp.build import build_dense, build_lp, to_bound
from tests.lp_model_factory import LPModelFactory


def assert_optimal(built):
    status = built.solver.Solve()
    assert status == pywraplp.Solver.OPTIMAL
    return status


class TestBuild:
    def test_build_small_lp_vars_and_rows(self):
        built = build_lp(read_lp(LPModelFactory.small_lp()))

        assert [v.name() for v in built.columns] == ["x", "y"]
        assert built.columns[0].Lb() == 0.0
        assert len(built.rows) == 2
        assert built.maximize is True
        assert built.objective == [0.6, 0.5]

    def test_solve_small_lp(self):
        built = build_lp(read_lp(LPModelFactory.small_lp()))
        assert_optimal(built)

        assert math.isclose(built.columns[0].solution_value(), 0.6, abs_tol=1e-6)
        assert math.isclose(built.columns[1].solution_value(), 0.2, abs_tol=1e-6)
        assert math.isclose(built.solver.Objective().Value(), 0.46, abs_tol=1e-6)

    def test_tinlake_relaxation_hits_upper_bounds(self):
        built = build_lp(read_lp(create_lp(LPModelFactory.tinlake())))
        assert_optimal(built)

        values = [v.solution_value() for v in built.columns]
        assert values == pytest.approx([124, 400, 100, 300])
        assert built.solver.Objective().Value() == pytest.approx(311640000)
        assert built.integer_columns == [0, 1, 2, 3]

    def test_dense_problem_minimizes_by_default(self):
        inf = 1.7976931348623157e308
        # min -0.6x - 0.5y s.t. x + 2y <= 1, 3x + y <= 2
        built = build_dense(
            [-0.6, -0.5], [0, 0], [inf, inf], [-inf, -inf], [1, 2], [1, 2, 3, 1]
        )
        assert_optimal(built)

        assert built.columns[0].Ub() == built.solver.infinity()
        assert [v.name() for v in built.columns] == ["C0", "C1"]
        assert built.columns[0].solution_value() == pytest.approx(0.6)
        assert built.columns[1].solution_value() == pytest.approx(0.2)

    def test_dense_problem_accepts_numeral_strings(self):
        built = build_dense(
            ["-1"], ["0"], ["200000000000000000000"], ["-inf"], ["100000000000000000000"], ["1"],
            names=["big"],
        )
        assert built.columns[0].Ub() == 2e20
        assert built.rows[0].ub() == 1e20

    @pytest.mark.parametrize(
        "args, pattern",
        [
            (([1], [0], [1], [0], [1], [1, 2]), "expected 1 x 1"),
            (([1, 1], [0], [1, 1], [], [], []), "Column bounds"),
            (([1], [0], [1], [0, 0], [1], [1, 1]), "Row bounds"),
            (([1], [0], ["abc"], [], [], []), "not a number"),
        ],
    )
    def test_dense_shape_errors(self, args, pattern):
        with pytest.raises(DomainError, match=pattern):
            build_dense(*args)

    def test_dense_names_length_checked(self):
        with pytest.raises(DomainError, match="Column names"):
            build_dense([1], [0], [1], [], [], [], names=["a", "b"])

    def test_to_bound_clamps_huge_values(self):
        s = pywraplp.Solver.CreateSolver("GLOP")
        assert to_bound(1e30, s) == s.infinity()
        assert to_bound("-1e31", s) == -s.infinity()
        assert to_bound("12.5", s) == 12.5

    def test_create_solver_none_raises(self, monkeypatch):
        import lpsolver.solvers.lp.build as build_mod

        def _fake_create_solver(*args, **kwargs):
            return None

        monkeypatch.setattr(
            build_mod.pywraplp.Solver,
            "CreateSolver",
            staticmethod(_fake_create_solver),
        )

        with pytest.raises(SolverNotReady, match="Failed to create OR-Tools GLOP solver"):
            build_mod.build_lp(read_lp(LPModelFactory.small_lp()))
