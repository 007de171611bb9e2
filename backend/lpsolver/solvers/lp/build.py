from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ortools.linear_solver import pywraplp

from lpsolver.core.errors import DomainError, SolverNotReady
from lpsolver.lpformat.read import LPProblem
from lpsolver.solvers.lp.capability import NumericType

# Magnitudes at or beyond this are infinite (COIN's convention for "no bound").
INFINITE_BOUND = 1e30


@dataclass
class LPBuild:
    solver: pywraplp.Solver
    columns: List[pywraplp.Variable]  # in problem column order
    rows: List[pywraplp.Constraint]
    objective: List[float]  # per-column objective coefficient
    maximize: bool
    integer_columns: List[int]  # column indexes, declaration order


def create_solver() -> pywraplp.Solver:
    s = pywraplp.Solver.CreateSolver("GLOP")  # Continuous LP
    if s is None:
        raise SolverNotReady("Failed to create OR-Tools GLOP solver.")
    return s


def to_float(value: NumericType) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise DomainError(f"{value!r} is not a number.") from None
    if math.isnan(v):
        raise DomainError(f"{value!r} is not a number.")
    return v


def to_bound(value: NumericType, s: pywraplp.Solver) -> float:
    v = to_float(value)
    if v >= INFINITE_BOUND:
        return s.infinity()
    if v <= -INFINITE_BOUND:
        return -s.infinity()
    return v


def build_lp(problem: LPProblem) -> LPBuild:
    s = create_solver()

    index = {name: j for j, name in enumerate(problem.columns)}
    columns = [
        s.NumVar(
            to_bound(problem.col_lb[name], s), to_bound(problem.col_ub[name], s), name
        )
        for name in problem.columns
    ]

    rows: List[pywraplp.Constraint] = []
    for row in problem.rows:
        ct = s.Constraint(to_bound(row.lb, s), to_bound(row.ub, s), row.name)
        for name, coef in row.coefs.items():
            ct.SetCoefficient(columns[index[name]], coef)
        rows.append(ct)

    objective = [problem.objective.get(name, 0.0) for name in problem.columns]
    _set_objective(s, columns, objective, problem.maximize, problem.objective_offset)

    return LPBuild(
        solver=s,
        columns=columns,
        rows=rows,
        objective=objective,
        maximize=problem.maximize,
        integer_columns=[index[name] for name in problem.integer_columns],
    )


def build_dense(
    objective: Sequence[NumericType],
    col_lb: Sequence[NumericType],
    col_ub: Sequence[NumericType],
    row_lb: Sequence[NumericType],
    row_ub: Sequence[NumericType],
    matrix: Sequence[NumericType],
    names: Optional[Sequence[str]] = None,
    maximize: bool = False,
) -> LPBuild:
    n = len(objective)
    m = len(row_lb)
    if len(col_lb) != n or len(col_ub) != n:
        raise DomainError(f"Column bounds must have {n} entries.")
    if len(row_ub) != m:
        raise DomainError(f"Row bounds must have {m} entries.")
    if len(matrix) != m * n:
        raise DomainError(
            f"Constraint matrix has {len(matrix)} entries, expected {m} x {n} = {m * n}."
        )
    if names is not None and len(names) != n:
        raise DomainError(f"Column names must have {n} entries.")
    names = list(names) if names is not None else [f"C{j}" for j in range(n)]

    s = create_solver()
    columns = [
        s.NumVar(to_bound(col_lb[j], s), to_bound(col_ub[j], s), names[j])
        for j in range(n)
    ]

    rows: List[pywraplp.Constraint] = []
    for i in range(m):
        ct = s.Constraint(to_bound(row_lb[i], s), to_bound(row_ub[i], s), f"R{i + 1}")
        for j in range(n):
            coef = to_float(matrix[i * n + j])  # row-major
            if coef != 0.0:
                ct.SetCoefficient(columns[j], coef)
        rows.append(ct)

    coefs = [to_float(c) for c in objective]
    _set_objective(s, columns, coefs, maximize, 0.0)

    return LPBuild(
        solver=s,
        columns=columns,
        rows=rows,
        objective=coefs,
        maximize=maximize,
        integer_columns=[],
    )


def _set_objective(
    s: pywraplp.Solver,
    columns: List[pywraplp.Variable],
    coefs: List[float],
    maximize: bool,
    offset: float,
) -> None:
    obj = s.Objective()
    for var, coef in zip(columns, coefs):
        if coef != 0.0:
            obj.SetCoefficient(var, coef)
    obj.SetOffset(offset)
    if maximize:
        obj.SetMaximization()
    else:
        obj.SetMinimization()
