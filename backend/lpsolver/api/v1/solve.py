from fastapi import APIRouter, Request

from lpsolver.core.errors import InfeasibleIntegerSolution
from lpsolver.domain.schema import LPModel, SolveRequest, SolveResult
from lpsolver.facade import LPSolver

router = APIRouter(tags=["solve"])


def _solver(request: Request) -> LPSolver:
    return request.app.state.solver


@router.get("/version")
def version(request: Request) -> dict:
    return {"version": _solver(request).version()}


@router.post("/lp")
def create_lp(model: LPModel, request: Request) -> dict:
    return {"lp": _solver(request).create_lp(model)}


@router.post("/solve", response_model=SolveResult)
def solve(req: SolveRequest, request: Request) -> SolveResult:
    problem = req.model if req.model is not None else req.lp
    try:
        return _solver(request).solve_strict(problem, req.precision)
    except InfeasibleIntegerSolution as e:
        if e.result is None:
            raise
        return e.result
