from fastapi import APIRouter

from lpsolver.api.v1.numerics import router as numerics_router
from lpsolver.api.v1.solve import router as solve_router

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


router.include_router(solve_router)
router.include_router(numerics_router)
