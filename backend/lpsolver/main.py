import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lpsolver.api.v1.router import router as v1_router
from lpsolver.core.config import Settings
from lpsolver.core.errors import DomainError, SolverFailure, SolverNotReady
from lpsolver.facade import LPSolver


def create_app(
    solver: Optional[LPSolver] = None, settings: Optional[Settings] = None
) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="LP Solver API", version="0.1.0")

    app.state.settings = settings
    app.state.solver = solver or LPSolver(
        default_precision=settings.default_precision
    ).initialize()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DomainError)
    def domain_error_handler(_, exc: DomainError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(SolverFailure)
    def solver_failure_handler(_, exc: SolverFailure):
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    @app.exception_handler(SolverNotReady)
    def not_ready_handler(_, exc: SolverNotReady):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(v1_router, prefix="/v1")
    return app


def run() -> None:
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run("lpsolver.main:app", host="0.0.0.0", port=settings.port, reload=settings.reload)


app = create_app()

if __name__ == "__main__":  # pragma: no cover
    run()
