import pytest
from fastapi.testclient import TestClient

from lpsolver.facade import LPSolver
from lpsolver.main import create_app


@pytest.fixture()
def client() -> TestClient:
    """
    Creates a fresh FastAPI app and TestClient for each test.
    This avoids shared state between tests.
    """
    app = create_app()
    return TestClient(app)


@pytest.fixture()
def solver() -> LPSolver:
    """Initialized facade over the real GLOP backend."""
    return LPSolver().initialize()
