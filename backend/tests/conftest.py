import pytest
from fastapi.testclient import TestClient

from waste_intake.core.config import get_settings
from waste_intake.main import create_app


@pytest.fixture(autouse=True)
def fresh_settings():
    """
    Settings are cached per process; drop the cache around every test
    so monkeypatched environment variables are picked up.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client() -> TestClient:
    """
    Creates a fresh FastAPI app and TestClient for each test.
    This avoids shared state between tests.
    """
    app = create_app()
    return TestClient(app)
