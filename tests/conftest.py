import pytest
from fastapi.testclient import TestClient

from stook_recipes.app.core.config import Settings, get_settings
from stook_recipes.app.main import create_app


@pytest.fixture
def settings():
    return Settings(_env_file=None, OCR_MAX_TEXT_CHARS=2000, OCR_REVIEW_THRESHOLD=0.6)


@pytest.fixture
def app(settings):
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
