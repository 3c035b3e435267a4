import pytest
from fastapi.testclient import TestClient

from recipe_engine.main import app
from recipe_engine.deps import get_parser
from recipe_engine.parsing import RuleBasedParser


@pytest.fixture
def client():
    """Test client with a fresh default parser."""
    app.dependency_overrides[get_parser] = lambda: RuleBasedParser()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
