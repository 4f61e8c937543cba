import pytest
from fastapi.testclient import TestClient

from research_assistant.api import deps
from research_assistant.core.ai.research_service import ResearchService
from research_assistant.main import app
from research_assistant.tests.stubs import StubGeminiClient


@pytest.fixture
def stub_client():
    return StubGeminiClient()


@pytest.fixture
def research_service(stub_client):
    return ResearchService(stub_client)


@pytest.fixture
def client(research_service):
    app.dependency_overrides[deps.get_research_service] = lambda: research_service
    yield TestClient(app)
    app.dependency_overrides.clear()
