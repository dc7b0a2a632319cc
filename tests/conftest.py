"""Shared fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from memorial.api.app import create_app
from memorial.client.api import ContentClient
from memorial.client.local_storage import InMemoryLocalStorage
from memorial.client.selection import SelectionStore
from memorial.config import Settings
from memorial.resources.document_template import DocumentTemplate, Section
from memorial.services.content import ContentService
from memorial.services.document import DocumentService
from memorial.storage import create_local_storage


@pytest.fixture
def settings():
    return Settings(storage_backend="memory", sentry_dsn="", cors_origins="*")


@pytest.fixture
def storage():
    """Fresh in-memory storage."""
    return create_local_storage("memory")


@pytest.fixture
def template():
    return DocumentTemplate(
        resource_id="test_plan",
        title="Service Plan",
        filename="funeral_plan.pdf",
        sections=[Section(category="gospels", heading="Gospel Reading")],
    )


@pytest.fixture
def content_service(storage):
    return ContentService(storage)


@pytest.fixture
def document_service(content_service, template):
    return DocumentService(content_service, template)


@pytest.fixture
def app(settings, storage, template):
    return create_app(settings=settings, storage=storage, template=template)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def api_client(app):
    """Async API client talking to the in-process app."""
    return ContentClient("http://testserver", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def notices():
    """Collects user-visible notices."""
    return []


@pytest.fixture
def local_storage():
    return InMemoryLocalStorage()


@pytest.fixture
def selection(local_storage, notices):
    return SelectionStore(local_storage, notify=notices.append)
