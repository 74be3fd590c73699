"""
Unit Test Fixtures.

Fixtures for unit tests - the wire is stubbed with httpx.MockTransport.
Unit tests never open a real connection.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from davinci_cli.client import APIClient
from davinci_cli.core.config_schema import ApplicationSchema
from davinci_cli.schemas.user import SessionToken
from davinci_cli.services.users import UserService
from davinci_cli.storage.blob import BlobStore

from tests.helpers import APPLICATION_SETTINGS, AUTH_COOKIE, StubAPI


# =============================================================================
# HTTP Stub Fixtures
# =============================================================================


@pytest.fixture
def stub_api() -> StubAPI:
    """Fresh stub API per test."""
    return StubAPI()


@pytest.fixture
async def api_client(stub_api: StubAPI) -> AsyncGenerator[APIClient, None]:
    """APIClient wired to the stub API."""
    client = APIClient(transport=stub_api.transport)
    yield client
    await client.close()


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def app_settings() -> ApplicationSchema:
    """Validated application.yaml content used by the tests."""
    return ApplicationSchema(**APPLICATION_SETTINGS)


@pytest.fixture
def token() -> SessionToken:
    """Session token as captured from the auth response."""
    return SessionToken(cookie=AUTH_COOKIE)


@pytest.fixture
def user_service(
    api_client: APIClient,
    app_settings: ApplicationSchema,
    tmp_path: Path,
) -> UserService:
    """UserService over the stub API with blobs under tmp_path."""
    (tmp_path / "users").mkdir(exist_ok=True)
    return UserService(api_client, app_settings, BlobStore(), tmp_path)
