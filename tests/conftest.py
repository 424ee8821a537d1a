"""Pytest configuration and shared fixtures for alacran-client tests."""

import pytest

from alacran_client.auth import AuthenticationContent, SimpleAuthenticationProvider
from alacran_client.testing import FakeAlacranServer
from alacran_client.transport import HttpTransport, Reauthenticator

BASE_URL = "https://alacran.test/api/v1"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Alacran environment variables before each test.

    This prevents a developer's real settings from leaking into credential tests.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith(("ALACRAN_", "TEST_")):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def server():
    return FakeAlacranServer()


@pytest.fixture
def provider():
    return SimpleAuthenticationProvider(lambda: AuthenticationContent(password="alacran42"))


@pytest.fixture
async def transport(server, provider):
    transport = HttpTransport(
        BASE_URL,
        provider,
        reauthenticator=Reauthenticator(provider),
        http_client=server.http_client(),
    )
    yield transport
    await transport.http.aclose()
