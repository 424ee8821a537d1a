"""Tests for authentication providers."""

import pytest

from alacran_client.auth import (
    AuthenticationContent,
    AuthenticationProvider,
    CredentialNotFoundError,
    CredentialResolver,
    EnvAuthenticationProvider,
    SimpleAuthenticationProvider,
)


class TestSimpleAuthenticationProvider:
    @pytest.mark.unit
    async def test_token_starts_empty(self):
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="pw"))

        assert await provider.on_auth_token_requested() == ""

    @pytest.mark.unit
    async def test_token_updated(self):
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="pw"))

        provider.on_auth_token_updated("first")
        provider.on_auth_token_updated("second")

        assert await provider.on_auth_token_requested() == "second"

    @pytest.mark.unit
    async def test_sync_credentials_callback(self):
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="pw"))

        assert await provider.on_credentials_requested() == AuthenticationContent(password="pw")

    @pytest.mark.unit
    async def test_async_credentials_callback(self):
        async def prompt() -> AuthenticationContent:
            return AuthenticationContent(password="typed", otp_token="654321")

        provider = SimpleAuthenticationProvider(prompt)

        content = await provider.on_credentials_requested()

        assert content.password == "typed"
        assert content.otp_token == "654321"

    @pytest.mark.unit
    def test_satisfies_protocol(self):
        provider = SimpleAuthenticationProvider(lambda: AuthenticationContent(password="pw"))

        assert isinstance(provider, AuthenticationProvider)


class TestEnvAuthenticationProvider:
    @pytest.mark.unit
    async def test_password_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALACRAN_PASSWORD", "env-password")
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False))

        content = await provider.on_credentials_requested()

        assert content.password == "env-password"
        assert content.otp_token is None

    @pytest.mark.unit
    async def test_otp_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("ALACRAN_PASSWORD", "env-password")
        monkeypatch.setenv("ALACRAN_OTP_TOKEN", "111222")
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False))

        content = await provider.on_credentials_requested()

        assert content.otp_token == "111222"

    @pytest.mark.unit
    async def test_password_from_file(self, tmp_path, monkeypatch):
        secret_file = tmp_path / "password"
        secret_file.write_text("file-password\n")
        monkeypatch.setenv("ALACRAN_PASSWORD_FILE", str(secret_file))
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False))

        content = await provider.on_credentials_requested()

        assert content.password == "file-password"

    @pytest.mark.unit
    async def test_explicit_password_wins(self, monkeypatch):
        monkeypatch.setenv("ALACRAN_PASSWORD", "env-password")
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False), password="explicit")

        content = await provider.on_credentials_requested()

        assert content.password == "explicit"

    @pytest.mark.unit
    async def test_missing_password_raises(self):
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False))

        with pytest.raises(CredentialNotFoundError):
            await provider.on_credentials_requested()

    @pytest.mark.unit
    async def test_keeps_token_in_memory(self):
        provider = EnvAuthenticationProvider(CredentialResolver(load_dotenv=False))

        provider.on_auth_token_updated("tok")

        assert await provider.on_auth_token_requested() == "tok"


@pytest.mark.unit
def test_authentication_content_repr_masks_secrets():
    content = AuthenticationContent(password="hunter2", otp_token="123456")

    assert "hunter2" not in repr(content)
    assert "123456" not in repr(content)
