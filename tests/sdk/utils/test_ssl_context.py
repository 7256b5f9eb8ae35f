import ssl
from pathlib import Path

import certifi
import pytest
import truststore

from storedesk._utils import get_httpx_client_kwargs
from storedesk._utils._ssl_context import create_ssl_context


class TestSslContext:
    @pytest.fixture(autouse=True)
    def no_ca_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE", "SSL_CERT_DIR"):
            monkeypatch.delenv(name, raising=False)

    def test_system_trust_store_by_default(self):
        assert isinstance(create_ssl_context(), truststore.SSLContext)

    def test_configured_bundle(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REQUESTS_CA_BUNDLE", certifi.where())

        context = create_ssl_context()

        assert isinstance(context, ssl.SSLContext)
        assert not isinstance(context, truststore.SSLContext)

    def test_configured_directory_uses_certifi_bundle(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv("SSL_CERT_DIR", str(tmp_path))

        assert not isinstance(create_ssl_context(), truststore.SSLContext)

    def test_client_kwargs(self):
        kwargs = get_httpx_client_kwargs(12.0)

        assert kwargs["timeout"] == 12.0
        assert kwargs["follow_redirects"] is True
        assert "verify" in kwargs
