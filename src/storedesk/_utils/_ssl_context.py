import os
import ssl
from typing import Any, Optional

import certifi
import truststore


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def create_ssl_context() -> ssl.SSLContext:
    """Build the TLS context used for API connections.

    A CA bundle configured through ``SSL_CERT_FILE``, ``REQUESTS_CA_BUNDLE``
    or ``SSL_CERT_DIR`` takes precedence. Otherwise the operating system
    trust store is used.
    """
    cafile = _env_path("SSL_CERT_FILE") or _env_path("REQUESTS_CA_BUNDLE")
    capath = _env_path("SSL_CERT_DIR")

    if cafile or capath:
        return ssl.create_default_context(
            cafile=cafile or certifi.where(), capath=capath
        )

    return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def get_httpx_client_kwargs(timeout: float) -> dict[str, Any]:
    """Keyword arguments shared by every ``httpx`` client the SDK builds."""
    return {
        "verify": create_ssl_context(),
        "timeout": timeout,
        "follow_redirects": True,
    }
