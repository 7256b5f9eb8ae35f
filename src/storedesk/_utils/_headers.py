import random
import string
from typing import Optional

from .constants import (
    HEADER_COMPANY_SUBDOMAIN,
    HEADER_REQUEST_ID,
    HEADER_SUBDOMAIN,
    REQUEST_ID_LENGTH,
)

_REQUEST_ID_ALPHABET = string.ascii_lowercase + string.digits


def tenant_subdomain(hostname: Optional[str]) -> Optional[str]:
    """Return the tenant label of ``hostname``, e.g. ``acme`` for ``acme.example.com``.

    Hosts with fewer than three labels, ``www`` hosts and local development
    hosts carry no tenant.
    """
    if not hostname:
        return None

    parts = hostname.split(".")
    if len(parts) < 3 or parts[0] == "www" or "localhost" in hostname:
        return None

    return parts[0]


def header_tenant(hostname: Optional[str]) -> dict[str, str]:
    subdomain = tenant_subdomain(hostname)
    if subdomain is None:
        return {}

    # both names are still read by older server components
    return {
        HEADER_COMPANY_SUBDOMAIN: subdomain,
        HEADER_SUBDOMAIN: subdomain,
    }


def generate_request_id() -> str:
    return "".join(random.choices(_REQUEST_ID_ALPHABET, k=REQUEST_ID_LENGTH))


def header_request_id() -> dict[str, str]:
    return {HEADER_REQUEST_ID: generate_request_id()}
