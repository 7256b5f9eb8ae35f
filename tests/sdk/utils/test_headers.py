import string
from typing import Optional

import pytest

from storedesk._utils import (
    generate_request_id,
    header_request_id,
    header_tenant,
    tenant_subdomain,
)


class TestTenantSubdomain:
    @pytest.mark.parametrize(
        "hostname,expected",
        [
            ("acme.storedesk.com", "acme"),
            ("shop-1.eu.storedesk.com", "shop-1"),
            ("storedesk.com", None),
            ("www.storedesk.com", None),
            ("acme.localhost.dev", None),
            ("localhost", None),
            ("", None),
            (None, None),
        ],
    )
    def test_tenant_subdomain(self, hostname: Optional[str], expected: Optional[str]):
        assert tenant_subdomain(hostname) == expected

    def test_header_tenant_sets_both_names(self):
        assert header_tenant("acme.storedesk.com") == {
            "X-Company-Subdomain": "acme",
            "X-Subdomain": "acme",
        }

    def test_header_tenant_without_tenant(self):
        assert header_tenant("storedesk.com") == {}


class TestRequestId:
    def test_format(self):
        request_id = generate_request_id()

        assert len(request_id) == 9
        assert set(request_id) <= set(string.ascii_lowercase + string.digits)

    def test_header(self):
        headers = header_request_id()

        assert list(headers) == ["X-Request-ID"]
        assert len(headers["X-Request-ID"]) == 9
