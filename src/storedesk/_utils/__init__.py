from ._errors import (
    extract_error_code,
    extract_error_details,
    extract_error_message,
    response_body,
)
from ._headers import generate_request_id, header_request_id, header_tenant, tenant_subdomain
from ._logs import setup_logging
from ._request_spec import RequestContext
from ._ssl_context import get_httpx_client_kwargs
from ._url import last_segment, normalize_path

__all__ = [
    "RequestContext",
    "extract_error_code",
    "extract_error_details",
    "extract_error_message",
    "generate_request_id",
    "get_httpx_client_kwargs",
    "header_request_id",
    "header_tenant",
    "last_segment",
    "normalize_path",
    "response_body",
    "setup_logging",
    "tenant_subdomain",
]
