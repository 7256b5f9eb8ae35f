import json
from typing import Any, Optional

from httpx import Response


def response_body(response: Optional[Response]) -> Any:
    """Return the decoded JSON body of ``response``, its text, or ``None``."""
    if response is None:
        return None
    try:
        return response.json()
    except (ValueError, UnicodeDecodeError):
        return response.text or None


def extract_error_message(body: Any) -> Optional[str]:
    """Extract a human readable message from an API error body.

    Precedence: ``error.message`` when ``error`` is an object, ``error`` when
    it is a string, then the top level ``message``.
    """
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
    elif isinstance(error, str):
        message = error
    else:
        message = body.get("message")

    return message if isinstance(message, str) and message else None


def extract_error_code(body: Any) -> Optional[str]:
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        code = body["error"].get("code")
        return str(code) if code else None
    return None


def extract_error_details(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    details = body.get("details")
    if not details:
        return None
    return details if isinstance(details, str) else json.dumps(details)
