import logging
from typing import Iterable, Optional

from httpx import Response, TimeoutException

from .._notifications import Notifier
from .._utils import (
    RequestContext,
    extract_error_code,
    extract_error_details,
    extract_error_message,
    last_segment,
    response_body,
)
from .._utils.constants import DEFAULT_ERROR_MESSAGE, SILENT_STATUS_CODES

logger = logging.getLogger(__name__)

_ACTION_NAMES = {
    "GET": "fetching data",
    "POST": "adding data",
    "PUT": "updating data",
    "PATCH": "updating data",
    "DELETE": "deleting data",
}
_DEFAULT_ACTION = "the operation"


def action_name(method: str) -> str:
    return _ACTION_NAMES.get(method.upper(), _DEFAULT_ACTION)


def server_error_message(
    status: int,
    method: str,
    path: str,
    message: Optional[str],
    code: Optional[str] = None,
    details: Optional[str] = None,
) -> str:
    """Compose the notification text for a 5xx response."""
    action = action_name(method)
    operation = last_segment(path) or _DEFAULT_ACTION

    if message:
        return f"Error while {action}: {message}"
    if code:
        return f"Server error ({code}): {action} failed"
    if details:
        return f"Server error: {details}"

    if status == 500:
        return f"Internal server error - {action} failed ({operation})"
    if status == 502:
        return f"Server unreachable - could not complete {action}"
    if status == 503:
        return "Service temporarily unavailable"
    if status == 504:
        return "Gateway timeout - please try again"
    return f"Server error ({status}) - {action} failed"


class ErrorReporter:
    """Decide whether a failed request is shown to the user, and how.

    At most one notification is emitted per reported failure.
    """

    def __init__(self, notifier: Notifier, best_effort_paths: Iterable[str]) -> None:
        self._notifier = notifier
        self._best_effort_paths = tuple(best_effort_paths)

    def should_notify(
        self,
        context: RequestContext,
        response: Optional[Response],
        error: Optional[BaseException] = None,
    ) -> bool:
        status = response.status_code if response is not None else None
        if status in SILENT_STATUS_CODES:
            return False
        if context.skip_error_toast:
            return False
        if isinstance(error, TimeoutException) and self._is_best_effort(context.path):
            return False
        return True

    def report(
        self,
        context: RequestContext,
        response: Optional[Response],
        error: Optional[BaseException] = None,
    ) -> Optional[str]:
        """Notify the user about a failed request; return the text shown, if any."""
        if not self.should_notify(context, response, error):
            return None

        body = response_body(response)
        message = extract_error_message(body)

        if response is not None and response.status_code >= 500:
            text = server_error_message(
                response.status_code,
                context.method,
                context.path,
                message,
                code=extract_error_code(body),
                details=extract_error_details(body),
            )
            logger.error(
                f"[{response.status_code}] {text} "
                f"(url={response.request.url}, error_data={body!r})"
            )
        else:
            text = message or DEFAULT_ERROR_MESSAGE

        self._notifier.error(text)
        return text

    def _is_best_effort(self, path: str) -> bool:
        return any(best_effort in path for best_effort in self._best_effort_paths)
