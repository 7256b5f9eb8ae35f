from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass
class RequestContext:
    """Per-call state of one logical request.

    The context is created for every outgoing call and reused for each
    retry or reissue of that call, so the retry counter and the refresh
    marker are scoped to the logical request and never shared.
    """

    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content: Any | None = None
    json: Any | None = None
    data: Any | None = None
    files: Any | None = None
    timeout: Union[int, float] | None = None
    skip_error_toast: bool = False
    stream: bool = False
    retry_count: int = 0
    is_refresh_retry: bool = False
    access_token: Optional[str] = None

    def request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.params:
            kwargs["params"] = self.params
        for name in ("content", "json", "data", "files"):
            value = getattr(self, name)
            if value is not None:
                kwargs[name] = value
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs
