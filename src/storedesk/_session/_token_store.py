"""Storage for the session credentials and the cached user profile."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

from .._utils.constants import ENV_SESSION_FILE, SESSION_DIR, SESSION_FILE

logger = logging.getLogger(__name__)

_ACCESS_TOKEN_KEY = "accessToken"
_REFRESH_TOKEN_KEY = "refreshToken"
_USER_KEY = "user"


@runtime_checkable
class TokenStore(Protocol):
    """Opaque key-value store for the session.

    Token contents are never inspected or validated.
    """

    def get_access_token(self) -> Optional[str]: ...

    def get_refresh_token(self) -> Optional[str]: ...

    def set_access_token(self, token: str) -> None: ...

    def set_refresh_token(self, token: str) -> None: ...

    def clear_tokens(self) -> None: ...

    def get_user(self) -> Optional[dict[str, Any]]: ...

    def set_user(self, user: dict[str, Any]) -> None: ...

    def clear_user(self) -> None: ...


class InMemoryTokenStore:
    """Token store living for the lifetime of the process."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        user: Optional[dict[str, Any]] = None,
    ) -> None:
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._user = user

    def get_access_token(self) -> Optional[str]:
        return self._access_token

    def get_refresh_token(self) -> Optional[str]:
        return self._refresh_token

    def set_access_token(self, token: str) -> None:
        self._access_token = token

    def set_refresh_token(self, token: str) -> None:
        self._refresh_token = token

    def clear_tokens(self) -> None:
        self._access_token = None
        self._refresh_token = None

    def get_user(self) -> Optional[dict[str, Any]]:
        return self._user

    def set_user(self, user: dict[str, Any]) -> None:
        self._user = user

    def clear_user(self) -> None:
        self._user = None


def default_session_file() -> Path:
    configured = os.environ.get(ENV_SESSION_FILE)
    if configured:
        return Path(configured).expanduser()
    return Path.cwd() / SESSION_DIR / SESSION_FILE


class FileTokenStore:
    """Token store persisted as JSON so the session survives restarts.

    The file is read on every access so that several processes sharing it
    observe each other's refreshes.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else default_session_file()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def _update(self, **values: Any) -> None:
        data = self._read()
        for key, value in values.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        self._write(data)

    def get_access_token(self) -> Optional[str]:
        return self._read().get(_ACCESS_TOKEN_KEY)

    def get_refresh_token(self) -> Optional[str]:
        return self._read().get(_REFRESH_TOKEN_KEY)

    def set_access_token(self, token: str) -> None:
        self._update(**{_ACCESS_TOKEN_KEY: token})

    def set_refresh_token(self, token: str) -> None:
        self._update(**{_REFRESH_TOKEN_KEY: token})

    def clear_tokens(self) -> None:
        self._update(**{_ACCESS_TOKEN_KEY: None, _REFRESH_TOKEN_KEY: None})

    def get_user(self) -> Optional[dict[str, Any]]:
        return self._read().get(_USER_KEY)

    def set_user(self, user: dict[str, Any]) -> None:
        self._update(**{_USER_KEY: user})

    def clear_user(self) -> None:
        self._update(**{_USER_KEY: None})
