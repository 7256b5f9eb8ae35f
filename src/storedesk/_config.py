import os
from os import environ as env
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from ._utils.constants import (
    DEFAULT_BEST_EFFORT_PATHS,
    DEFAULT_LOGIN_PATH,
    DEFAULT_PUBLIC_ROUTE_PREFIXES,
    DEFAULT_TIMEOUT,
    DOTENV_FILE,
    ENV_BASE_URL,
    ENV_DEV_ACCESS_TOKEN,
    ENV_DEV_MODE,
    ENV_HOSTNAME,
    ENV_LOGIN_PATH,
    ENV_TIMEOUT,
    REFRESH_ENDPOINT,
)
from .models.errors import BaseUrlMissingError

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Client configuration, read once when the client is built."""

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    development: bool = False
    dev_access_token: Optional[str] = None
    hostname: Optional[str] = None
    login_path: str = DEFAULT_LOGIN_PATH
    public_route_prefixes: tuple[str, ...] = DEFAULT_PUBLIC_ROUTE_PREFIXES
    best_effort_paths: tuple[str, ...] = DEFAULT_BEST_EFFORT_PATHS

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise BaseUrlMissingError()
        return value

    @field_validator("best_effort_paths")
    @classmethod
    def _strip_best_effort_paths(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # matched against normalized request paths, which never start with "/"
        return tuple(path.lstrip("/") for path in value)

    @property
    def refresh_url(self) -> str:
        return f"{self.base_url}/{REFRESH_ENDPOINT}"

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """Build a configuration from ``STOREDESK_*`` variables and ``.env``.

        Keyword arguments that are not ``None`` take precedence over the
        environment.
        """
        load_dotenv(dotenv_path=os.path.join(os.getcwd(), DOTENV_FILE))

        values = {
            "base_url": env.get(ENV_BASE_URL),
            "timeout": env.get(ENV_TIMEOUT),
            "development": env.get(ENV_DEV_MODE, "").strip().lower() in _TRUTHY,
            "dev_access_token": env.get(ENV_DEV_ACCESS_TOKEN),
            "hostname": env.get(ENV_HOSTNAME),
            "login_path": env.get(ENV_LOGIN_PATH),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        values = {k: v for k, v in values.items() if v is not None}

        if not values.get("base_url"):
            raise BaseUrlMissingError()

        return cls(**values)
