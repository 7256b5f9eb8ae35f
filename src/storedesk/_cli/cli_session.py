import json
from typing import Optional

import click

from .._session import FileTokenStore
from ._console import ConsoleLogger

console = ConsoleLogger()


def mask(token: Optional[str]) -> str:
    if not token:
        return "<none>"
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}…{token[-4:]}"


@click.group()
def session() -> None:
    """Inspect or change the stored session."""


@session.command()
def show() -> None:
    """Show the stored session with tokens masked."""
    store = FileTokenStore()
    user = store.get_user()

    console.info(f"Session file: {store.path}")
    console.info(f"Access token: {mask(store.get_access_token())}")
    console.info(f"Refresh token: {mask(store.get_refresh_token())}")
    console.info(f"User: {json.dumps(user) if user else '<none>'}")


@session.command("set")
@click.option("--access-token", required=True, help="Access token")
@click.option("--refresh-token", help="Refresh token")
@click.option("--user", "user_json", help="Cached user profile as JSON")
def set_session(
    access_token: str, refresh_token: Optional[str], user_json: Optional[str]
) -> None:
    """Store a session obtained at login."""
    user = None
    if user_json is not None:
        try:
            user = json.loads(user_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--user") from e

    store = FileTokenStore()
    store.set_access_token(access_token)
    if refresh_token:
        store.set_refresh_token(refresh_token)
    if user is not None:
        store.set_user(user)

    console.success(f"Session saved to {store.path}")


@session.command()
def clear() -> None:
    """Remove the stored tokens and user profile."""
    store = FileTokenStore()
    store.clear_tokens()
    store.clear_user()
    console.success("Session cleared")
