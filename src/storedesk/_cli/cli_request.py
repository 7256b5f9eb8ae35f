import asyncio
import json
import logging
from typing import Optional

import click
from httpx import RequestError, Response

from .._storedesk import StoreDesk
from .._utils.constants import SILENT_STATUS_CODES
from ..models.errors import BaseUrlMissingError, TokenRefreshError
from ..models.exceptions import EnrichedException
from ._console import ConsoleLogger

logger = logging.getLogger(__name__)
console = ConsoleLogger()


def parse_params(params: tuple[str, ...]) -> dict[str, str]:
    parsed = {}
    for param in params:
        key, sep, value = param.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"'{param}' is not in key=value form", param_hint="--param")
        parsed[key] = value
    return parsed


def parse_json_body(body: Optional[str]):
    if body is None:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--json") from e


def print_response(response: Response) -> None:
    content_type = response.headers.get("content-type", "")
    if "json" in content_type and response.content:
        console.json(response.text)
    elif response.text:
        console.info(response.text)
    else:
        console.success(f"{response.status_code} {response.reason_phrase}")


async def _send(sdk: StoreDesk, method: str, path: str, **kwargs) -> Response:
    async with sdk.api_client as client:
        return await client.request(method, path, **kwargs)


@click.command()
@click.argument("method")
@click.argument("path")
@click.option("--json", "json_body", help="JSON request body")
@click.option(
    "--param", "-p", "params", multiple=True, help="Query parameter as key=value"
)
@click.option(
    "--page",
    default="/",
    show_default=True,
    help="Page the request is issued from; decides the redirect when the session is lost",
)
@click.option(
    "--skip-error-toast", is_flag=True, help="Do not print the error notification"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def request(
    method: str,
    path: str,
    json_body: Optional[str],
    params: tuple[str, ...],
    page: str,
    skip_error_toast: bool,
    verbose: bool,
) -> None:
    """Send METHOD PATH through the client pipeline and print the response."""
    query = parse_params(params)
    body = parse_json_body(json_body)

    try:
        sdk = StoreDesk(debug=verbose)
    except BaseUrlMissingError as e:
        console.error(e.message)
        raise click.exceptions.Exit(1) from e

    sdk.location.pathname = page
    sdk.location.on_navigate = lambda target: console.warning(
        f"Session expired. Sign in again at {target}"
    )

    try:
        response = asyncio.run(
            _send(
                sdk,
                method,
                path,
                params=query,
                json=body,
                skip_error_toast=skip_error_toast,
            )
        )
    except EnrichedException as e:
        logger.debug(str(e))
        if skip_error_toast or e.status_code in SILENT_STATUS_CODES:
            console.error(f"Request failed with status {e.status_code}")
        raise click.exceptions.Exit(1) from e
    except TokenRefreshError as e:
        console.error(f"Session refresh failed: {e.message}")
        raise click.exceptions.Exit(1) from e
    except RequestError as e:
        console.error(f"Request failed: {e}")
        raise click.exceptions.Exit(1) from e

    print_response(response)
