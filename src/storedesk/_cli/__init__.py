import click

from .cli_request import request
from .cli_session import session


@click.group()
@click.version_option(package_name="storedesk")
def cli() -> None:
    """StoreDesk admin API command line client."""


cli.add_command(request)
cli.add_command(session)
