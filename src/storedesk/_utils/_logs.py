import logging

from rich.logging import RichHandler

logger = logging.getLogger("storedesk")


def setup_logging(debug: bool = False) -> None:
    """Attach a rich handler to the ``storedesk`` logger once."""
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
