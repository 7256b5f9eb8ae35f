from .constants import API_VERSION_PREFIX


def normalize_path(path: str) -> str:
    """Normalize a caller supplied path relative to the configured base URL.

    The version segment is already part of the base URL, so ``x``, ``/x``,
    ``v1/x`` and ``/v1/x`` all resolve to ``x``. Absolute URLs are returned
    unchanged.
    """
    if not path:
        return path

    if path.startswith("/"):
        path = path[1:]
    if path.startswith(API_VERSION_PREFIX):
        path = path[len(API_VERSION_PREFIX) :]

    return path


def last_segment(path: str) -> str:
    """Return the last non-empty segment of ``path``, ignoring the query."""
    segments = [segment for segment in path.split("?", 1)[0].split("/") if segment]
    return segments[-1] if segments else ""
