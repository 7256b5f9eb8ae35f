class BaseUrlMissingError(Exception):
    def __init__(
        self,
        message="Base URL missing. Pass base_url explicitly or set the STOREDESK_API_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)


class RefreshTokenMissingError(Exception):
    def __init__(self, message="No refresh token"):
        self.message = message
        super().__init__(self.message)


class TokenRefreshError(Exception):
    """Raised when the session could not be refreshed.

    Every caller waiting on the failed refresh receives this error. The
    underlying cause (transport error, rejected refresh token, malformed
    response body or missing refresh token) is chained as ``__cause__``.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)
