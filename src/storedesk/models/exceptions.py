from httpx import HTTPStatusError, Response


class EnrichedException(Exception):
    """HTTP error carrying the request and response details of a failed call."""

    MAX_CONTENT_LENGTH = 200

    def __init__(self, error: HTTPStatusError) -> None:
        self.response: Response = error.response
        self.status_code = error.response.status_code
        self.url = str(error.request.url)
        self.http_method = error.request.method or "Unknown"

        content = error.response.content
        if content:
            text = content.decode("utf-8", errors="replace")
            if len(text) > self.MAX_CONTENT_LENGTH:
                self.response_content = (
                    text[: self.MAX_CONTENT_LENGTH] + "... (truncated)"
                )
            else:
                self.response_content = text
        else:
            self.response_content = "No content"

        enriched_message = (
            f"\nRequest URL: {self.url}"
            f"\nHTTP Method: {self.http_method}"
            f"\nStatus Code: {self.status_code}"
            f"\nResponse Content: {self.response_content}"
        )

        super().__init__(enriched_message)
