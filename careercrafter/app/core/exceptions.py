"""
Application exceptions that aren't plain HTTP errors.
"""


class UpstreamServiceError(Exception):
    """The hosted text-generation service was unreachable or answered with an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
