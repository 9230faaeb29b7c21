"""Exceptions raised at the engine's I/O seams."""


class GatewayError(Exception):
    """A catalog or scratch store operation failed."""


class ResurrectionServiceError(Exception):
    """The resurrection service could not be reached or returned an unusable response."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code
