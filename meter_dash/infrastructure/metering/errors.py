class FetchError(Exception):
    """A metering request did not yield a usable result."""

    kind = "fetch"

    def __init__(self, message: str, endpoint: str | None = None):
        super().__init__(message)
        self.endpoint = endpoint


class NetworkError(FetchError):
    """Request could not be sent or timed out."""

    kind = "network"


class ServerError(FetchError):
    """Upstream answered with a non-success status code."""

    kind = "server"

    def __init__(self, message: str, status_code: int, endpoint: str | None = None):
        super().__init__(message, endpoint)
        self.status_code = status_code


class DecodeError(FetchError):
    """Body is not valid JSON or not of the expected shape."""

    kind = "decode"
