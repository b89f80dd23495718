"""Exceptions raised by completion clients."""


class CompletionError(Exception):
    """Base class for every failure surfaced by a completion call."""


class InvalidEndpointError(CompletionError):
    """The configured endpoint URL cannot be used. No request was attempted."""

    def __init__(self, endpoint_url: str, detail: str):
        self.endpoint_url = endpoint_url
        self.detail = detail
        super().__init__(f"Invalid endpoint URL {endpoint_url!r}: {detail}")


class TransportFailureError(CompletionError):
    """The connection could not be established or was interrupted."""

    def __init__(self, endpoint_url: str, reason: object):
        self.endpoint_url = endpoint_url
        self.reason = reason
        super().__init__(f"Could not reach {endpoint_url}: {reason}")


class ServerError(CompletionError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Server responded with HTTP {status_code}")


class MalformedResponseError(CompletionError):
    """The response body does not decode into the expected chat response shape."""

    def __init__(self, detail: str, body: str = ""):
        self.detail = detail
        self.body = body
        super().__init__(f"Malformed chat response: {detail}")
