import urllib.error
import urllib.request
from http.client import HTTPException
from urllib.parse import urlsplit

from pydantic import ValidationError

from localdoc_sdk.errors import (
    InvalidEndpointError,
    MalformedResponseError,
    ServerError,
    TransportFailureError,
)
from localdoc_sdk.logger import logger
from localdoc_sdk.schemas import ChatRequest, ChatResponse

SUPPORTED_SCHEMES = ("http", "https")


def validate_endpoint(endpoint_url: str) -> str:
    """Check that an endpoint URL can be requested, without touching the network.

    Raises:
        InvalidEndpointError: If the URL is not an absolute http(s) URL with a host.
    """
    try:
        parts = urlsplit(endpoint_url)
        # Accessing .port validates the port component.
        parts.port
    except ValueError as exc:
        raise InvalidEndpointError(endpoint_url, str(exc)) from exc

    if parts.scheme not in SUPPORTED_SCHEMES:
        raise InvalidEndpointError(endpoint_url, f"scheme must be one of {', '.join(SUPPORTED_SCHEMES)}")
    if not parts.hostname:
        raise InvalidEndpointError(endpoint_url, "missing host")
    if any(ch.isspace() for ch in endpoint_url):
        raise InvalidEndpointError(endpoint_url, "contains whitespace")
    return endpoint_url


def make_chat_request(endpoint_url: str, chat_request: ChatRequest, timeout: float | None = None) -> ChatResponse:
    """Send a synchronous chat request to the inference server.

    Args:
        endpoint_url: Full URL of the chat endpoint.
        chat_request: Request body to post.
        timeout: Optional socket timeout in seconds. No deadline when omitted.

    Returns:
        The decoded chat response.

    Raises:
        InvalidEndpointError: If the endpoint URL is unusable.
        TransportFailureError: If the server could not be reached.
        ServerError: If the server answered with a non-2xx status.
        MalformedResponseError: If the body is not a chat response.
    """
    validate_endpoint(endpoint_url)

    headers = {"Content-Type": "application/json"}
    request = urllib.request.Request(
        endpoint_url,
        data=chat_request.model_dump_json().encode("utf-8"),
        headers=headers,
        method="POST",
    )

    urlopen_kwargs = {} if timeout is None else {"timeout": timeout}

    logger.debug(f"Posting chat request for model {chat_request.model} to {endpoint_url}")
    try:
        with urllib.request.urlopen(request, **urlopen_kwargs) as response:
            body = response.read()
    except urllib.error.HTTPError as exc:
        try:
            error_body = exc.read().decode("utf-8", errors="replace")
        except (HTTPException, OSError):
            # Status is known even when the error body is cut short.
            error_body = ""
        raise ServerError(exc.code, error_body) from exc
    except urllib.error.URLError as exc:
        raise TransportFailureError(endpoint_url, exc.reason) from exc
    except (HTTPException, OSError) as exc:
        raise TransportFailureError(endpoint_url, exc) from exc

    try:
        result = ChatResponse.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponseError(str(exc), body.decode("utf-8", errors="replace")) from exc

    logger.debug(f"Received chat response from {result.model} (done_reason={result.done_reason})")
    return result
