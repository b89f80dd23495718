"""Public SDK exports for Localdoc Python."""

from . import main
from .config import CompletionSettings, FrozenCompletionSettings, get_sdk_config, settings
from .errors import (
    CompletionError,
    InvalidEndpointError,
    MalformedResponseError,
    ServerError,
    TransportFailureError,
)
from .main import AsyncCompletionClient, CompletionClient
from .schemas import ChatMessage, ChatRequest, ChatResponse

__version__ = "0.1.0"
