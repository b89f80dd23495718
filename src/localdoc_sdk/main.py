"""Localdoc Python SDK public interface for asking a local inference server for completions."""

import asyncio
from abc import ABC

from localdoc_sdk.config import get_sdk_config
from localdoc_sdk.schemas import ChatMessage, ChatRequest
from localdoc_sdk.utils import make_chat_request

DOCUMENT_PROMPT_TEMPLATE = (
    "Write documentation for the following code. "
    "Describe its purpose, parameters and return value.\n\n{code}"
)


class CompletionClientBase(ABC):
    """Base class for completion clients."""

    def __init__(
        self,
        endpoint_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize a completion client.

        Values left as `None` are sourced from global SDK config at construction
        time; later changes to the global settings do not affect this client.

        Args:
            endpoint_url: Full URL of the inference server's chat endpoint.
            model: Model identifier sent with every request.
            timeout: Seconds to wait on the socket. No deadline when omitted.
        """
        sdk_config = get_sdk_config()

        self.endpoint_url = endpoint_url if endpoint_url is not None else sdk_config.endpoint_url
        self.model_name = model if model is not None else sdk_config.model
        self.timeout = timeout if timeout is not None else sdk_config.timeout

        if not self.model_name.strip():
            raise ValueError("Model identifier must not be blank.")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Timeout must be greater than zero, got {self.timeout}.")

    def build_request(self, message: str, history: list[ChatMessage] | None = None) -> ChatRequest:
        """Assemble the request body for a user message and optional prior turns."""
        if not message:
            raise ValueError("Prompt must not be empty.")

        messages: list[ChatMessage] = list(history) if history else []
        messages.append(ChatMessage(role="user", content=message))
        for entry in messages:
            try:
                entry.content.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise ValueError(f"Message content is not valid UTF-8 text: {exc}") from exc
        return ChatRequest(model=self.model_name, messages=messages, stream=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint_url={self.endpoint_url!r}, model={self.model_name!r})"


class CompletionClient(CompletionClientBase):
    """Synchronous completion client."""

    def chat(self, message: str, history: list[ChatMessage] | None = None) -> ChatMessage:
        """Send a chat request.

        Args:
            message: User prompt content.
            history: Optional prior conversation messages.

        Returns:
            Assistant message payload.

        Raises:
            ValueError: If the message is empty.
            CompletionError: If the request fails at any stage.
        """
        chat_request = self.build_request(message, history)
        response = make_chat_request(self.endpoint_url, chat_request, timeout=self.timeout)
        return response.message

    def complete(self, prompt: str) -> str:
        """Send a single prompt and return the generated text.

        Raises:
            ValueError: If the prompt is empty.
            CompletionError: If the request fails at any stage.
        """
        return self.chat(prompt).content

    def document(self, code: str) -> str:
        """Ask the model to write documentation for a piece of source code."""
        if not code:
            raise ValueError("Code must not be empty.")
        return self.complete(DOCUMENT_PROMPT_TEMPLATE.format(code=code))


class AsyncCompletionClient(CompletionClientBase):
    """Asyncio-friendly completion client."""

    async def chat(self, message: str, history: list[ChatMessage] | None = None) -> ChatMessage:
        """Send a chat request.

        Args:
            message: User prompt content.
            history: Optional prior conversation messages.

        Returns:
            Assistant message payload.

        Raises:
            ValueError: If the message is empty.
            CompletionError: If the request fails at any stage.
        """
        chat_request = self.build_request(message, history)
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None, make_chat_request, self.endpoint_url, chat_request, self.timeout
        )
        return response.message

    async def complete(self, prompt: str) -> str:
        """Send a single prompt and return the generated text."""
        reply = await self.chat(prompt)
        return reply.content

    async def document(self, code: str) -> str:
        """Ask the model to write documentation for a piece of source code."""
        if not code:
            raise ValueError("Code must not be empty.")
        return await self.complete(DOCUMENT_PROMPT_TEMPLATE.format(code=code))
