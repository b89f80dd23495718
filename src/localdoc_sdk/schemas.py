from typing import Literal

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    """Chat message payload.

    Attributes:
        role: Message author role.
        content: Message text content.
    """

    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body posted to the inference server's chat endpoint."""

    model: str
    messages: list[ChatMessage]
    stream: Literal[False] = False


class ChatResponse(BaseModel):
    """Non-streaming chat reply. Only `message` is consumed by the clients."""

    model_config = ConfigDict(extra="ignore")

    model: str
    message: ChatMessage
    created_at: str | None = None  # ISO 8601
    done_reason: str | None = None
    done: bool | None = None
    total_duration: int | None = None  # nanoseconds
    load_duration: int | None = None  # nanoseconds
    prompt_eval_count: int | None = None
    prompt_eval_duration: int | None = None  # nanoseconds
    eval_count: int | None = None
    eval_duration: int | None = None  # nanoseconds
