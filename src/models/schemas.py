from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a chat turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single role-tagged turn in the conversation.

    Attributes:
        role: The speaker (system, user or assistant).
        content: The message text.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat relay endpoint.

    Attributes:
        messages: Full conversation so far, oldest first.
        model: Upstream model identifier; the configured default when omitted.
        safe_mode: Forwarded as-is to the completion service.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    model: str | None = None
    safe_mode: bool | None = Field(None, alias="safeMode")


class ExtractResponse(BaseModel):
    """Response after a successful text extraction.

    Attributes:
        success: Always true; failures are reported as error responses.
        text: Extracted (and possibly truncated) text.
        filename: Name of the uploaded file.
        length: Number of characters in ``text``.
    """

    success: bool = True
    text: str
    filename: str
    length: int = Field(ge=0)


class ErrorResponse(BaseModel):
    """Body of every error response.

    Attributes:
        error: Human-readable message.
        kind: Machine-readable error kind.
        details: Upstream body text, for relayed upstream failures.
    """

    error: str
    kind: str
    details: str | None = None
