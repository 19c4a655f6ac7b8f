"""Merge ready attachment text into the outgoing user turn."""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from src.attachments.models import Attachment
from src.attachments.registry import AttachmentRegistry
from src.models.conversation import Conversation
from src.models.schemas import ChatMessage, Role

logger = logging.getLogger(__name__)


class OutgoingTurn(BaseModel):
    """A composed user turn ready for the relay.

    Attributes:
        message: The new user turn.
        messages: Conversation so far followed by ``message``.
        documents: Names of the attachments merged into the turn.
    """

    model_config = ConfigDict(frozen=True)

    message: ChatMessage
    messages: list[ChatMessage]
    documents: list[str]

    @property
    def clears_attachments(self) -> bool:
        """Whether submitting this turn consumes the session's attachments."""
        return bool(self.documents)


def format_document_context(attachments: Sequence[Attachment]) -> str:
    return "\n\n".join(f"[Document: {a.name}]\n{a.content}" for a in attachments)


def compose(
    conversation: Sequence[ChatMessage],
    input_text: str,
    attachments: Sequence[Attachment],
) -> OutgoingTurn:
    """Build the user turn for a submission.

    Ready attachments are prepended to the input text as document blocks, in
    the order they were added. Without ready attachments the input is sent
    unchanged. Input emptiness is the caller's concern.
    """
    ready = [a for a in attachments if a.is_ready]
    if ready:
        content = f"{format_document_context(ready)}\n\n{input_text}"
    else:
        content = input_text

    message = ChatMessage(role=Role.USER, content=content)
    return OutgoingTurn(
        message=message,
        messages=[*conversation, message],
        documents=[a.name for a in ready],
    )


class SubmissionComposer:
    """Composes submissions against a session's attachment registry."""

    def __init__(self, registry: AttachmentRegistry) -> None:
        self._registry = registry

    def submit(self, conversation: Conversation, input_text: str) -> OutgoingTurn:
        """Compose a turn, consume attachments if used, and append it.

        Attachments still processing are dropped along with the ready ones;
        submission never waits for extraction.
        """
        turn = compose(conversation.messages, input_text, self._registry.snapshot())
        if turn.clears_attachments:
            logger.info(f"Merged {len(turn.documents)} document(s) into user turn")
            self._registry.clear()
        conversation.append(turn.message)
        return turn
