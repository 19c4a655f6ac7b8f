"""Per-page chat state: conversation, attachments and safe mode."""

import logging
import uuid

from src.attachments.composer import OutgoingTurn, SubmissionComposer
from src.attachments.models import Attachment
from src.attachments.registry import AttachmentRegistry
from src.models.conversation import Conversation
from src.models.schemas import ChatMessage, Role
from src.ui.api_client import ApiClient

logger = logging.getLogger(__name__)


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(self, api: ApiClient | None = None, model: str | None = None) -> None:
        self.api = api or ApiClient()
        self.model = model
        self.session_id: str = str(uuid.uuid4())
        self.conversation = Conversation()
        self.attachments = AttachmentRegistry(extractor=self.api.extract)
        self.composer = SubmissionComposer(self.attachments)
        self.safe_mode: bool = True
        self.is_streaming: bool = False

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self.conversation.messages

    def attach(self, name: str, data: bytes, content_type: str | None = None) -> Attachment:
        return self.attachments.add(name, data, content_type)

    def remove_attachment(self, attachment_id: str) -> bool:
        return self.attachments.remove(attachment_id)

    def toggle_safe_mode(self) -> bool:
        self.safe_mode = not self.safe_mode
        return self.safe_mode

    def can_submit(self, text: str) -> bool:
        """Submit is allowed with typed text or at least one ready attachment."""
        if self.is_streaming:
            return False
        return bool(text.strip()) or bool(self.attachments.ready())

    def submit(self, text: str) -> OutgoingTurn:
        """Compose the user turn and append it to the conversation."""
        return self.composer.submit(self.conversation, text)

    async def reply(self, turn: OutgoingTurn) -> ChatMessage:
        """Stream the assistant's answer to ``turn`` and record it.

        Returns:
            The recorded assistant turn.

        Raises:
            SafeChatError: If the relay fails before streaming starts.
        """
        self.is_streaming = True
        parts: list[str] = []
        try:
            async for delta in self.api.stream_chat(
                turn.messages, model=self.model, safe_mode=self.safe_mode
            ):
                parts.append(delta)
        finally:
            self.is_streaming = False
        return self.conversation.add(Role.ASSISTANT, "".join(parts))

    def reset(self) -> None:
        """Start a new chat: fresh conversation, no attachments."""
        self.conversation = Conversation()
        self.attachments.clear()
        self.session_id = str(uuid.uuid4())
        logger.info(f"Started new chat session {self.session_id}")
