"""Append-only conversation history."""

from collections.abc import Iterator

from src.models.schemas import ChatMessage, Role


class Conversation:
    """Ordered sequence of chat turns. Past turns are never mutated."""

    def __init__(self, messages: list[ChatMessage] | None = None) -> None:
        self._messages: list[ChatMessage] = list(messages or [])

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def add(self, role: Role, content: str) -> ChatMessage:
        """Append a new turn built from role and content."""
        message = ChatMessage(role=role, content=content)
        self.append(message)
        return message

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)
