"""Attachment records and their status variants.

The status is a discriminated union so that ``content`` only exists on the
``ready`` variant.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class AttachmentStatus(str, Enum):
    """Lifecycle stage of an uploaded file."""

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class Pending(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["pending"] = "pending"


class Processing(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["processing"] = "processing"


class Ready(BaseModel):
    """Extraction finished; ``content`` holds the document text."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ready"] = "ready"
    content: str = Field(..., min_length=1)


class Failed(BaseModel):
    """Extraction failed.

    Attributes:
        kind: Machine-readable error kind (see src.models.errors).
        message: Human-readable reason.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    kind: str
    message: str


AttachmentState = Annotated[Pending | Processing | Ready | Failed, Field(discriminator="status")]

_TRANSITIONS: dict[AttachmentStatus, frozenset[AttachmentStatus]] = {
    AttachmentStatus.PENDING: frozenset({AttachmentStatus.PROCESSING}),
    AttachmentStatus.PROCESSING: frozenset({AttachmentStatus.READY, AttachmentStatus.ERROR}),
    AttachmentStatus.READY: frozenset(),
    AttachmentStatus.ERROR: frozenset(),
}


class InvalidTransition(ValueError):
    """Raised when an attachment would move backwards or skip a stage."""


class Attachment(BaseModel):
    """One uploaded file undergoing extraction.

    Instances are immutable; the registry swaps in a new instance on every
    transition.

    Attributes:
        id: Process-local identifier, stable for the attachment's lifetime.
        name: Original filename, display only.
        state: Current status variant.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    state: AttachmentState = Field(default_factory=Pending)

    @property
    def status(self) -> AttachmentStatus:
        return AttachmentStatus(self.state.status)

    @property
    def content(self) -> str:
        """Extracted text, empty unless the attachment is ready."""
        return self.state.content if isinstance(self.state, Ready) else ""

    @property
    def is_ready(self) -> bool:
        return isinstance(self.state, Ready)

    def advance(self, state: Pending | Processing | Ready | Failed) -> "Attachment":
        """Return a copy moved to ``state``.

        Raises:
            InvalidTransition: If the move is not allowed from the current status.
        """
        target = AttachmentStatus(state.status)
        if target not in _TRANSITIONS[self.status]:
            raise InvalidTransition(
                f"Attachment {self.id} cannot move from {self.status.value} to {target.value}"
            )
        return self.model_copy(update={"state": state})
