"""Attachment lifecycle and submission composition.

Responsibilities:
    - Per-file status tracking (pending, processing, ready, error)
    - Concurrent extraction with late results for removed files discarded
    - Merging ready document text into the outgoing user turn
"""

from src.attachments.composer import OutgoingTurn, SubmissionComposer, compose
from src.attachments.models import Attachment, AttachmentStatus, InvalidTransition
from src.attachments.registry import AttachmentRegistry

__all__ = [
    "Attachment",
    "AttachmentRegistry",
    "AttachmentStatus",
    "InvalidTransition",
    "OutgoingTurn",
    "SubmissionComposer",
    "compose",
]
