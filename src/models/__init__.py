"""Pydantic models, conversation history and the error taxonomy.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual turn in the conversation
    - ChatRequest: Incoming chat relay payload
    - ExtractResponse: Extracted document text
    - ErrorResponse: Body of every error response
    - Conversation: Append-only turn history
"""

from src.models.conversation import Conversation
from src.models.schemas import ChatMessage, ChatRequest, ErrorResponse, ExtractResponse, Role

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "Conversation",
    "ErrorResponse",
    "ExtractResponse",
    "Role",
]
