"""Chat relay endpoint.

Streams the completion service's Server-Sent Events back to the caller
unmodified.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from src.models.errors import SafeChatError
from src.models.schemas import ChatRequest, ErrorResponse
from src.relay.proxy import get_relay_proxy

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest) -> StreamingResponse:
    """Relay a conversation to the completion service.

    Args:
        request: Conversation, optional model and optional safe mode flag.

    Returns:
        The upstream event stream, mirrored byte for byte.

    Raises:
        500: Relay credential missing or unexpected error.
        4xx/5xx: Upstream failure, mirrored with its details.
    """
    try:
        proxy = get_relay_proxy()
        stream = await proxy.open_stream(
            request.messages,
            model=request.model,
            safe_mode=request.safe_mode,
        )
    except SafeChatError:
        raise
    except Exception as e:
        logger.exception("Chat API error")
        raise SafeChatError("Internal server error") from e

    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
