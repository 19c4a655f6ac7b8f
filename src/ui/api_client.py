"""HTTP client for the /extract and /chat endpoints."""

import json
import logging
import os
from collections.abc import AsyncIterator, Sequence

import httpx

from src.models.errors import (
    OperationTimeout,
    RelayTimeout,
    RelayTransportError,
    SafeChatError,
    error_from_payload,
)
from src.models.schemas import ChatMessage
from src.parsing.extractor import ExtractionResult

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
DONE_SENTINEL = "[DONE]"


def parse_sse_delta(line: str) -> str | None:
    """Pull the content delta out of one OpenAI-style SSE line.

    Returns:
        The delta text, "" for data lines without content, or None for
        non-data lines and the ``[DONE]`` sentinel.
    """
    event = _parse_data_line(line)
    if event is None:
        return None
    choices = event.get("choices") if isinstance(event, dict) else None
    if not choices:
        return ""
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""


def parse_sse_error(line: str) -> SafeChatError | None:
    """Return the error carried by a relay error event, if ``line`` is one."""
    event = _parse_data_line(line)
    if not isinstance(event, dict) or not isinstance(event.get("kind"), str):
        return None
    if "error" not in event or "choices" in event:
        return None
    status_code = OperationTimeout.status_code if event["kind"] == "timeout" else 500
    return error_from_payload(status_code, event)


def _parse_data_line(line: str) -> object | None:
    if not line.startswith("data:"):
        return None
    data = line.removeprefix("data:").strip()
    if not data or data == DONE_SENTINEL:
        return None
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        logger.debug(f"Skipping non-JSON event: {data[:80]}")
        return ""


async def _raise_for_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    await response.aread()
    try:
        payload = response.json()
    except json.JSONDecodeError:
        payload = {"error": response.text or None}
    raise error_from_payload(response.status_code, payload)


class ApiClient:
    """Client used by the chat page to reach the API.

    Connection failures and timeouts surface as ``RelayTransportError`` and
    ``RelayTimeout`` so callers only handle ``SafeChatError``.

    Args:
        base_url: Root URL of the API.
        transport: Optional httpx transport (e.g. ASGITransport in tests).
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 120.0,
    ) -> None:
        self._base_url = base_url
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url, transport=self._transport, timeout=self._timeout
        )

    async def extract(self, name: str, data: bytes, content_type: str | None) -> ExtractionResult:
        """Upload a file to /extract.

        Raises:
            SafeChatError: The typed error reported by the API, or a transport
                failure reaching it.
        """
        files = {"file": (name, data, content_type or "application/octet-stream")}
        try:
            async with self._client() as client:
                response = await client.post("/extract", files=files)
                await _raise_for_error(response)
                body = response.json()
        except httpx.TimeoutException as e:
            raise RelayTimeout(f"Chat API timed out: {e}") from e
        except httpx.TransportError as e:
            raise RelayTransportError(f"Chat API unreachable: {e}") from e
        return ExtractionResult(text=body["text"], filename=body["filename"], length=body["length"])

    async def stream_chat(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        safe_mode: bool = True,
    ) -> AsyncIterator[str]:
        """Send the conversation to /chat and yield assistant text as it streams.

        Raises:
            SafeChatError: The typed error reported by the API, an error event
                in the stream, or a transport failure reaching the API.
        """
        payload: dict[str, object] = {
            "messages": [m.model_dump(mode="json") for m in messages],
            "safeMode": safe_mode,
        }
        if model:
            payload["model"] = model

        try:
            async with self._client() as client, client.stream(
                "POST",
                "/chat",
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response:
                await _raise_for_error(response)
                async for line in response.aiter_lines():
                    if line.strip() == f"data: {DONE_SENTINEL}":
                        return
                    error = parse_sse_error(line)
                    if error is not None:
                        raise error
                    delta = parse_sse_delta(line)
                    if delta:
                        yield delta
        except httpx.TimeoutException as e:
            raise RelayTimeout(f"Chat API timed out: {e}") from e
        except httpx.TransportError as e:
            raise RelayTransportError(f"Chat API unreachable: {e}") from e
