"""Streaming relay to the SafePipe completion service.

Forwards the conversation upstream and hands the response body back
unchanged apart from content decoding. The upstream connection stays open
only while the body is being consumed. A timeout after the body has started
is reported as a final ``data: {"error", "kind": "timeout"}`` event.
"""

import json
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from src.models.errors import (
    ConfigurationError,
    RelayTimeout,
    RelayTransportError,
    UpstreamError,
)
from src.models.schemas import ChatMessage
from src.relay.config import RelayConfig, get_relay_config

logger = logging.getLogger(__name__)


def timeout_event(error: RelayTimeout) -> bytes:
    """Terminal SSE event reporting a timeout after the body has started."""
    return f"data: {json.dumps(error.to_payload())}\n\n".encode()


class RelayProxy:
    """Relays chat turns to the completion service.

    Wraps one httpx.AsyncClient for the process lifetime.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the relay.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, for tests.
        """
        self._config = config or get_relay_config()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            transport=transport,
        )

    @property
    def config(self) -> RelayConfig:
        return self._config

    def build_payload(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        safe_mode: bool | None = None,
    ) -> dict[str, Any]:
        """Build the upstream request body. ``safe_mode`` is passed through untouched."""
        return {
            "model": model or self._config.default_model,
            "messages": [m.model_dump(mode="json") for m in messages],
            "stream": True,
            "safe_mode": self._config.default_safe_mode if safe_mode is None else safe_mode,
        }

    async def open_stream(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
        safe_mode: bool | None = None,
    ) -> AsyncIterator[bytes]:
        """Start an upstream completion and return its body stream.

        Args:
            messages: Conversation to send, oldest first.
            model: Upstream model; configured default when None.
            safe_mode: Safe mode flag; configured default when None.

        Returns:
            Async iterator over the decoded upstream body.

        Raises:
            UpstreamError: Upstream answered with a non-success status.
            RelayTimeout: Upstream did not answer in time.
            RelayTransportError: Upstream could not be reached.
        """
        request = self._client.build_request(
            "POST",
            self._config.api_url,
            json=self.build_payload(messages, model, safe_mode),
            headers={"Authorization": f"Bearer {self._config.api_key}"},
        )

        try:
            response = await self._client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise RelayTimeout(f"SafePipe API timed out: {e}") from e
        except httpx.TransportError as e:
            raise RelayTransportError(f"SafePipe API unreachable: {e}") from e

        if not response.is_success:
            try:
                await response.aread()
            finally:
                await response.aclose()
            logger.warning(f"SafePipe API error {response.status_code}: {response.text}")
            raise UpstreamError(
                f"SafePipe API error: {response.status_code}",
                status_code=response.status_code,
                details=response.text,
            )

        return self._relay(response)

    async def _relay(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.TimeoutException as e:
            logger.warning(f"Upstream stream timed out: {e}")
            yield timeout_event(RelayTimeout(f"SafePipe API timed out mid-stream: {e}"))
        except httpx.TransportError as e:
            # The caller sees the body end; nothing is retried
            logger.warning(f"Upstream stream terminated: {e}")
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()


# Module-level singleton instance
_relay_proxy: RelayProxy | None = None


def get_relay_proxy() -> RelayProxy:
    """Get or create the global relay proxy.

    Returns:
        The RelayProxy instance.

    Raises:
        ConfigurationError: If the relay configuration is invalid.
    """
    global _relay_proxy
    if _relay_proxy is None:
        try:
            config = get_relay_config()
        except ValidationError as e:
            reasons = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
            raise ConfigurationError(reasons) from e
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        _relay_proxy = RelayProxy(config)
    return _relay_proxy


async def close_relay_proxy() -> None:
    """Close the global relay proxy, if one was created."""
    global _relay_proxy
    if _relay_proxy is not None:
        await _relay_proxy.aclose()
        _relay_proxy = None
