"""Pass-through relay to the SafePipe completion service.

Responsibilities:
    - Upstream request construction (model, messages, stream, safe_mode)
    - Bearer credential from process configuration
    - Byte-for-byte streaming of the upstream body
    - Mapping of upstream, transport and configuration failures

Safe mode is forwarded as an opaque flag; redaction happens upstream.
"""

from src.relay.config import RelayConfig, get_relay_config
from src.relay.proxy import RelayProxy, close_relay_proxy, get_relay_proxy

__all__ = [
    "RelayConfig",
    "RelayProxy",
    "close_relay_proxy",
    "get_relay_config",
    "get_relay_proxy",
]
