"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - async_client: HTTPX client for API testing
    - sample_pdf_bytes / multi_page_pdf_bytes / blank_pdf_bytes: generated PDFs
    - make_pdf: factory for PDFs with arbitrary text lines
    - install_relay: swaps the relay singleton for one backed by a mock upstream
"""

import io
import json
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

import src.relay.proxy as proxy_module
from src.api import app
from src.relay.config import RelayConfig
from src.relay.proxy import RelayProxy

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


def build_pdf(*pages: list[str]) -> bytes:
    """Render one PDF page per argument, one drawString per line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the PDF factory."""
    return build_pdf


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return build_pdf(["Hello PDF World"])


@pytest.fixture
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return build_pdf(["Page one content"], ["Page two content"])


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return build_pdf([])


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def install_relay(monkeypatch: pytest.MonkeyPatch) -> Callable[..., RelayProxy]:
    """Install a relay proxy whose upstream is an httpx.MockTransport handler.

    Returns:
        Function taking the handler and optional RelayConfig overrides.
    """

    def _install(handler: UpstreamHandler, **overrides: object) -> RelayProxy:
        config = RelayConfig(api_key="sk-test-key", **overrides)
        proxy = RelayProxy(config, transport=httpx.MockTransport(handler))
        monkeypatch.setattr(proxy_module, "_relay_proxy", proxy)
        return proxy

    return _install


@pytest.fixture
def no_relay_credential(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the relay singleton is unset and no API key is configured."""
    monkeypatch.delenv("SAFEPIPE_API_KEY", raising=False)
    monkeypatch.setattr(proxy_module, "_relay_proxy", None)


def sse_body(*deltas: str) -> bytes:
    """Build an OpenAI-style SSE body streaming ``deltas``."""
    events = [
        "data: " + json.dumps({"choices": [{"index": 0, "delta": {"content": d}}]})
        for d in deltas
    ]
    events.append("data: [DONE]")
    return ("\n\n".join(events) + "\n\n").encode()
