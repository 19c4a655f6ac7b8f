"""FastAPI endpoints for SafePipe Chat.

HTTP and streaming routes with async request handling.

Endpoints:
    - GET /health: Service health status
    - POST /extract: Text extraction from an uploaded document
    - POST /chat: Streamed relay to the completion service
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
