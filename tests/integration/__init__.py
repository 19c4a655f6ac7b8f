"""Integration tests for components working together as a system.

Real FastAPI app over ASGITransport; only the upstream completion service
is replaced with an httpx.MockTransport.

Coverage:
    - /extract with generated PDFs and text files
    - /chat relay streaming and error passthrough
    - Full flow from upload through attachment to relayed turn
"""
