"""Chat client - session logic plus a thin NiceGUI page.

Responsibilities:
    - HTTP client for /extract and /chat
    - Per-page session: conversation, attachments, safe mode
    - Chat page wiring (layout only, no business logic)

The session holds no presentation code so it can run without a browser.
"""
