"""SafePipe Chat - chat front-end with document-enriched turns.

Combines FastAPI for HTTP streaming, pypdf for document text extraction,
httpx for the upstream relay, NiceGUI for the chat page, and Pydantic for
data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - parsing: Document validation and text extraction
    - attachments: Attachment lifecycle and submission composition
    - relay: Pass-through relay to the completion service
    - ui: Chat client session and web interface
    - models: Request/response schemas, conversation, error taxonomy
"""

__version__ = "0.1.0"
