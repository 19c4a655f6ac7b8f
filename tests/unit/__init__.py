"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - parsing/: Validation, PDF cleanup, decoding and truncation
    - attachments/: Status machine, registry interleavings, composition
    - relay/: Configuration and upstream streaming
    - ui/: HTTP client and chat session wiring

Uses mock transports for HTTP. Leverages pytest-check for multiple
assertions per test.
"""
