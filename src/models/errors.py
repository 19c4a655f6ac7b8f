"""Error taxonomy shared by the API, the attachment registry and the chat client.

Every error carries a machine-readable ``kind`` and the HTTP status it maps to,
so the API can serialize it and the client can rebuild it from the payload.
"""

from typing import Any


class SafeChatError(Exception):
    """Base error. Used as-is for unexpected failures (500)."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, str]:
        """Serialize to the ``{error, kind[, details]}`` response body."""
        payload = {"error": self.message, "kind": self.kind}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidInput(SafeChatError):
    """Bad input shape, size or type."""

    kind = "invalid_input"
    status_code = 400


class MissingFile(InvalidInput):
    kind = "missing_file"


class FileTooLarge(InvalidInput):
    kind = "file_too_large"


class UnsupportedType(InvalidInput):
    kind = "unsupported_type"


class ExtractionFailure(SafeChatError):
    """Content was received but could not be turned into text."""

    kind = "extraction_failed"
    status_code = 422


class NoExtractableText(ExtractionFailure):
    kind = "no_extractable_text"


class UnreadableDocument(ExtractionFailure):
    kind = "unreadable_document"


class ConfigurationError(SafeChatError):
    kind = "configuration_error"
    status_code = 500


class UpstreamError(SafeChatError):
    """The completion service answered with a non-success status."""

    kind = "upstream_error"

    def __init__(
        self, message: str, *, status_code: int, details: str | None = None
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class RelayTransportError(SafeChatError):
    """The completion service could not be reached."""

    kind = "transport_error"
    status_code = 502


class OperationTimeout(SafeChatError):
    kind = "timeout"
    status_code = 504


class ExtractionTimeout(OperationTimeout):
    pass


class RelayTimeout(OperationTimeout):
    pass


# Most specific class per kind, used when rebuilding errors from payloads
_ERRORS_BY_KIND: dict[str, type[SafeChatError]] = {
    cls.kind: cls
    for cls in (
        SafeChatError,
        InvalidInput,
        MissingFile,
        FileTooLarge,
        UnsupportedType,
        ExtractionFailure,
        NoExtractableText,
        UnreadableDocument,
        ConfigurationError,
        RelayTransportError,
        OperationTimeout,
    )
}


def error_from_payload(status_code: int, payload: Any) -> SafeChatError:
    """Rebuild a typed error from an API error response.

    Args:
        status_code: HTTP status of the response.
        payload: Decoded JSON body (anything, if the body was not ours).

    Returns:
        The matching SafeChatError subclass instance.
    """
    if not isinstance(payload, dict):
        payload = {}
    message = str(payload.get("error") or f"Request failed with status {status_code}")
    details = payload.get("details")
    kind = payload.get("kind")

    if kind == UpstreamError.kind or (kind is None and details is not None):
        return UpstreamError(message, status_code=status_code, details=details)

    error_cls = _ERRORS_BY_KIND.get(kind) if isinstance(kind, str) else None
    if error_cls is None:
        if status_code == 400:
            error_cls = InvalidInput
        elif status_code == 422:
            error_cls = ExtractionFailure
        else:
            error_cls = SafeChatError
    return error_cls(message, details=details)
