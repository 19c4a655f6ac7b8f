"""Integration tests for the text extraction endpoint.

Tests the real upload flow with generated files.
"""

from httpx import AsyncClient

from src.models.schemas import ExtractResponse
from src.parsing.extractor import MAX_FILE_SIZE, MAX_TEXT_LENGTH, TRUNCATION_MARKER


class TestExtractSuccess:
    """Integration tests for POST /extract."""

    async def test_extract_pdf(self, async_client: AsyncClient, sample_pdf_bytes: bytes) -> None:
        """Valid PDF returns its text, filename and length."""
        response = await async_client.post(
            "/extract",
            files={"file": ("report.pdf", sample_pdf_bytes, "application/pdf")},
        )

        assert response.status_code == 200

        data = ExtractResponse.model_validate(response.json())
        assert data.success is True
        assert data.text == "Hello PDF World"
        assert data.filename == "report.pdf"
        assert data.length == len(data.text)

    async def test_extract_plain_text(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "text": "hello",
            "filename": "notes.txt",
            "length": 5,
        }

    async def test_extract_markdown_by_extension(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("todo.md", b"- [ ] ship\n", "application/octet-stream")},
        )

        assert response.status_code == 200
        assert response.json()["text"] == "- [ ] ship"

    async def test_extract_truncates_long_text(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("long.csv", b"x" * (MAX_TEXT_LENGTH + 5), "text/csv")},
        )

        data = response.json()
        assert response.status_code == 200
        assert data["text"].endswith(TRUNCATION_MARKER)
        assert data["length"] == MAX_TEXT_LENGTH + len(TRUNCATION_MARKER)


class TestExtractErrors:
    """Tests for error responses from POST /extract."""

    async def test_missing_file_returns_400(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/extract")

        assert response.status_code == 400
        assert response.json() == {"error": "No file provided", "kind": "missing_file"}

    async def test_wrong_form_field_returns_400(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"document": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "missing_file"

    async def test_oversized_file_returns_400(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("large.txt", b"x" * (MAX_FILE_SIZE + 1), "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "file_too_large"
        assert "10MB" in response.json()["error"]

    async def test_unsupported_type_returns_400(self, async_client: AsyncClient) -> None:
        jpeg_header = bytes([0xFF, 0xD8, 0xFF, 0xE0, 0x00, 0x10, 0x4A, 0x46])

        response = await async_client.post(
            "/extract",
            files={"file": ("image.jpg", jpeg_header, "image/jpeg")},
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "unsupported_type"

    async def test_image_only_pdf_returns_422(
        self, async_client: AsyncClient, blank_pdf_bytes: bytes
    ) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("scan.pdf", blank_pdf_bytes, "application/pdf")},
        )

        assert response.status_code == 422
        assert response.json() == {
            "error": "Could not extract text. File may be image-based.",
            "kind": "no_extractable_text",
        }

    async def test_corrupt_pdf_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("fake.pdf", b"%PDF-1.4\n1 0 obj\n<<", "application/pdf")},
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "unreadable_document"

    async def test_empty_text_file_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/extract",
            files={"file": ("empty.txt", b"  \n ", "text/plain")},
        )

        assert response.status_code == 422

    async def test_unexpected_failure_returns_500(
        self, async_client: AsyncClient, monkeypatch
    ) -> None:
        def explode(*args: object) -> None:
            raise RuntimeError("disk on fire")

        monkeypatch.setattr("src.api.extract.extract", explode)

        response = await async_client.post(
            "/extract",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process file", "kind": "internal_error"}

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/extract")

        assert response.status_code == 405

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        """Error responses still carry CORS headers."""
        response = await async_client.post(
            "/extract",
            files={"file": ("image.jpg", b"\xff\xd8", "image/jpeg")},
            headers={"Origin": "http://localhost:3000"},
        )

        assert "access-control-allow-origin" in response.headers


async def test_health(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "safepipe-chat"}
