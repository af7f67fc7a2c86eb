"""
ShopDesk Backend: Upload Adapter Unit Tests
===========================================

What:  Tests for UploadService body parsing across content types.
How:   httpx builds real request bodies (including multipart boundaries);
       the bytes are replayed into a Starlette Request.
"""

import httpx
import pytest
from starlette.requests import Request

from shopdesk.exceptions import ValidationError
from shopdesk.services.upload_service import UploadService


def build_request(**kwargs) -> Request:
    """Encode a body with httpx and wrap it in a Starlette Request."""
    outgoing = httpx.Request("POST", "http://test/addProduct", **kwargs)
    body = outgoing.read()

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/addProduct",
        "query_string": b"",
        "headers": [(k.lower(), v) for k, v in outgoing.headers.raw],
    }
    return Request(scope, receive)


class TestMultipart:

    def setup_method(self):
        self.service = UploadService()

    @pytest.mark.asyncio
    async def test_fields_and_file(self, rice_fields, sample_image_bytes):
        request = build_request(
            data=rice_fields,
            files={"image": ("rice.jpg", sample_image_bytes, "image/jpeg")},
        )

        upload = await self.service.parse(request)

        assert upload.fields == rice_fields
        assert upload.file == sample_image_bytes

    @pytest.mark.asyncio
    async def test_fields_without_file(self, rice_fields):
        request = build_request(
            data=rice_fields,
            files={"other": ("notes.txt", b"", "text/plain")},
        )
        # Empty file part with a filename is still a file
        upload = await self.service.parse(request)
        assert upload.fields["name"] == "Rice"
        assert upload.file == b""

    @pytest.mark.asyncio
    async def test_last_file_wins(self, sample_image_bytes, sample_png_bytes):
        request = build_request(
            data={"name": "Rice"},
            files=[
                ("image", ("first.jpg", sample_image_bytes, "image/jpeg")),
                ("image", ("second.png", sample_png_bytes, "image/png")),
            ],
        )

        upload = await self.service.parse(request)

        assert upload.file == sample_png_bytes

    @pytest.mark.asyncio
    async def test_untouched_file_input_is_no_file(self):
        request = build_request(
            data={"name": "Rice"},
            files={"image": ("", b"", "application/octet-stream")},
        )

        upload = await self.service.parse(request)

        assert upload.file is None
        assert upload.fields["name"] == "Rice"


class TestNonMultipart:

    def setup_method(self):
        self.service = UploadService()

    @pytest.mark.asyncio
    async def test_json_object(self):
        request = build_request(json={"name": "Rice", "price": 50})

        upload = await self.service.parse(request)

        assert upload.fields == {"name": "Rice", "price": 50}
        assert upload.file is None

    @pytest.mark.asyncio
    async def test_json_empty_body(self):
        request = build_request(content=b"", headers={"Content-Type": "application/json"})
        upload = await self.service.parse(request)
        assert upload.fields == {}

    @pytest.mark.asyncio
    async def test_json_array_rejected(self):
        request = build_request(json=[1, 2, 3])
        with pytest.raises(ValidationError, match="JSON object"):
            await self.service.parse(request)

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self):
        request = build_request(content=b"{not json", headers={"Content-Type": "application/json"})
        with pytest.raises(ValidationError, match="not valid JSON"):
            await self.service.parse(request)

    @pytest.mark.asyncio
    async def test_urlencoded(self):
        request = build_request(data={"username": "asha", "password": "pw"})

        upload = await self.service.parse(request)

        assert upload.fields == {"username": "asha", "password": "pw"}
        assert upload.file is None

    @pytest.mark.asyncio
    async def test_other_content_type_is_empty(self):
        request = build_request(content=b"plain words", headers={"Content-Type": "text/plain"})
        upload = await self.service.parse(request)
        assert upload.fields == {}
        assert upload.file is None
