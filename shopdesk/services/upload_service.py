"""
ShopDesk Backend: Upload Adapter
================================

What:  Turns a request body into a plain field map plus an optional image.
Who:   Used by the product create/update routes and the user routes.
When:  Once per request, before the service call.

Body handling by content type:
    multipart/form-data                 → fields from text parts, file from file parts
    application/json                    → fields from the top-level JSON object
    application/x-www-form-urlencoded   → fields from the form parser
    anything else (or no body)          → no fields, no file

File parts:
    Each file part is read completely into memory; nothing is streamed to
    disk and no size cap is applied here. When a body carries several file
    parts the last one wins. A file input the user left empty arrives as a
    part with no filename and no bytes and is treated as "no file".
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from starlette.datastructures import UploadFile
from starlette.requests import Request

from shopdesk.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class ParsedUpload:
    """Result of parsing one request body."""
    fields: Dict[str, Any] = field(default_factory=dict)
    file: Optional[bytes] = None


class UploadService:
    """Stateless request body parser."""

    async def parse(self, request: Request) -> ParsedUpload:
        content_type = request.headers.get("content-type", "").lower()

        if content_type.startswith("multipart/form-data"):
            return await self._parse_multipart(request)
        if content_type.startswith("application/json"):
            return ParsedUpload(fields=await self._parse_json(request))
        if content_type.startswith("application/x-www-form-urlencoded"):
            form = await request.form()
            return ParsedUpload(fields={key: value for key, value in form.items()})
        return ParsedUpload()

    async def _parse_multipart(self, request: Request) -> ParsedUpload:
        upload = ParsedUpload()
        file_parts = 0

        form = await request.form()
        try:
            for name, value in form.multi_items():
                if not isinstance(value, UploadFile):
                    upload.fields[name] = value
                    continue

                content = await value.read()
                if not value.filename and not content:
                    continue
                file_parts += 1
                upload.file = content
        finally:
            await form.close()

        if file_parts > 1:
            logger.warning(
                "Multipart body carried %d file parts; keeping the last one", file_parts
            )
        logger.debug(
            "Parsed multipart body: fields=%s, file=%s bytes",
            sorted(upload.fields),
            len(upload.file) if upload.file is not None else None,
        )
        return upload

    async def _parse_json(self, request: Request) -> Dict[str, Any]:
        body = await request.body()
        if not body.strip():
            return {}
        try:
            data = json.loads(body)
        except ValueError:
            raise ValidationError(message="Request body is not valid JSON")
        if not isinstance(data, dict):
            raise ValidationError(message="Request body must be a JSON object")
        return data


# Stateless; one instance serves every request
upload_service = UploadService()


async def get_upload(request: Request) -> ParsedUpload:
    """FastAPI dependency wrapper around upload_service.parse()."""
    return await upload_service.parse(request)
