from __future__ import annotations
import json
import logging
import os
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from .errors import MalformedBodyError, UploadError
from .settings import Settings

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"
CHUNK_SIZE = 64 * 1024
# room for the text fields and multipart framing on top of the image
FORM_OVERHEAD_BYTES = 1024 * 1024

@dataclass
class UploadResult:
    fields: Dict[str, str] = field(default_factory=dict)
    image_path: Optional[str] = None
    image_size: int = 0
    original_filename: Optional[str] = None

class UploadHandler:
    def __init__(self, upload_dir: str, max_bytes: int, allowed_types, allowed_extensions):
        self.upload_dir = upload_dir
        self.max_bytes = max_bytes
        self.allowed_types = {t.lower() for t in allowed_types}
        self.allowed_extensions = {e.lower() for e in allowed_extensions}

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadHandler":
        return cls(
            upload_dir=settings.upload_dir,
            max_bytes=settings.max_upload_bytes,
            allowed_types=settings.allowed_image_types,
            allowed_extensions=settings.allowed_image_extensions,
        )

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    def check_content_length(self, request: Request) -> None:
        # reject before Starlette spools the body to a temp file
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_bytes + FORM_OVERHEAD_BYTES:
            raise UploadError("File too large")

    def generate_name(self, original_filename: str) -> str:
        ext = os.path.splitext(original_filename)[1].lower()
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext}"

    async def handle(self, request: Request) -> UploadResult:
        """Parse the body and store the image, if one was sent.

        Raises UploadError for anything the client can fix: a malformed
        multipart body, an unexpected file field, a disallowed type or an
        oversized file.
        """
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            return UploadResult(fields=await self._json_fields(request))

        self.check_content_length(request)
        try:
            form = await request.form()
        except (MultiPartException, StarletteHTTPException) as e:
            raise UploadError(getattr(e, "message", None) or getattr(e, "detail", None) or str(e)) from e

        try:
            fields: Dict[str, str] = {}
            image: Optional[UploadFile] = None
            for key, value in form.multi_items():
                if isinstance(value, UploadFile):
                    if key != IMAGE_FIELD or image is not None:
                        raise UploadError("Unexpected field")
                    image = value
                else:
                    fields[key] = value
            result = UploadResult(fields=fields)
            # browsers send an empty part when no file was chosen
            if image is not None and image.filename:
                result.image_path, result.image_size = await self.stage(image)
                result.original_filename = image.filename
            return result
        finally:
            await form.close()

    async def stage(self, image: UploadFile):
        ext = os.path.splitext(image.filename or "")[1].lower()
        ctype = (image.content_type or "").split(";")[0].strip().lower()
        if ctype not in self.allowed_types or ext not in self.allowed_extensions:
            raise UploadError(f"File type not allowed: {ctype or 'unknown'} ({ext or 'no extension'})")

        path = os.path.join(self.upload_dir, self.generate_name(image.filename))
        size = 0
        try:
            self.ensure_dir()
            with open(path, "wb") as out:
                while True:
                    chunk = await image.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise UploadError("File too large")
                    out.write(chunk)
        except UploadError:
            self.discard(path)
            raise
        except OSError as e:
            self.discard(path)
            raise UploadError(f"Could not store file: {e.strerror or e}") from e
        return path, size

    def discard(self, path: Optional[str]) -> None:
        if not path:
            return
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove staged upload %s", path, exc_info=True)

    async def _json_fields(self, request: Request) -> Dict[str, str]:
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedBodyError() from e
        if not isinstance(data, dict):
            raise MalformedBodyError()
        fields = {}
        for key, value in data.items():
            if isinstance(value, str):
                fields[key] = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                fields[key] = str(value)
        return fields
