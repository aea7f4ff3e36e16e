import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields are required."
MALFORMED_BODY_MESSAGE = "Malformed request body."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred. Please try again later."

# client errors are answered where detected; the rest goes to the 500 handler
class ContactError(Exception):
    status_code = 400

    @property
    def message(self) -> str:
        return str(self)

    def to_response(self) -> JSONResponse:
        return JSONResponse({"error": self.message}, status_code=self.status_code)

class UploadError(ContactError):
    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    @property
    def message(self) -> str:
        return f"File upload error: {self.detail}"

class MissingFieldsError(ContactError):
    def __init__(self, missing=()):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.missing = tuple(missing)

class MalformedBodyError(ContactError):
    def __init__(self):
        super().__init__(MALFORMED_BODY_MESSAGE)

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": INTERNAL_ERROR_MESSAGE}, status_code=500)
