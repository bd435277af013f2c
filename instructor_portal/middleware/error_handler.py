"""Convert uncaught exceptions into JSON:API error responses."""

import logging
from typing import Any

from starlette.responses import JSONResponse

from instructor_portal.core.errors import JSONAPIErrorBuilder
from instructor_portal.core.exceptions import DocumentError
from instructor_portal.schemas.resource import JSONAPIErrorDocument
from instructor_portal.services.identity import Unauthorized

log = logging.getLogger(__name__)

FALLBACK_MESSAGE = "An unknown error occurred."


class ErrorHandlerMiddleware:
    """Log exceptions and serialize them as JSON:API error documents.

    Document errors are client errors (400) and ``Unauthorized`` maps to
    401; anything else is answered with a 500 carrying a fallback message.
    """

    def __init__(self, app: Any, fallback_message: str = FALLBACK_MESSAGE) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.fallback_message = fallback_message
        self.errors = JSONAPIErrorBuilder()

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            log.exception("Unhandled error for %s %s", scope.get("method"), scope.get("path"))
            if response_started:
                raise
            response = self.error_response(exc)
            await response(scope, receive, send)

    def error_response(self, exc: Exception) -> JSONResponse:
        if isinstance(exc, DocumentError):
            status, detail = 400, str(exc)
        elif isinstance(exc, Unauthorized):
            status, detail = 401, str(exc)
        else:
            status, detail = 500, self.fallback_message
        error = self.errors.from_exception(exc, status=status, detail=detail)
        document = JSONAPIErrorDocument.model_validate(self.errors.error_document([error]))
        return JSONResponse(document.model_dump(exclude_none=True), status_code=status)
