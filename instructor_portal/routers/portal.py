"""Instructor portal HTTP routes."""

import html
import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse

from instructor_portal.config import Settings
from instructor_portal.core.document import ResponseDocumentBuilder
from instructor_portal.core.errors import JSONAPIErrorBuilder
from instructor_portal.services.dynamodb import DynamoDbClient
from instructor_portal.services.email import SimpleEmailService
from instructor_portal.services.secrets import SecretsCache

log = logging.getLogger(__name__)

router = APIRouter()

TEST_EMAIL_SUBJECT = "Test Email from Lambda"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_secrets(request: Request) -> SecretsCache:
    return request.app.state.secrets


def get_email_service(
    request: Request, secrets: SecretsCache = Depends(get_secrets)
) -> SimpleEmailService:
    return SimpleEmailService(
        secrets,
        client=request.app.state.ses_client,
        region=request.app.state.settings.aws_region,
    )


def lambda_event(request: Request) -> dict[str, Any]:
    """Return the raw API Gateway event behind this request, if any."""
    return request.scope.get("aws.event") or {}


def _recipients(raw: str) -> list[str]:
    return [address.strip() for address in raw.split(",") if address.strip()]


@router.get("/hello")
async def hello(request: Request) -> dict[str, Any]:
    return {"message": "Hello World!", "input": lambda_event(request)}


@router.get("/email-test")
def email_test(
    request: Request,
    email: str | None = None,
    settings: Settings = Depends(get_settings),
    secrets: SecretsCache = Depends(get_secrets),
    mailer: SimpleEmailService = Depends(get_email_service),
) -> Any:
    """Send a test email to the configured or requested recipients."""
    event = lambda_event(request)
    try:
        shared_secrets = secrets.get_shared_secrets()
        recipients = _recipients(
            shared_secrets.get("TESTING_EMAIL")
            or email
            or settings.default_test_email
        )
        receipt = mailer.send_email(
            recipients,
            TEST_EMAIL_SUBJECT,
            "<html><head></head><body>"
            "<p>This is a test email from Lambda. You sent this from instructor portal.</p>"
            "<p>here is the lambda event: </p>"
            f"<code>{html.escape(json.dumps(event, indent=2, default=str))}</code>"
            "</body></html>",
        )
    except (BotoCoreError, ClientError) as exc:
        log.exception("Test email could not be sent")
        errors = JSONAPIErrorBuilder()
        return JSONResponse(
            errors.error_document([errors.from_exception(exc, status=500)]),
            status_code=500,
        )
    return {"message": receipt, "input": event}


@router.get("/students")
def list_students(
    request: Request, secrets: SecretsCache = Depends(get_secrets)
) -> dict[str, Any]:
    """Return every student record as a JSON:API collection."""
    table = secrets.get_shared_secrets()["STUDENTS_TABLE_ID"]
    students = DynamoDbClient(table, resource=request.app.state.dynamodb_resource)
    return ResponseDocumentBuilder("students", students.read_all()).format_as_response()
