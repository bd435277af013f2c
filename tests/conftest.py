"""Shared fixtures: settings and in-memory stand-ins for AWS clients."""

import json
from typing import Any

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from instructor_portal.app import create_app
from instructor_portal.config import Settings
from instructor_portal.services.secrets import SecretsCache

MUSIC_ARTS_URL = "https://lessons.musicarts.example/"

SECRETS = {
    "okta-secrets": {
        "OKTA_ISSUER_URI": "https://portal.okta.example",
        "OKTA_CLIENT_ID": "portal-client",
    },
    "shared-gc": {
        "SES_SENDER": "lessons@gc.example",
        "STUDENTS_TABLE_ID": "students-gc",
        "EXAMPLE_API_URL": "https://api.example.com/v1",
    },
    "shared-ma": {
        "SES_SENDER": "lessons@ma.example",
        "STUDENTS_TABLE_ID": "students-ma",
        "TESTING_EMAIL": "qa@ma.example, dev@ma.example",
    },
}


class FakeSecretsManager:
    def __init__(self, secrets: dict[str, dict[str, Any]]) -> None:
        self.secrets = secrets
        self.calls: list[str] = []

    def get_secret_value(self, SecretId: str) -> dict[str, Any]:
        self.calls.append(SecretId)
        if SecretId not in self.secrets:
            raise ClientError(
                {"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}},
                "GetSecretValue",
            )
        return {"SecretString": json.dumps(self.secrets[SecretId])}


class FakeSES:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def _send(self, params: dict[str, Any]) -> dict[str, Any]:
        if self.error:
            raise self.error
        self.sent.append(params)
        return {"MessageId": f"message-{len(self.sent)}"}

    def send_email(self, **params: Any) -> dict[str, Any]:
        return self._send(params)

    def send_templated_email(self, **params: Any) -> dict[str, Any]:
        return self._send(params)


class FakeTable:
    def __init__(self, pages: list[list[dict[str, Any]]]) -> None:
        self.pages = pages
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("scan", kwargs))
        index = kwargs.get("ExclusiveStartKey", {}).get("page", 0)
        response: dict[str, Any] = {"Items": self.pages[index] if self.pages else []}
        if index + 1 < len(self.pages):
            response["LastEvaluatedKey"] = {"page": index + 1}
        return response

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("get_item", kwargs))
        return {"Item": {"id": "1"}}

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("put_item", kwargs))
        return {}

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("update_item", kwargs))
        return {"Attributes": {}}

    def query(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("query", kwargs))
        return {"Items": [], "Count": 0}


class FakeDynamoDB:
    def __init__(self, tables: dict[str, FakeTable] | None = None) -> None:
        self.tables = tables or {}

    def Table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable([]))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        okta_secrets_manager_id="okta-secrets",
        shared_secrets_id="shared-gc",
        shared_gc_secrets_id="shared-gc",
        shared_ma_secrets_id="shared-ma",
        opensearch_manager_id="opensearch",
        pinot_manager_id="pinot",
        music_arts_referer_url=MUSIC_ARTS_URL,
    )


@pytest.fixture
def secrets_client() -> FakeSecretsManager:
    return FakeSecretsManager(SECRETS)


@pytest.fixture
def secrets(secrets_client, settings) -> SecretsCache:
    return SecretsCache(secrets_client, shared_secrets_id=settings.shared_secrets_id)


@pytest.fixture
def ses() -> FakeSES:
    return FakeSES()


@pytest.fixture
def dynamodb() -> FakeDynamoDB:
    return FakeDynamoDB()


@pytest.fixture
def app(settings, secrets, ses, dynamodb):
    return create_app(settings, secrets, ses_client=ses, dynamodb_resource=dynamodb)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def with_lambda_event(app: Any, event: dict[str, Any]) -> Any:
    """Wrap ``app`` so every request scope carries ``event`` like the Lambda adapter."""

    async def wrapped(scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] == "http":
            scope["aws.event"] = event
        await app(scope, receive, send)

    return wrapped


@pytest.fixture
def event_client(app):
    """Return a factory of test clients whose requests carry a Lambda event."""

    def factory(event: dict[str, Any]) -> TestClient:
        return TestClient(with_lambda_event(app, event))

    return factory
