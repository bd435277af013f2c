"""Secrets Manager access with a per-process, per-identifier cache."""

import json
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

log = logging.getLogger(__name__)

DEFAULT_REGION = "us-west-2"


class SecretsConfigurationError(RuntimeError):
    """Raised when shared secrets are requested before an id is configured."""


class SecretsCache:
    """Fetch JSON secrets and keep them for the lifetime of the process.

    Construct one instance per process and pass it to the handlers that
    need it; ``configure`` binds the shared secrets id, which API Gateway
    may override per stage.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        region: str = DEFAULT_REGION,
        shared_secrets_id: str | None = None,
    ) -> None:
        self.client = client or boto3.client("secretsmanager", region_name=region)
        self.shared_secrets_id = shared_secrets_id
        self._cache: dict[str, dict[str, Any]] = {}

    def configure(self, *, shared_secrets_id: str | None = None) -> "SecretsCache":
        if shared_secrets_id:
            self.shared_secrets_id = shared_secrets_id
        return self

    def get_secrets(self, secret_id: str) -> dict[str, Any]:
        """Return the parsed ``SecretString`` of ``secret_id``."""
        cached = self._cache.get(secret_id)
        if cached:
            return cached
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
            secrets = json.loads(response["SecretString"])
        except (BotoCoreError, ClientError, KeyError, ValueError):
            log.exception("Encountered an error trying to fetch and parse secrets %s", secret_id)
            raise
        if secrets:
            self._cache[secret_id] = secrets
        return secrets

    def get_shared_secrets(self) -> dict[str, Any]:
        if not self.shared_secrets_id:
            raise SecretsConfigurationError("Shared secrets id has not been configured.")
        return self.get_secrets(self.shared_secrets_id)

    def clear(self) -> None:
        self._cache.clear()
