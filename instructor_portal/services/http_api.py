"""JSON HTTP API client configured from shared secrets."""

from typing import Any
from urllib.parse import urlsplit

import requests

from .secrets import SecretsCache

EXAMPLE_ROUTE_PATH = "/example/api/route/path"


class ExampleHTTPAPIService:
    """Call the example upstream API named by ``EXAMPLE_API_URL``."""

    def __init__(
        self, secrets: SecretsCache, session: requests.Session | None = None, timeout: float = 10.0
    ) -> None:
        self.secrets = secrets
        self.session = session or requests.Session()
        self.timeout = timeout
        self.endpoint: str | None = None

    def init(self) -> None:
        endpoint = self.secrets.get_shared_secrets()["EXAMPLE_API_URL"]
        parts = urlsplit(endpoint)
        self.endpoint = f"{parts.scheme}://{parts.netloc}"

    def get_route(self, data: Any = None) -> Any:
        self.init()
        response = self.session.request(
            "GET",
            f"{self.endpoint}{EXAMPLE_ROUTE_PATH}",
            json=data,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
