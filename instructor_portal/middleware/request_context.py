"""Bind per-request Lambda context onto the ASGI request state."""

from typing import Any, Mapping

from instructor_portal.services.secrets import SecretsCache
from instructor_portal.utils.brand import Brand, resolve_brand

AWS_EVENT_SCOPE_KEY = "aws.event"


def _authorizer_brand(event: Mapping[str, Any]) -> Brand | None:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    # HTTP APIs nest Lambda authorizer context under "lambda"
    brand = authorizer.get("brandId") or (authorizer.get("lambda") or {}).get("brandId")
    return brand or None


class RequestContextMiddleware:
    """Configure shared secrets from stage variables and resolve the brand.

    ``request.state.shared_secrets_id`` and ``request.state.brand_id`` are
    set for every HTTP request. The brand from the authorizer context wins
    over the referer headers.
    """

    def __init__(
        self,
        app: Any,
        secrets: SecretsCache,
        music_arts_referer_url: str | None = None,
    ) -> None:
        self.app = app
        self.secrets = secrets
        self.music_arts_referer_url = music_arts_referer_url

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        event = scope.get(AWS_EVENT_SCOPE_KEY) or {}
        shared_secrets_id = (event.get("stageVariables") or {}).get("SHARED_SECRETS_ID")
        if shared_secrets_id:
            self.secrets.configure(shared_secrets_id=shared_secrets_id)

        headers = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        brand_id = _authorizer_brand(event) or resolve_brand(
            headers, self.music_arts_referer_url
        )

        state = scope.setdefault("state", {})
        state["shared_secrets_id"] = self.secrets.shared_secrets_id
        state["brand_id"] = brand_id
        await self.app(scope, receive, send)
