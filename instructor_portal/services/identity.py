"""Okta ID token verification."""

import logging
from typing import Any

import jwt

log = logging.getLogger(__name__)


class Unauthorized(Exception):
    """Raised when a request carries no usable bearer token."""

    def __init__(self, reason: str = "") -> None:
        message = f"Unauthorized - {reason}" if reason else "Unauthorized"
        super().__init__(message)


class OktaTokenVerifier:
    """Verify Okta-issued ID tokens against the issuer's signing keys."""

    algorithms = ["RS256"]

    def __init__(self, issuer: str, client_id: str, jwks_client: Any = None) -> None:
        self.issuer = issuer.rstrip("/")
        self.client_id = client_id
        self.jwks_client = jwks_client or jwt.PyJWKClient(f"{self.issuer}/oauth2/v1/keys")

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """Return the token claims; raise ``jwt.InvalidTokenError`` when invalid."""
        signing_key = self.jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=self.algorithms,
            audience=self.client_id,
            issuer=self.issuer,
            options={"require": ["exp", "sub", "aud", "iss"]},
        )
