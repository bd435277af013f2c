"""API Gateway REQUEST authorizer backed by Okta ID tokens.

The bearer token is verified against the Okta issuer's signing keys. A
valid token yields an Allow policy scoped to the calling API stage and the
tables and secrets the portal handlers use; a token that fails verification
yields a Deny policy. A missing or malformed Authorization header raises
``Unauthorized`` so API Gateway answers 401.
"""

import logging
import re
from functools import lru_cache
from typing import Any, Callable

from instructor_portal.config import Settings, get_settings
from instructor_portal.schemas.policy import (
    AuthorizerResponse,
    PolicyDocument,
    PolicyStatement,
)
from instructor_portal.services.identity import OktaTokenVerifier, Unauthorized
from instructor_portal.services.secrets import SecretsCache, SecretsConfigurationError
from instructor_portal.utils.arn import api_stage, extract_arn_path
from instructor_portal.utils.brand import resolve_brand

log = logging.getLogger(__name__)

BEARER_PATTERN = re.compile(r"^Bearer .+$", re.IGNORECASE)

DYNAMODB_STREAM_ACTIONS = [
    "dynamodb:GetShardIterator",
    "dynamodb:Scan",
    "dynamodb:Query",
    "dynamodb:DescribeStream",
    "dynamodb:GetRecords",
    "dynamodb:ListStreams",
]
DYNAMODB_TABLE_ACTIONS = [
    "dynamodb:BatchGetItem",
    "dynamodb:BatchWriteItem",
    "dynamodb:ConditionCheckItem",
    "dynamodb:PutItem",
    "dynamodb:DescribeTable",
    "dynamodb:DeleteItem",
    "dynamodb:GetItem",
    "dynamodb:Scan",
    "dynamodb:Query",
    "dynamodb:UpdateItem",
]

VerifierFactory = Callable[[str, str], OktaTokenVerifier]


def _bearer_token(headers: dict[str, Any]) -> str:
    # API Gateway keeps header case for REST APIs, so both spellings occur
    authorization = headers.get("authorization") or headers.get("Authorization")
    if not authorization:
        raise Unauthorized("Missing Authorization Header")
    if not BEARER_PATTERN.match(authorization):
        log.error("Invalid token format: %r", authorization)
        raise Unauthorized("Invalid token format")
    return authorization.split(" ", 1)[1].strip()


def allow_policy(
    principal_id: str, method_arn: str, brand_id: str, secret_ids: list[str]
) -> AuthorizerResponse:
    arn = extract_arn_path(method_arn)
    region, account = arn["region"], arn["accountId"]
    stage = api_stage(method_arn)
    statements = [
        PolicyStatement(
            action="execute-api:Invoke",
            effect="Allow",
            resource=f"arn:aws:execute-api:{region}:{account}:{arn['apiId']}/{stage}/*/*",
        ),
        PolicyStatement(
            action=DYNAMODB_STREAM_ACTIONS,
            effect="Allow",
            resource=[f"arn:aws:dynamodb:{region}:{account}:table/*/*"],
        ),
        PolicyStatement(
            action=DYNAMODB_TABLE_ACTIONS,
            effect="Allow",
            resource=[f"arn:aws:dynamodb:{region}:{account}:table/*"],
        ),
    ]
    if secret_ids:
        statements.append(
            PolicyStatement(
                action=["secretsmanager:GetSecretValue"],
                effect="Allow",
                resource=[
                    f"arn:aws:secretsmanager:{region}:{account}:secret:{secret_id}-*"
                    for secret_id in secret_ids
                ],
            )
        )
    return AuthorizerResponse(
        principal_id=principal_id,
        policy_document=PolicyDocument(statement=statements),
        context={"brandId": brand_id},
    )


def deny_policy(method_arn: str) -> AuthorizerResponse:
    return AuthorizerResponse(
        principal_id="unauthorized",
        policy_document=PolicyDocument(
            statement=[
                PolicyStatement(
                    action="execute-api:Invoke", effect="Deny", resource=method_arn
                )
            ]
        ),
    )


class Authorizer:
    """Callable Lambda handler holding its settings and secrets cache."""

    def __init__(
        self,
        settings: Settings,
        secrets: SecretsCache,
        verifier_factory: VerifierFactory = OktaTokenVerifier,
    ) -> None:
        self.settings = settings
        self.secrets = secrets
        self.verifier_factory = verifier_factory

    def __call__(self, event: dict[str, Any], _context: Any = None) -> dict[str, Any]:
        headers = event.get("headers") or {}
        method_arn = event.get("methodArn", "")
        token = _bearer_token(headers)

        if not self.settings.okta_secrets_manager_id:
            raise SecretsConfigurationError("OKTA_SECRETS_MANAGER_ID is not set.")
        okta = self.secrets.get_secrets(self.settings.okta_secrets_manager_id)
        verifier = self.verifier_factory(okta["OKTA_ISSUER_URI"], okta["OKTA_CLIENT_ID"])
        try:
            claims = verifier.verify_id_token(token)
            brand_id = resolve_brand(headers, self.settings.music_arts_referer_url)
            response = allow_policy(
                claims["sub"], method_arn, brand_id, self.settings.policy_secret_ids
            )
        except Exception as exc:  # noqa: BLE001 - any failure denies access
            log.error("Unable to verify token: %s", exc)
            response = deny_policy(method_arn)
        return response.to_response()


@lru_cache(maxsize=1)
def get_authorizer() -> Authorizer:
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    return Authorizer(settings, SecretsCache(region=settings.aws_region))


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return get_authorizer()(event, context)
