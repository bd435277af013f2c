"""Tests for the Okta-backed API Gateway authorizer."""

import time
from types import SimpleNamespace

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from instructor_portal.handlers.authorizer import Authorizer
from instructor_portal.services.identity import OktaTokenVerifier, Unauthorized
from instructor_portal.services.secrets import SecretsConfigurationError

from conftest import MUSIC_ARTS_URL

METHOD_ARN = "arn:aws:execute-api:us-west-2:123456789012:1234567890/Prod/GET/employees/120109"
ISSUER = "https://portal.okta.example"
CLIENT_ID = "portal-client"


class FakeVerifier:
    created: list[tuple[str, str]] = []

    def __init__(self, issuer, client_id):
        FakeVerifier.created.append((issuer, client_id))

    def verify_id_token(self, token):
        if token != "good-token":
            raise jwt.InvalidSignatureError("Signature verification failed")
        return {"sub": "00u1instructor"}


@pytest.fixture
def authorizer(settings, secrets):
    FakeVerifier.created = []
    return Authorizer(settings, secrets, verifier_factory=FakeVerifier)


def event(headers, method_arn=METHOD_ARN):
    return {"type": "REQUEST", "methodArn": method_arn, "headers": headers}


class TestAuthorizer:
    def test_missing_header(self, authorizer):
        with pytest.raises(Unauthorized, match="Missing Authorization Header"):
            authorizer(event({}))

    def test_missing_headers_entirely(self, authorizer):
        with pytest.raises(Unauthorized):
            authorizer({"methodArn": METHOD_ARN, "headers": None})

    @pytest.mark.parametrize("value", ["good-token", "Basic abc", "Bearer ", "Bearer"])
    def test_invalid_format(self, authorizer, value):
        with pytest.raises(Unauthorized, match="Invalid token format"):
            authorizer(event({"Authorization": value}))

    def test_allow_policy(self, authorizer, settings):
        response = authorizer(event({"authorization": "Bearer good-token"}))
        assert FakeVerifier.created == [(ISSUER, CLIENT_ID)]
        assert response["principalId"] == "00u1instructor"
        assert response["context"] == {"brandId": "gc"}
        policy = response["policyDocument"]
        assert policy["Version"] == "2012-10-17"
        invoke, streams, tables, secrets = policy["Statement"]
        assert invoke == {
            "Action": "execute-api:Invoke",
            "Effect": "Allow",
            "Resource": "arn:aws:execute-api:us-west-2:123456789012:1234567890/Prod/*/*",
        }
        assert streams["Resource"] == ["arn:aws:dynamodb:us-west-2:123456789012:table/*/*"]
        assert "dynamodb:GetRecords" in streams["Action"]
        assert tables["Resource"] == ["arn:aws:dynamodb:us-west-2:123456789012:table/*"]
        assert "dynamodb:PutItem" in tables["Action"]
        assert secrets == {
            "Action": ["secretsmanager:GetSecretValue"],
            "Effect": "Allow",
            "Resource": [
                f"arn:aws:secretsmanager:us-west-2:123456789012:secret:{secret_id}-*"
                for secret_id in ("shared-gc", "shared-ma", "opensearch", "pinot")
            ],
        }

    def test_allow_policy_is_scoped_to_any_stage_name(self, authorizer):
        method_arn = "arn:aws:execute-api:us-west-2:123456789012:abc123/dev/GET/students"
        response = authorizer(event({"authorization": "Bearer good-token"}, method_arn))
        invoke = response["policyDocument"]["Statement"][0]
        assert invoke["Effect"] == "Allow"
        assert invoke["Resource"] == "arn:aws:execute-api:us-west-2:123456789012:abc123/dev/*/*"

    @pytest.mark.parametrize(
        "method_arn",
        [
            "arn:aws:execute-api:us-west-2:123456789012:abc123",
            "arn:aws:execute-api:us-west-2:123456789012:abc123/*/GET/students",
        ],
    )
    def test_method_arn_without_stage_is_denied(self, authorizer, method_arn):
        response = authorizer(event({"authorization": "Bearer good-token"}, method_arn))
        assert response["principalId"] == "unauthorized"
        assert response["policyDocument"]["Statement"] == [
            {"Action": "execute-api:Invoke", "Effect": "Deny", "Resource": method_arn}
        ]

    def test_bearer_scheme_is_case_insensitive(self, authorizer):
        response = authorizer(event({"Authorization": "bearer good-token"}))
        assert response["principalId"] == "00u1instructor"

    @pytest.mark.parametrize(
        "headers",
        [
            {"Referer": MUSIC_ARTS_URL},
            {"X-Referer-Override": MUSIC_ARTS_URL, "Referer": "https://gc.example/"},
        ],
    )
    def test_music_arts_brand(self, authorizer, headers):
        response = authorizer(event({"Authorization": "Bearer good-token", **headers}))
        assert response["context"] == {"brandId": "ma"}

    def test_invalid_token_is_denied(self, authorizer):
        response = authorizer(event({"Authorization": "Bearer forged-token"}))
        assert response == {
            "principalId": "unauthorized",
            "policyDocument": {
                "Version": "2012-10-17",
                "Statement": [
                    {"Action": "execute-api:Invoke", "Effect": "Deny", "Resource": METHOD_ARN}
                ],
            },
        }

    def test_unparseable_method_arn_is_denied(self, authorizer):
        response = authorizer(event({"Authorization": "Bearer good-token"}, "not-an-arn"))
        assert response["principalId"] == "unauthorized"

    def test_okta_secrets_id_required(self, settings, secrets):
        settings.okta_secrets_manager_id = None
        with pytest.raises(SecretsConfigurationError):
            Authorizer(settings, secrets, FakeVerifier)(event({"Authorization": "Bearer good-token"}))


class TestOktaTokenVerifier:
    @pytest.fixture
    def private_key(self):
        return rsa.generate_private_key(public_exponent=65537, key_size=2048)

    @pytest.fixture
    def verifier(self, private_key):
        jwks_client = SimpleNamespace(
            get_signing_key_from_jwt=lambda token: SimpleNamespace(key=private_key.public_key())
        )
        return OktaTokenVerifier(ISSUER + "/", CLIENT_ID, jwks_client=jwks_client)

    def token(self, private_key, **claims):
        payload = {"sub": "00u1", "aud": CLIENT_ID, "iss": ISSUER, "exp": int(time.time()) + 300}
        payload.update(claims)
        return jwt.encode(payload, private_key, algorithm="RS256")

    def test_valid_token(self, verifier, private_key):
        assert verifier.verify_id_token(self.token(private_key))["sub"] == "00u1"

    def test_wrong_audience(self, verifier, private_key):
        with pytest.raises(jwt.InvalidAudienceError):
            verifier.verify_id_token(self.token(private_key, aud="someone-else"))

    def test_expired(self, verifier, private_key):
        with pytest.raises(jwt.ExpiredSignatureError):
            verifier.verify_id_token(self.token(private_key, exp=int(time.time()) - 600))

    def test_other_signer(self, verifier):
        other = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        with pytest.raises(jwt.InvalidSignatureError):
            verifier.verify_id_token(self.token(other))
