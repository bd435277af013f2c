"""AWS and upstream service clients."""

from .dynamodb import DynamoDbClient
from .email import SimpleEmailService
from .http_api import ExampleHTTPAPIService
from .identity import OktaTokenVerifier, Unauthorized
from .secrets import SecretsCache, SecretsConfigurationError

__all__ = [
    "DynamoDbClient",
    "ExampleHTTPAPIService",
    "OktaTokenVerifier",
    "SecretsCache",
    "SecretsConfigurationError",
    "SimpleEmailService",
    "Unauthorized",
]
