"""Runtime configuration read from the Lambda environment."""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    aws_region: str = Field(default="us-west-2", description="Region for AWS clients")
    log_level: str = Field(default="INFO", description="Logging level")

    okta_secrets_manager_id: Optional[str] = Field(
        default=None, description="Secret holding OKTA_ISSUER_URI and OKTA_CLIENT_ID"
    )
    shared_secrets_id: Optional[str] = Field(
        default=None, description="Shared secrets id, overridden per stage"
    )
    shared_gc_secrets_id: Optional[str] = None
    shared_ma_secrets_id: Optional[str] = None
    opensearch_manager_id: Optional[str] = None
    pinot_manager_id: Optional[str] = None

    music_arts_referer_url: Optional[str] = Field(
        default=None, description="Referer that selects the Music & Arts brand"
    )
    default_test_email: str = "donotreply@guitarcenter.com"

    cors_origin: str = "*"
    cors_headers: str = (
        "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token"
    )
    cors_methods: str = "GET,OPTIONS,POST,DELETE,PUT"

    @property
    def cors_headers_list(self) -> List[str]:
        return [header.strip() for header in self.cors_headers.split(",") if header.strip()]

    @property
    def cors_methods_list(self) -> List[str]:
        return [method.strip() for method in self.cors_methods.split(",") if method.strip()]

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def policy_secret_ids(self) -> List[str]:
        """Secret ids the authorizer grants read access to."""
        candidates = (
            self.shared_gc_secrets_id,
            self.shared_ma_secrets_id,
            self.opensearch_manager_id,
            self.pinot_manager_id,
        )
        return [secret_id for secret_id in candidates if secret_id]


@lru_cache
def get_settings() -> Settings:
    return Settings()
