"""FastAPI application factory for the instructor portal API."""

import logging
from typing import Any

import boto3
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from instructor_portal.config import Settings, get_settings
from instructor_portal.middleware import ErrorHandlerMiddleware, RequestContextMiddleware
from instructor_portal.routers import router
from instructor_portal.services.secrets import SecretsCache


def create_app(
    settings: Settings | None = None,
    secrets: SecretsCache | None = None,
    *,
    ses_client: Any = None,
    dynamodb_resource: Any = None,
) -> FastAPI:
    """Build the API with its middleware stack and injected services.

    Middleware runs outermost first: CORS, error handling, then request
    context binding, so error responses still carry CORS headers.
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level)
    secrets = secrets or SecretsCache(
        region=settings.aws_region, shared_secrets_id=settings.shared_secrets_id
    )

    app = FastAPI(title="Instructor Portal API")
    app.state.settings = settings
    app.state.secrets = secrets
    app.state.ses_client = ses_client
    app.state.dynamodb_resource = dynamodb_resource or boto3.resource(
        "dynamodb", region_name=settings.aws_region
    )

    app.add_middleware(
        RequestContextMiddleware,
        secrets=secrets,
        music_arts_referer_url=settings.music_arts_referer_url,
    )
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_headers=settings.cors_headers_list,
        allow_methods=settings.cors_methods_list,
    )
    app.include_router(router)
    return app
