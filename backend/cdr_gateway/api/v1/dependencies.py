"""
API Dependencies
Shared dependencies for settings, the backend HTTP client and the routing engine
"""
from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends, Header, Request

from cdr_gateway.core.config import Settings, get_settings
from cdr_gateway.domain.services.masking_resolver import NumberMaskingResolver
from cdr_gateway.domain.services.retry_policy import RetryPolicy
from cdr_gateway.domain.services.routing_engine import RoutingDecisionEngine
from cdr_gateway.infrastructure.backend import (
    HttpCampaignDirectory,
    HttpCdrStore,
    HttpNumberInventory,
)
from cdr_gateway.infrastructure.classifier import IPQualityScoreClassifier


async def get_http_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """
    Shared AsyncClient created in the application lifespan.

    Falls back to a per-request client when the lifespan did not run.
    """
    client = getattr(request.app.state, "http_client", None)
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient() as client:
        yield client


def get_bearer_token(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> Optional[str]:
    """
    Extract the dashboard user's bearer token for forwarding to the backends.

    Authentication is enforced by the backends themselves; a missing or
    malformed header simply means nothing is forwarded.
    """
    if not authorization:
        return None

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


def get_cdr_store(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
    token: Optional[str] = Depends(get_bearer_token)
) -> HttpCdrStore:
    """CDR backend adapter bound to the caller's token"""
    return HttpCdrStore(
        settings.cdr_api_url,
        http_client,
        auth_token=token,
        timeout=settings.http_timeout_seconds
    )


def get_routing_engine(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
    token: Optional[str] = Depends(get_bearer_token),
    cdr_store: HttpCdrStore = Depends(get_cdr_store)
) -> RoutingDecisionEngine:
    """
    Wire a routing engine for one request.

    Adapters are cheap wrappers over the shared HTTP client; they are built
    per request only so the caller's token can be forwarded.
    """
    config = settings.ingestion_config()

    classifier = IPQualityScoreClassifier(
        api_key=settings.line_classifier_api_key,
        http_client=http_client,
        api_url=settings.line_classifier_api_url,
        timeout=settings.http_timeout_seconds
    )
    campaign_directory = HttpCampaignDirectory(
        settings.campaign_api_url,
        http_client,
        retry_policy=RetryPolicy(
            max_attempts=config.max_retries,
            delay_seconds=config.retry_delay_seconds
        ),
        auth_token=token,
        timeout=settings.http_timeout_seconds
    )
    masking_resolver = NumberMaskingResolver(
        HttpNumberInventory(
            settings.numbers_api_url,
            http_client,
            auth_token=token,
            timeout=settings.http_timeout_seconds
        )
    )

    return RoutingDecisionEngine(
        classifier=classifier,
        campaign_directory=campaign_directory,
        masking_resolver=masking_resolver,
        cdr_store=cdr_store,
        config=config
    )
