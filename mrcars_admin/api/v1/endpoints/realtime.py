"""Database webhook receiver: turns row-change callbacks into invalidations.

DB_WEBHOOK_SECRET must be set, and callers must send
X-Webhook-Signature-256: sha256=<hmac_sha256(secret, body)>.
"""

import hashlib
import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from mrcars_admin.api.v1.dependencies import get_invalidation_channel
from mrcars_admin.application.interfaces.realtime import IInvalidationChannel
from mrcars_admin.core.config import get_settings
from mrcars_admin.core.limiter import limit_writes
from mrcars_admin.domain.collections import ALL_COLLECTIONS
from mrcars_admin.domain.exceptions import RealtimeNotConfiguredException, ValidationException
from mrcars_admin.schemas.realtime import DatabaseWebhookPayload, WebhookAcceptedResponse

logger = logging.getLogger(__name__)

router = APIRouter()

SIGNATURE_HEADER = "X-Webhook-Signature-256"


def verify_webhook_signature(body: bytes, signature_header: str | None, secret: str) -> bool:
    """Return True if the signature header matches HMAC-SHA256(secret, body)."""
    if not signature_header or not signature_header.startswith("sha256="):
        return False
    expected = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature_header[7:].strip(), expected)


@router.post("/webhook", response_model=WebhookAcceptedResponse, status_code=202)
@limit_writes
async def database_webhook(
    request: Request,
    channel: Annotated[IInvalidationChannel | None, Depends(get_invalidation_channel)],
) -> WebhookAcceptedResponse:
    """Publish an invalidation for the changed table.

    Payload is not forwarded: subscribers only learn the collection changed.
    """
    settings = get_settings()
    if settings.db_webhook_secret is None or not settings.db_webhook_secret.get_secret_value():
        raise RealtimeNotConfiguredException()
    body = await request.body()
    secret = settings.db_webhook_secret.get_secret_value()
    if not verify_webhook_signature(body, request.headers.get(SIGNATURE_HEADER), secret):
        raise HTTPException(status_code=401, detail="Invalid or missing webhook signature")
    try:
        payload = DatabaseWebhookPayload.model_validate_json(body)
    except ValidationError as e:
        raise ValidationException(f"Invalid webhook payload: {e.error_count()} error(s)") from e
    if payload.table not in ALL_COLLECTIONS:
        logger.info("Webhook for untracked table %s ignored", payload.table)
        return WebhookAcceptedResponse(collection=payload.table, published=False)
    published = False
    if channel is not None:
        published = await channel.publish(payload.table, payload.type)
    logger.info("Invalidation %s on %s (published=%s)", payload.type, payload.table, published)
    return WebhookAcceptedResponse(collection=payload.table, published=published)
