"""Realtime webhook schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class DatabaseWebhookPayload(BaseModel):
    """Body posted by a database webhook on row changes."""

    type: Literal["INSERT", "UPDATE", "DELETE"]
    table: str = Field(..., min_length=1)
    schema_: str = Field(default="public", alias="schema")
    record: dict[str, Any] | None = None
    old_record: dict[str, Any] | None = None


class WebhookAcceptedResponse(BaseModel):
    status: str = "accepted"
    collection: str
    published: bool = Field(..., description="False if the transport was unavailable")
