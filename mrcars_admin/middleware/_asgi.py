"""Shared helpers for the raw ASGI middlewares."""

import json
from typing import Any, Callable

from starlette.requests import cookie_parser


def get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def get_cookies(scope: dict) -> dict[str, str]:
    """Parse the Cookie header of an ASGI scope (empty dict if absent)."""
    raw = get_header(scope, "cookie")
    return cookie_parser(raw) if raw else {}


async def send_json(send: Callable, status: int, payload: dict[str, Any]) -> None:
    """Send a complete JSON response on a raw ASGI send channel."""
    body = json.dumps(payload).encode()
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
    })
    await send({
        "type": "http.response.body",
        "body": body,
        "more_body": False,
    })
