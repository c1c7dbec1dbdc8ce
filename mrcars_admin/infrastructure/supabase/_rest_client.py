"""Thin PostgREST client for the hosted Supabase database (no supabase-py).

Renders Query objects into PostgREST URL filters and runs them over a
shared httpx.AsyncClient so calls do not block the event loop. Exact
counts use ``Prefer: count=exact`` and are read back from Content-Range;
count-only queries are sent as HEAD so no rows are transferred.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import httpx

from mrcars_admin.application.dtos.query import QueryResult
from mrcars_admin.domain.exceptions import StoreException

if TYPE_CHECKING:
    from mrcars_admin.application.dtos.query import Filter, Query

logger = logging.getLogger(__name__)

_REST_PATH = "/rest/v1"
_RESERVED = set(',()"')


def _encode_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _encode_list_item(value: Any) -> str:
    text = _encode_scalar(value)
    if any(ch in _RESERVED for ch in text):
        escaped = text.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return text


def render_filter(flt: Filter) -> tuple[str, str]:
    """Render one Filter as a PostgREST (column, "op.value") query param."""
    if flt.op == "in":
        items = ",".join(_encode_list_item(v) for v in flt.value)
        return flt.column, f"in.({items})"
    if flt.value is None and flt.op in ("eq", "neq"):
        return flt.column, "is.null" if flt.op == "eq" else "not.is.null"
    return flt.column, f"{flt.op}.{_encode_scalar(flt.value)}"


def render_query(query: Query) -> list[tuple[str, str]]:
    """Render a Query as an ordered list of query params (repeats allowed)."""
    params: list[tuple[str, str]] = [("select", query.columns)]
    params.extend(render_filter(f) for f in query.filters)
    if query.order is not None and not query.count_only:
        direction = "desc" if query.order.descending else "asc"
        nulls = ".nullslast" if query.order.nulls_last else ""
        params.append(("order", f"{query.order.column}.{direction}{nulls}"))
    if query.limit is not None and not query.count_only:
        params.append(("limit", str(query.limit)))
    return params


def parse_content_range(header: str | None) -> int | None:
    """Total from a Content-Range header (``0-9/120`` or ``*/0``); None if unknown."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1].strip()
    return int(total) if total.isdigit() else None


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


class SupabaseRESTClient:
    """ICollectionStore over PostgREST."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base = base_url.rstrip("/") + _REST_PATH
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        collection: str,
        params: list[tuple[str, str]],
        *,
        prefer: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = f"{self._base}/{collection}"
        try:
            resp = await self._http.request(
                method, url, params=params, headers=self._headers(prefer), json=json
            )
        except httpx.HTTPError as e:
            raise StoreException(
                f"{method} {collection} failed: {e}", collection=collection
            ) from e
        if resp.status_code >= 400:
            raise StoreException(
                _error_message(resp), collection=collection, status_code=resp.status_code
            )
        return resp

    async def fetch(self, query: Query) -> QueryResult:
        """Run a read query; rows and/or exact count per query flags."""
        params = render_query(query)
        prefer = "count=exact" if query.with_count or query.count_only else None
        method = "HEAD" if query.count_only else "GET"
        resp = await self._request(method, query.collection, params, prefer=prefer)
        count = parse_content_range(resp.headers.get("content-range")) if prefer else None
        if query.count_only:
            logger.debug("Counted %s: %s", query.collection, count)
            return QueryResult(rows=[], count=count)
        rows = resp.json() if resp.content else []
        if not isinstance(rows, list):
            raise StoreException(
                "Unexpected response shape", collection=query.collection, status_code=resp.status_code
            )
        return QueryResult(rows=rows, count=count)

    async def update(
        self, collection: str, values: dict[str, Any], filters: tuple[Filter, ...]
    ) -> None:
        """PATCH every row matching filters. Unfiltered writes are refused."""
        if not filters:
            raise StoreException("Refusing unfiltered update", collection=collection)
        payload = {k: _encode_scalar(v) if isinstance(v, (datetime, date)) else v for k, v in values.items()}
        await self._request(
            "PATCH",
            collection,
            [render_filter(f) for f in filters],
            prefer="return=minimal",
            json=payload,
        )

    async def delete(self, collection: str, filters: tuple[Filter, ...]) -> None:
        """DELETE every row matching filters. Unfiltered deletes are refused."""
        if not filters:
            raise StoreException("Refusing unfiltered delete", collection=collection)
        await self._request(
            "DELETE",
            collection,
            [render_filter(f) for f in filters],
            prefer="return=minimal",
        )
