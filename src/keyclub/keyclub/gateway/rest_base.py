"""Table-scoped helpers over the PostgREST API.

Filters are passed as ``{column: "<op>.<value>"}`` pairs, built with
:func:`eq` and :func:`in_`.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import httpx

from ..core.constants import ERROR_BODY_LIMIT
from ..core.exceptions import GatewayError, NetworkError
from .connection import SupabaseConnection

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


def eq(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


def in_(values: Iterable[Any]) -> str:
    return "in.(" + ",".join(str(v) for v in values) + ")"


@contextmanager
def rest_client(conn_factory: SupabaseConnection) -> Iterator[httpx.Client]:
    client = conn_factory.connect()
    try:
        yield client
    except httpx.TransportError as e:
        logger.error("Backend unreachable: %s", e)
        raise NetworkError(f"Network error: {e}") from e
    finally:
        client.close()


def _error_code(body: str) -> Optional[str]:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("code") is not None:
        return str(payload["code"])
    return None


def check_response(response: httpx.Response) -> httpx.Response:
    if response.is_success:
        return response

    body = response.text[:ERROR_BODY_LIMIT]
    logger.error(
        "Backend %s %s failed with %s: %s",
        response.request.method,
        response.request.url.path,
        response.status_code,
        body,
    )
    raise GatewayError(
        f"Request failed ({response.status_code}): {body}",
        status_code=response.status_code,
        body=body,
        code=_error_code(response.text),
    )


def _rows(response: httpx.Response) -> List[Dict[str, Any]]:
    if not response.content:
        return []
    data = response.json()
    if isinstance(data, dict):
        return [data]
    return list(data or [])


def select(
    conn_factory: SupabaseConnection,
    table: str,
    *,
    filters: Optional[Mapping[str, str]] = None,
    order: Optional[str] = None,
    columns: str = "*",
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"select": columns}
    params.update(filters or {})
    if order:
        params["order"] = order
    if limit is not None:
        params["limit"] = int(limit)

    with rest_client(conn_factory) as client:
        return _rows(check_response(client.get(f"/{table}", params=params)))


def insert(conn_factory: SupabaseConnection, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
    with rest_client(conn_factory) as client:
        rows = _rows(check_response(client.post(f"/{table}", json=[dict(row)], headers=RETURN_REPRESENTATION)))
    if not rows:
        raise GatewayError(f"Insert into {table} returned no row")
    return rows[0]


def update(
    conn_factory: SupabaseConnection,
    table: str,
    values: Mapping[str, Any],
    *,
    filters: Mapping[str, str],
) -> List[Dict[str, Any]]:
    with rest_client(conn_factory) as client:
        response = client.patch(f"/{table}", params=dict(filters), json=dict(values), headers=RETURN_REPRESENTATION)
        return _rows(check_response(response))


def delete(conn_factory: SupabaseConnection, table: str, *, filters: Mapping[str, str]) -> List[Dict[str, Any]]:
    with rest_client(conn_factory) as client:
        response = client.delete(f"/{table}", params=dict(filters), headers=RETURN_REPRESENTATION)
        return _rows(check_response(response))


def first_or_none(rows: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return rows[0] if rows else None
