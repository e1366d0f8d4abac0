"""
Framework-neutral HTTP adapter.

Any server shim (WSGI, ASGI, serverless) hands over the method and query string
parameters and writes back the returned status, headers and JSON body.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .core import NewsService
from .exceptions import UnsupportedMethodError

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


@dataclass
class Response:
    status: int
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))

    def json(self) -> str:
        if self.body is None:
            return ""
        return json.dumps(self.body, ensure_ascii=False)


def _json_response(status: int, body: Dict[str, Any]) -> Response:
    headers = dict(CORS_HEADERS)
    headers["Content-Type"] = "application/json; charset=utf-8"
    return Response(status=status, body=body, headers=headers)


def _query_value(query: Mapping[str, Any], key: str) -> Optional[str]:
    # parse_qs yields lists; plain dicts yield strings
    val = query.get(key)
    if isinstance(val, (list, tuple)):
        val = val[0] if val else None
    return val if isinstance(val, str) else None


def _check_method(method: str) -> str:
    m = (method or "").upper()
    if m not in ("GET", "OPTIONS"):
        raise UnsupportedMethodError(method)
    return m


def handle_request(
    service: NewsService,
    method: str,
    query: Optional[Mapping[str, Any]] = None,
) -> Response:
    try:
        m = _check_method(method)
    except UnsupportedMethodError:
        return _json_response(405, {"error": "Method not allowed"})

    if m == "OPTIONS":
        return Response(status=200)

    body = service.handle(_query_value(query or {}, "category"))
    return _json_response(500 if "error" in body else 200, body)
