"""
Gateway to the upstream accounting backend.

Proxied resources re-issue the caller's request (method, query string,
``Authorization`` header, JSON body) against ``BACKEND_URL + /api/<path>``
and hand back the upstream status and JSON body unchanged, including
non-2xx answers. Only transport and decode failures become a local 500.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from partsdesk.core.config import settings
from partsdesk.core.exceptions import UpstreamError
from partsdesk.core.logger import LogThrottle

logger = logging.getLogger(__name__)


class UpstreamGateway:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        api_prefix: str = "/api",
        transport: httpx.AsyncBaseTransport | None = None,
        throttle: LogThrottle | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.timeout = timeout
        self._transport = transport
        self.throttle = throttle or LogThrottle(throttle_window=settings.LOG_THROTTLE_SECONDS)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}/{path.lstrip('/')}"

    def _log_failure(self, method: str, url: str, exc: Exception) -> None:
        if not self.throttle.should_log():
            return
        suppressed = self.throttle.drain_suppressed()
        logger.error(
            "Upstream %s %s failed: %s (%d similar failures suppressed)",
            method,
            url,
            exc,
            suppressed,
        )

    async def forward(
        self,
        request: Request,
        path: str,
        body: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Response:
        """Replay ``request`` against ``path`` upstream and relay the answer."""
        method = request.method
        url = self.url_for(path)
        headers = {"Content-Type": "application/json"}
        authorization = request.headers.get("authorization")
        if authorization:
            headers["Authorization"] = authorization
        query = list(request.query_params.multi_items()) if params is None else dict(params)
        content = None if body is None else json.dumps(body)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                upstream = await client.request(method, url, params=query, headers=headers, content=content)
        except httpx.HTTPError as exc:
            self._log_failure(method, url, exc)
            raise UpstreamError(message=str(exc) or exc.__class__.__name__) from exc

        if not upstream.content:
            return Response(status_code=upstream.status_code)
        try:
            payload = upstream.json()
        except ValueError as exc:
            self._log_failure(method, url, exc)
            raise UpstreamError(
                "Invalid response from backend service",
                message=f"Upstream returned non-JSON body (status {upstream.status_code})",
            ) from exc
        return JSONResponse(status_code=upstream.status_code, content=payload)


def build_upstream_gateway() -> UpstreamGateway:
    return UpstreamGateway(
        base_url=settings.backend_url,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        api_prefix=settings.BACKEND_API_PREFIX,
    )
