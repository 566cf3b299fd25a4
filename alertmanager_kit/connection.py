"""
Wire-level connection to a single Alertmanager endpoint. A connection is a base URL bound to the pooled httpx client; it issues JSON calls against the v2 API resources (alerts, alert groups, silences, receivers and general status) and translates httpx failures into the client's WireError hierarchy. The same connection type serves both the shared, load-balanced address and each individual cluster peer. `create_connection` is the factory used for both; it validates the URL and performs no I/O.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote, urlsplit

import httpx

from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.errors import ConfigError, DecodeError, StatusError, TransportError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v2"
_ALLOWED_SCHEMES = frozenset({"http", "https"})
_FORBIDDEN_HOST_CHARS = frozenset(" \t\r\n/\\@?#")
_MAX_ERROR_BODY = 512


class AlertmanagerConnection:
    def __init__(self, base_url: str, client: httpx.AsyncClient) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client

    def __repr__(self) -> str:
        return f"AlertmanagerConnection({self.base_url!r})"

    async def issue(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        deadline: Optional[Deadline] = None,
    ) -> Any:
        url = f"{self.base_url}{API_PREFIX}{path}"
        deadline = deadline or Deadline()
        remaining = deadline.remaining()
        # httpx's own timeouts must not fire before the caller's deadline does
        request_timeout = httpx.USE_CLIENT_DEFAULT if remaining is None else httpx.Timeout(remaining)
        logger.debug("%s: %s %s params=%s", operation, method, url, params)
        try:
            response = await deadline.run(
                self._client.request(method, url, params=params, json=json, timeout=request_timeout),
                operation=operation,
                url=url,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text[:_MAX_ERROR_BODY] if exc.response is not None else ""
            status_code = exc.response.status_code if exc.response is not None else 0
            logger.warning("%s failed with HTTP %s from %s: %s", operation, status_code, url, body)
            raise StatusError(
                f"unexpected HTTP status {status_code}: {body}",
                operation=operation,
                url=url,
                status_code=status_code,
                body=body,
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s failed against %s: %s", operation, url, exc)
            raise TransportError(str(exc) or type(exc).__name__, operation=operation, url=url) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"response body is not valid JSON: {exc}", operation=operation, url=url) from exc

    async def get_status(self, *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_status", "GET", "/status", deadline=deadline)

    async def get_receivers(self, *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_receivers", "GET", "/receivers", deadline=deadline)

    async def get_alerts(self, params: Dict[str, Any], *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_alerts", "GET", "/alerts", params=params, deadline=deadline)

    async def post_alerts(self, alerts: List[Dict[str, Any]], *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("post_alerts", "POST", "/alerts", json=alerts, deadline=deadline)

    async def get_alert_groups(self, params: Dict[str, Any], *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_alert_groups", "GET", "/alerts/groups", params=params, deadline=deadline)

    async def get_silences(self, params: Dict[str, Any], *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_silences", "GET", "/silences", params=params, deadline=deadline)

    async def get_silence(self, silence_id: str, *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("get_silence", "GET", f"/silence/{quote(silence_id, safe='')}", deadline=deadline)

    async def post_silences(self, silence: Dict[str, Any], *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("post_silence", "POST", "/silences", json=silence, deadline=deadline)

    async def delete_silence(self, silence_id: str, *, deadline: Optional[Deadline] = None) -> Any:
        return await self.issue("delete_silence", "DELETE", f"/silence/{quote(silence_id, safe='')}", deadline=deadline)


ConnectionFactory = Callable[[str], AlertmanagerConnection]


def validate_base_url(base_url: str) -> None:
    try:
        parsed = urlsplit(base_url)
        port = parsed.port
    except ValueError as exc:
        raise ConfigError(f"Invalid Alertmanager endpoint URL {base_url!r}: {exc}") from exc

    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise ConfigError(f"Unsupported scheme in Alertmanager endpoint URL {base_url!r}")
    if not parsed.hostname or any(ch in _FORBIDDEN_HOST_CHARS for ch in parsed.netloc):
        raise ConfigError(f"Invalid host in Alertmanager endpoint URL {base_url!r}")
    if port is None or parsed.path not in ("", "/") or parsed.query or parsed.fragment:
        raise ConfigError(f"Alertmanager endpoint URL must be scheme://host:port, got {base_url!r}")


def create_connection(base_url: str, client: httpx.AsyncClient) -> AlertmanagerConnection:
    validate_base_url(base_url)
    return AlertmanagerConnection(base_url, client)
