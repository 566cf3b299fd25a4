"""
Client for the Prometheus Alertmanager v2 API, providing typed operations to list alerts and alert groups, post alerts, manage silences, and read receivers and general status. Reads and silence writes go through a single shared connection to the configured (possibly load-balanced) address. Alert posts first discover the cluster peers behind that address and, when there is more than one, are written to every peer directly, because Alertmanager does not replicate posted alerts between its cluster members.

Every operation takes an explicit `timeout` keyword, either seconds or a `Deadline` shared across several calls; the remaining budget bounds every wire call the operation makes. Errors are never retried or swallowed; see `alertmanager_kit.resilience` for an opt-in retry policy.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from functools import partial
from typing import Any, Dict, List, Optional, Sequence, Set, Union

import httpx

from alertmanager_kit.cluster.fanout import FanoutDispatcher
from alertmanager_kit.cluster.peers import StatusResolver
from alertmanager_kit.cluster.registry import EndpointRegistry
from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.common.http_client import create_async_client
from alertmanager_kit.config import ClientConfig, config, resolve_endpoint
from alertmanager_kit.connection import create_connection, validate_base_url
from alertmanager_kit.models.alerts import Alert, AlertGroup, AlertsFilter, PostableAlert
from alertmanager_kit.models.receivers import AlertmanagerStatus, Receiver
from alertmanager_kit.models.silences import PostableSilence, Silence
from alertmanager_kit.ops import alerts_ops, silences_ops, status_ops

logger = logging.getLogger(__name__)

Timeout = Union[Deadline, float, None]


class AlertmanagerClient:
    def __init__(
        self,
        client_config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.endpoint = resolve_endpoint(client_config or ClientConfig())
        validate_base_url(self.endpoint.base_url)

        self._owns_http_client = http_client is None
        self._http = http_client or create_async_client(config.DEFAULT_TIMEOUT)
        self.logger = logger

        self.shared = create_connection(self.endpoint.base_url, self._http)
        self.resolver = StatusResolver(self.shared)
        self.registry = EndpointRegistry(self.endpoint, partial(create_connection, client=self._http))
        self.dispatcher = FanoutDispatcher(self.shared, self.resolver, self.registry)
        self.logger.debug(
            "Alertmanager client for %s (peer target port %d)", self.endpoint.base_url, self.endpoint.target_port
        )

    @classmethod
    def from_env(cls, *, http_client: Optional[httpx.AsyncClient] = None) -> "AlertmanagerClient":
        return cls(ClientConfig.from_env(), http_client=http_client)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "AlertmanagerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def get_alerts(
        self, alerts_filter: Optional[AlertsFilter] = None, *, timeout: Timeout = None
    ) -> List[Alert]:
        return await alerts_ops.get_alerts(self, alerts_filter, deadline=Deadline.coerce(timeout))

    async def get_alert_groups(
        self, alerts_filter: Optional[AlertsFilter] = None, *, timeout: Timeout = None
    ) -> List[AlertGroup]:
        return await alerts_ops.get_alert_groups(self, alerts_filter, deadline=Deadline.coerce(timeout))

    async def post_alerts(
        self, alerts: Sequence[Union[PostableAlert, Dict[str, Any]]], *, timeout: Timeout = None
    ) -> None:
        await alerts_ops.post_alerts(self, alerts, deadline=Deadline.coerce(timeout))

    async def get_silences(
        self, filter: Optional[Sequence[str]] = None, *, timeout: Timeout = None
    ) -> List[Silence]:
        return await silences_ops.get_silences(self, filter, deadline=Deadline.coerce(timeout))

    async def get_silence(self, silence_id: str, *, timeout: Timeout = None) -> Silence:
        return await silences_ops.get_silence(self, silence_id, deadline=Deadline.coerce(timeout))

    async def post_silence(self, silence: PostableSilence, *, timeout: Timeout = None) -> str:
        return await silences_ops.post_silence(self, silence, deadline=Deadline.coerce(timeout))

    async def update_silence(self, silence_id: str, silence: PostableSilence, *, timeout: Timeout = None) -> str:
        return await silences_ops.update_silence(self, silence_id, silence, deadline=Deadline.coerce(timeout))

    async def delete_silence(self, silence_id: str, *, timeout: Timeout = None) -> None:
        await silences_ops.delete_silence(self, silence_id, deadline=Deadline.coerce(timeout))

    async def get_receivers(self, *, timeout: Timeout = None) -> List[Receiver]:
        return await status_ops.get_receivers(self, deadline=Deadline.coerce(timeout))

    async def get_status(self, *, timeout: Timeout = None) -> AlertmanagerStatus:
        return await status_ops.get_status(self, deadline=Deadline.coerce(timeout))

    async def get_peer_hosts(self, *, timeout: Timeout = None) -> Set[str]:
        return await self.resolver.resolve_peers(deadline=Deadline.coerce(timeout))
