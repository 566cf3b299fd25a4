"""
Fan-out of writes across Alertmanager cluster peers. Alertmanager does not replicate posted alerts between cluster members, so when more than one peer sits behind the service address the same write is sent to every peer directly; with a single instance the shared connection is used. Writes are issued sequentially and stop at the first failure without rolling back peers that already accepted the write.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional

from alertmanager_kit.cluster.peers import StatusResolver
from alertmanager_kit.cluster.registry import EndpointRegistry
from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.connection import AlertmanagerConnection
from alertmanager_kit.errors import PartialFanoutError, WireError

logger = logging.getLogger(__name__)

Send = Callable[[AlertmanagerConnection], Awaitable[Any]]


class FanoutDispatcher:
    def __init__(
        self,
        shared: AlertmanagerConnection,
        resolver: StatusResolver,
        registry: EndpointRegistry,
    ) -> None:
        self._shared = shared
        self._resolver = resolver
        self._registry = registry

    async def select_targets(self, deadline: Optional[Deadline] = None) -> List[AlertmanagerConnection]:
        hosts = await self._resolver.resolve_peers(deadline=deadline)
        if len(hosts) <= 1:
            return [self._shared]
        return await self._registry.reconcile(hosts)

    async def dispatch(self, operation: str, send: Send, deadline: Optional[Deadline] = None) -> List[str]:
        """Send one write to every selected target and return the URLs that accepted it.

        Fails before anything is written if cluster membership cannot be
        determined. A failure on the shared connection is raised unchanged;
        a failure while writing to several peers is raised as
        PartialFanoutError naming the failed peer and those already written.
        """
        targets = await self.select_targets(deadline=deadline)
        if len(targets) == 1:
            await send(targets[0])
            return [targets[0].base_url]

        logger.debug("%s: fanning out to %d Alertmanager peers", operation, len(targets))
        delivered: List[str] = []
        for target in targets:
            try:
                await send(target)
            except WireError as exc:
                logger.warning(
                    "%s: fan-out aborted at %s after %d of %d peers: %s",
                    operation,
                    target.base_url,
                    len(delivered),
                    len(targets),
                    exc,
                )
                raise PartialFanoutError(
                    f"write failed on peer {target.base_url} after reaching {len(delivered)} of {len(targets)} peers",
                    operation=operation,
                    target=target.base_url,
                    delivered=delivered,
                ) from exc
            delivered.append(target.base_url)
        return delivered
