"""
Registry of per-peer Alertmanager connections. The registry is reconciled against the latest set of peer hosts under an asyncio lock: handles for peers that are still present are reused, new peers get a fresh connection from the factory, and departed peers are dropped. The new mapping is built aside and only swapped in once every connection was created, so fan-out callers never observe a half-updated set.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import logging
from typing import Dict, Iterable, List

from alertmanager_kit.config import ResolvedEndpoint
from alertmanager_kit.connection import AlertmanagerConnection, ConnectionFactory

logger = logging.getLogger(__name__)


class EndpointRegistry:
    def __init__(self, endpoint: ResolvedEndpoint, factory: ConnectionFactory) -> None:
        self._endpoint = endpoint
        self._factory = factory
        self._connections: Dict[str, AlertmanagerConnection] = {}
        self._lock = asyncio.Lock()

    def url_for(self, host: str) -> str:
        return self._endpoint.peer_url(host)

    async def reconcile(self, peer_hosts: Iterable[str]) -> List[AlertmanagerConnection]:
        async with self._lock:
            current = self._connections
            scratch: Dict[str, AlertmanagerConnection] = {}
            added: List[str] = []

            for host in sorted(set(peer_hosts)):
                url = self.url_for(host)
                if url in scratch:
                    continue
                connection = current.get(url)
                if connection is None:
                    connection = self._factory(url)
                    added.append(url)
                scratch[url] = connection

            removed = [url for url in current if url not in scratch]
            self._connections = scratch

            if added or removed:
                logger.info("Alertmanager peer connections updated: added=%s removed=%s", added, removed)
            return list(scratch.values())

    def snapshot(self) -> Dict[str, AlertmanagerConnection]:
        return dict(self._connections)

    def __len__(self) -> int:
        return len(self._connections)
