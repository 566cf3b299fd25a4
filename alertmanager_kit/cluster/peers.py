"""
Discovery of Alertmanager cluster peers. The status document is fetched through the shared connection and the host part of every peer address is kept; peer-reported ports are gossip ports and are never used to reach the API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import Optional, Set

from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.connection import AlertmanagerConnection
from alertmanager_kit.models.receivers import AlertmanagerStatus
from alertmanager_kit.ops.status_ops import fetch_status

logger = logging.getLogger(__name__)


def split_peer_host(address: Optional[str]) -> str:
    address = (address or "").strip()
    # bare IPv6 literal without a port
    if address.endswith("]"):
        return address
    if ":" not in address:
        return address
    return address.rsplit(":", 1)[0]


def peer_hosts(status: AlertmanagerStatus) -> Set[str]:
    cluster = status.cluster
    if cluster is None or not cluster.peers:
        return set()
    hosts: Set[str] = set()
    for peer in cluster.peers:
        host = split_peer_host(peer.address)
        if not host:
            logger.debug("Skipping cluster peer %r with unusable address %r", peer.name, peer.address)
            continue
        hosts.add(host)
    return hosts


class StatusResolver:
    def __init__(self, connection: AlertmanagerConnection) -> None:
        self._connection = connection

    async def resolve_peers(self, deadline: Optional[Deadline] = None) -> Set[str]:
        status = await fetch_status(self._connection, deadline=deadline)
        hosts = peer_hosts(status)
        logger.debug("Resolved %d Alertmanager peer(s) via %s", len(hosts), self._connection.base_url)
        return hosts
