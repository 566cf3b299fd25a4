"""
Module defines Pydantic models for Alertmanager receivers and the general status document, including the cluster block that lists peer instances.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DESC_RECEIVER_NAME = "Receiver name"
DESC_PEER_NAME = "Peer name in the cluster"
DESC_PEER_ADDRESS = "Peer address as host:port"
DESC_CLUSTER_NAME = "Name of this instance in the cluster"
DESC_CLUSTER_STATE = "Cluster state: ready, settling or disabled"
DESC_CLUSTER_PEERS = "Peers known to this instance"
DESC_ALERTMANAGER_VERSION = "AlertManager version information"
DESC_ALERTMANAGER_UPTIME = "AlertManager uptime"
DESC_ALERTMANAGER_CONFIG = "Loaded configuration"
DESC_ALERTMANAGER_CLUSTER_STATUS = "Cluster status information"


class Receiver(BaseModel):
    name: str = Field(..., description=DESC_RECEIVER_NAME)


class PeerStatus(BaseModel):
    name: Optional[str] = Field(None, description=DESC_PEER_NAME)
    address: Optional[str] = Field(None, description=DESC_PEER_ADDRESS)

    model_config = ConfigDict(extra="allow")


class ClusterStatus(BaseModel):
    name: Optional[str] = Field(None, description=DESC_CLUSTER_NAME)
    status: Optional[str] = Field(None, description=DESC_CLUSTER_STATE)
    peers: Optional[List[PeerStatus]] = Field(None, description=DESC_CLUSTER_PEERS)

    model_config = ConfigDict(extra="allow")


class AlertmanagerStatus(BaseModel):
    """Status document of an Alertmanager instance.

    Unknown fields are kept as-is so the service's own shape passes through.
    """

    cluster: Optional[ClusterStatus] = Field(None, description=DESC_ALERTMANAGER_CLUSTER_STATUS)
    config: Optional[Dict[str, Any]] = Field(None, description=DESC_ALERTMANAGER_CONFIG)
    uptime: Optional[datetime] = Field(None, description=DESC_ALERTMANAGER_UPTIME)
    version_info: Optional[Dict[str, Any]] = Field(None, alias="versionInfo", description=DESC_ALERTMANAGER_VERSION)

    model_config = ConfigDict(extra="allow", populate_by_name=True)
