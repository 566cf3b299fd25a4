"""
Cluster-aware write path: peer discovery, per-peer connection registry and write fan-out.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from .fanout import FanoutDispatcher
from .peers import StatusResolver, peer_hosts, split_peer_host
from .registry import EndpointRegistry

__all__ = ["FanoutDispatcher", "StatusResolver", "EndpointRegistry", "peer_hosts", "split_peer_host"]
