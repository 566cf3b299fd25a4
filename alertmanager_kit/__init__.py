"""
Client library for the Prometheus Alertmanager v2 API with cluster-aware alert posting.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from .client import AlertmanagerClient
from .common.deadline import Deadline
from .config import ClientConfig, ResolvedEndpoint, ServiceReference, resolve_endpoint
from .errors import (
    AlertmanagerKitError,
    ConfigError,
    DeadlineExceededError,
    DecodeError,
    PartialFanoutError,
    StatusError,
    TransportError,
    WireError,
)
from .models import (
    Alert,
    AlertGroup,
    AlertmanagerStatus,
    AlertsFilter,
    AlertState,
    AlertStatus,
    Matcher,
    PostableAlert,
    PostableSilence,
    Receiver,
    Silence,
    SilenceState,
    SilenceStatus,
)

__all__ = [
    "AlertmanagerClient",
    "Deadline",
    "ClientConfig",
    "ResolvedEndpoint",
    "ServiceReference",
    "resolve_endpoint",
    "AlertmanagerKitError",
    "ConfigError",
    "DeadlineExceededError",
    "DecodeError",
    "PartialFanoutError",
    "StatusError",
    "TransportError",
    "WireError",
    "Alert",
    "AlertGroup",
    "AlertmanagerStatus",
    "AlertsFilter",
    "AlertState",
    "AlertStatus",
    "Matcher",
    "PostableAlert",
    "PostableSilence",
    "Receiver",
    "Silence",
    "SilenceState",
    "SilenceStatus",
]
