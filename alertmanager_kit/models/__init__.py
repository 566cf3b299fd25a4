"""
Pydantic models for the Alertmanager v2 API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from .alerts import Alert, AlertGroup, AlertState, AlertStatus, AlertsFilter, PostableAlert
from .receivers import AlertmanagerStatus, ClusterStatus, PeerStatus, Receiver
from .silences import Matcher, PostableSilence, Silence, SilenceState, SilenceStatus

__all__ = [
    "Alert",
    "AlertGroup",
    "AlertState",
    "AlertStatus",
    "AlertsFilter",
    "PostableAlert",
    "AlertmanagerStatus",
    "ClusterStatus",
    "PeerStatus",
    "Receiver",
    "Matcher",
    "PostableSilence",
    "Silence",
    "SilenceState",
    "SilenceStatus",
]
