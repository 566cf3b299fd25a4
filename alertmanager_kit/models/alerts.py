"""
Module defines Pydantic models for alert data exchanged with the Alertmanager v2 API: alerts as returned by the API, alerts to be posted, alert groups, and the filter used when listing alerts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from alertmanager_kit.models.receivers import Receiver

DESC_CURRENT_STATE_ALERT = "Current state of the alert"
DESC_LIST_SILENCES_SILENCE_ALERT = "List of silences that silence this alert"
DESC_LIST_ALERTS_INHIBIT_ALERT = "List of alerts that inhibit this alert"
DESC_KEY_VALUE_PAIRS_IDENTIFY_ALERT = "Key-value pairs that identify the alert"
DESC_ADDITIONAL_INFO_ALERT = "Additional information about the alert"
DESC_TIME_ALERT_STARTED_FIRING = "Time when the alert started firing"
DESC_TIME_ALERT_STOPPED_FIRING = "Time when the alert stopped firing"
DESC_TIME_ALERT_UPDATED = "Time when the alert was last updated"
DESC_URL_ALERT_GENERATOR = "URL of the alert generator"
DESC_CURRENT_STATUS_ALERT = "Current status of the alert"
DESC_LIST_RECEIVERS_ALERT = "List of receivers for this alert"
DESC_UNIQUE_IDENTIFIER_ALERT = "Unique identifier for the alert"
DESC_COMMON_LABELS_GROUP = "Common labels for the group"
DESC_RECEIVER_HANDLE_ALERTS = "Receiver that will handle these alerts"
DESC_LIST_ALERTS_GROUP = "List of alerts in this group"
DESC_FILTER_ACTIVE = "Include active alerts"
DESC_FILTER_INHIBITED = "Include inhibited alerts"
DESC_FILTER_SILENCED = "Include silenced alerts"
DESC_FILTER_UNPROCESSED = "Include unprocessed alerts"
DESC_FILTER_EXPRESSIONS = "Matcher expressions using =, !=, =~ or !~"
DESC_FILTER_RECEIVER = "Regular expression matching receiver names"


class AlertState(str, Enum):
    UNPROCESSED = "unprocessed"
    ACTIVE = "active"
    SUPPRESSED = "suppressed"


class AlertStatus(BaseModel):
    state: AlertState = Field(..., description=DESC_CURRENT_STATE_ALERT)
    silenced_by: List[str] = Field(default_factory=list, alias="silencedBy", description=DESC_LIST_SILENCES_SILENCE_ALERT)
    inhibited_by: List[str] = Field(default_factory=list, alias="inhibitedBy", description=DESC_LIST_ALERTS_INHIBIT_ALERT)

    model_config = ConfigDict(populate_by_name=True)


class PostableAlert(BaseModel):
    labels: Dict[str, str] = Field(..., description=DESC_KEY_VALUE_PAIRS_IDENTIFY_ALERT)
    annotations: Dict[str, str] = Field(default_factory=dict, description=DESC_ADDITIONAL_INFO_ALERT)
    starts_at: Optional[datetime] = Field(None, alias="startsAt", description=DESC_TIME_ALERT_STARTED_FIRING)
    ends_at: Optional[datetime] = Field(None, alias="endsAt", description=DESC_TIME_ALERT_STOPPED_FIRING)
    generator_url: Optional[str] = Field(None, alias="generatorURL", description=DESC_URL_ALERT_GENERATOR)

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Alert(BaseModel):
    labels: Dict[str, str] = Field(..., description=DESC_KEY_VALUE_PAIRS_IDENTIFY_ALERT)
    annotations: Dict[str, str] = Field(default_factory=dict, description=DESC_ADDITIONAL_INFO_ALERT)
    starts_at: datetime = Field(..., alias="startsAt", description=DESC_TIME_ALERT_STARTED_FIRING)
    ends_at: datetime = Field(..., alias="endsAt", description=DESC_TIME_ALERT_STOPPED_FIRING)
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description=DESC_TIME_ALERT_UPDATED)
    generator_url: Optional[str] = Field(None, alias="generatorURL", description=DESC_URL_ALERT_GENERATOR)
    fingerprint: str = Field(..., description=DESC_UNIQUE_IDENTIFIER_ALERT)
    receivers: List[Receiver] = Field(..., description=DESC_LIST_RECEIVERS_ALERT)
    status: AlertStatus = Field(..., description=DESC_CURRENT_STATUS_ALERT)

    model_config = ConfigDict(populate_by_name=True)


class AlertGroup(BaseModel):
    labels: Dict[str, str] = Field(..., description=DESC_COMMON_LABELS_GROUP)
    receiver: Receiver = Field(..., description=DESC_RECEIVER_HANDLE_ALERTS)
    alerts: List[Alert] = Field(..., description=DESC_LIST_ALERTS_GROUP)


class AlertsFilter(BaseModel):
    active: bool = Field(True, description=DESC_FILTER_ACTIVE)
    inhibited: bool = Field(True, description=DESC_FILTER_INHIBITED)
    silenced: bool = Field(True, description=DESC_FILTER_SILENCED)
    unprocessed: bool = Field(True, description=DESC_FILTER_UNPROCESSED)
    filter: List[str] = Field(default_factory=list, description=DESC_FILTER_EXPRESSIONS)
    receiver: Optional[str] = Field(None, description=DESC_FILTER_RECEIVER)

    def to_params(self, include_unprocessed: bool = True) -> Dict:
        params: Dict = {
            "active": str(self.active).lower(),
            "silenced": str(self.silenced).lower(),
            "inhibited": str(self.inhibited).lower(),
        }
        # /alerts/groups has no unprocessed parameter
        if include_unprocessed:
            params["unprocessed"] = str(self.unprocessed).lower()
        if self.filter:
            params["filter"] = list(self.filter)
        if self.receiver:
            params["receiver"] = self.receiver
        return params
