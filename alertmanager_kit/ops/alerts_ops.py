"""
Alert operations against the Alertmanager v2 API: listing alerts and alert groups through the shared connection, and posting alerts through the fan-out dispatcher so that every cluster peer receives them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.common.decoding import decode_list
from alertmanager_kit.connection import AlertmanagerConnection
from alertmanager_kit.errors import ConfigError
from alertmanager_kit.models.alerts import Alert, AlertGroup, AlertsFilter, PostableAlert


def _to_postable(alert: Union[PostableAlert, Dict[str, Any]]) -> PostableAlert:
    if isinstance(alert, PostableAlert):
        return alert
    try:
        return PostableAlert.model_validate(alert)
    except ValidationError as exc:
        raise ConfigError(f"post_alerts: invalid alert {alert!r}: {exc}") from exc


async def get_alerts(
    service,
    alerts_filter: Optional[AlertsFilter] = None,
    deadline: Optional[Deadline] = None,
) -> List[Alert]:
    params = (alerts_filter or AlertsFilter()).to_params()
    payload = await service.shared.get_alerts(params, deadline=deadline)
    return decode_list(Alert, payload, operation="get_alerts", url=service.shared.base_url)


async def get_alert_groups(
    service,
    alerts_filter: Optional[AlertsFilter] = None,
    deadline: Optional[Deadline] = None,
) -> List[AlertGroup]:
    params = (alerts_filter or AlertsFilter()).to_params(include_unprocessed=False)
    payload = await service.shared.get_alert_groups(params, deadline=deadline)
    return decode_list(AlertGroup, payload, operation="get_alert_groups", url=service.shared.base_url)


async def post_alerts(
    service,
    alerts: Sequence[Union[PostableAlert, Dict[str, Any]]],
    deadline: Optional[Deadline] = None,
) -> List[str]:
    body = [_to_postable(alert).to_wire() for alert in alerts]

    async def send(connection: AlertmanagerConnection) -> None:
        await connection.post_alerts(body, deadline=deadline)

    delivered = await service.dispatcher.dispatch("post_alerts", send, deadline=deadline)
    service.logger.debug("Posted %d alert(s) to %s", len(body), delivered)
    return delivered
