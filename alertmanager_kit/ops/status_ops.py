"""
General status and receiver operations against the Alertmanager v2 API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List, Optional

from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.common.decoding import decode_list, decode_model
from alertmanager_kit.connection import AlertmanagerConnection
from alertmanager_kit.models.receivers import AlertmanagerStatus, Receiver


async def fetch_status(connection: AlertmanagerConnection, deadline: Optional[Deadline] = None) -> AlertmanagerStatus:
    payload = await connection.get_status(deadline=deadline)
    return decode_model(AlertmanagerStatus, payload, operation="get_status", url=connection.base_url)


async def get_status(service, deadline: Optional[Deadline] = None) -> AlertmanagerStatus:
    return await fetch_status(service.shared, deadline=deadline)


async def get_receivers(service, deadline: Optional[Deadline] = None) -> List[Receiver]:
    payload = await service.shared.get_receivers(deadline=deadline)
    return decode_list(Receiver, payload, operation="get_receivers", url=service.shared.base_url)
