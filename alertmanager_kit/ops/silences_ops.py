"""
Silence operations against the Alertmanager v2 API: listing, fetching, creating, updating and expiring silences. All silence calls go through the shared connection; Alertmanager gossips silences between cluster members itself.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict, List, Optional, Sequence

from alertmanager_kit.common.deadline import Deadline
from alertmanager_kit.common.decoding import decode_list, decode_model
from alertmanager_kit.errors import DecodeError
from alertmanager_kit.models.silences import PostableSilence, Silence


async def get_silences(
    service,
    filter: Optional[Sequence[str]] = None,
    deadline: Optional[Deadline] = None,
) -> List[Silence]:
    params: Dict[str, Any] = {}
    if filter:
        params["filter"] = list(filter)
    payload = await service.shared.get_silences(params, deadline=deadline)
    return decode_list(Silence, payload, operation="get_silences", url=service.shared.base_url)


async def get_silence(service, silence_id: str, deadline: Optional[Deadline] = None) -> Silence:
    payload = await service.shared.get_silence(silence_id, deadline=deadline)
    return decode_model(Silence, payload, operation="get_silence", url=service.shared.base_url)


async def post_silence(service, silence: PostableSilence, deadline: Optional[Deadline] = None) -> str:
    payload = await service.shared.post_silences(silence.to_wire(), deadline=deadline)
    silence_id = payload.get("silenceID") if isinstance(payload, dict) else None
    if not silence_id:
        raise DecodeError("response carries no silenceID", operation="post_silence", url=service.shared.base_url)
    if silence.id:
        service.logger.info("Updated silence %s (now %s)", silence.id, silence_id)
    else:
        service.logger.info("Created silence %s", silence_id)
    return silence_id


async def update_silence(
    service,
    silence_id: str,
    silence: PostableSilence,
    deadline: Optional[Deadline] = None,
) -> str:
    return await post_silence(service, silence.model_copy(update={"id": silence_id}), deadline=deadline)


async def delete_silence(service, silence_id: str, deadline: Optional[Deadline] = None) -> None:
    await service.shared.delete_silence(silence_id, deadline=deadline)
    service.logger.info("Expired silence %s", silence_id)
