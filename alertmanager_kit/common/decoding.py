"""
Decoding of Alertmanager API response bodies into Pydantic models. Validation failures, including required fields the API omitted, are raised as DecodeError naming the operation instead of leaking pydantic errors or half-built objects to the caller.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from alertmanager_kit.errors import DecodeError

M = TypeVar("M", bound=BaseModel)


def decode_model(model: Type[M], payload: Any, *, operation: str, url: Optional[str] = None) -> M:
    if not isinstance(payload, dict):
        raise DecodeError(
            f"expected a JSON object for {model.__name__}, got {type(payload).__name__}",
            operation=operation,
            url=url,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"invalid {model.__name__}: {exc}", operation=operation, url=url) from exc


def decode_list(model: Type[M], payload: Any, *, operation: str, url: Optional[str] = None) -> List[M]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(
            f"expected a JSON array of {model.__name__}, got {type(payload).__name__}",
            operation=operation,
            url=url,
        )
    return [decode_model(model, item, operation=operation, url=url) for item in payload]
