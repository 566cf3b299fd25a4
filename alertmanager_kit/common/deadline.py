"""
Deadline tracking for client calls. A Deadline is created once per public operation from the caller's timeout (or passed in by the caller to share one budget across several operations) and threaded down to every wire call, each of which gets only the time that is still left.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import logging
import time
from typing import Awaitable, Optional, TypeVar, Union

from alertmanager_kit.errors import DeadlineExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Deadline:
    def __init__(self, expires_at: Optional[float] = None) -> None:
        self.expires_at = expires_at

    @classmethod
    def after(cls, seconds: Optional[float]) -> "Deadline":
        if seconds is None:
            return cls(None)
        return cls(time.monotonic() + max(0.0, float(seconds)))

    @classmethod
    def coerce(cls, value: Union["Deadline", float, int, None]) -> "Deadline":
        if isinstance(value, Deadline):
            return value
        return cls.after(value)

    def remaining(self) -> Optional[float]:
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    async def run(self, awaitable: Awaitable[T], *, operation: str, url: Optional[str] = None) -> T:
        remaining = self.remaining()
        if remaining is None:
            return await awaitable
        if remaining <= 0:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise DeadlineExceededError("deadline exceeded before the call was issued", operation=operation, url=url)
        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError as exc:
            logger.error("Timeout after %.3fs for %s", remaining, operation)
            raise DeadlineExceededError(
                f"deadline exceeded after {remaining:.3f}s", operation=operation, url=url
            ) from exc

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining()!r})"
