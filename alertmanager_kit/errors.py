"""
Exception hierarchy for the Alertmanager client. Configuration problems surface as ConfigError at construction time, while every failure of a call against the Alertmanager API surfaces as a WireError subclass carrying the operation name and the URL that was targeted, so callers can decide on their own retry policy. PartialFanoutError marks a failure in the middle of a multi-peer alert post, where some peers may already hold the write.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import List, Optional


class AlertmanagerKitError(Exception):
    pass


class ConfigError(AlertmanagerKitError, ValueError):
    pass


class WireError(AlertmanagerKitError):
    def __init__(self, message: str, *, operation: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.url:
            return f"{self.operation} ({self.url}): {base}"
        return f"{self.operation}: {base}"


class TransportError(WireError):
    pass


class StatusError(WireError):
    def __init__(
        self,
        message: str,
        *,
        operation: str,
        url: Optional[str] = None,
        status_code: int,
        body: str = "",
    ) -> None:
        super().__init__(message, operation=operation, url=url)
        self.status_code = status_code
        self.body = body


class DecodeError(WireError):
    pass


class DeadlineExceededError(WireError, TimeoutError):
    pass


class PartialFanoutError(WireError):
    """Raised when posting to one peer of a cluster fails mid fan-out.

    ``target`` is the peer URL that failed and ``delivered`` lists the peer
    URLs that had already accepted the write before it. The underlying
    WireError is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        target: str,
        delivered: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message, operation=operation, url=target)
        self.target = target
        self.delivered = list(delivered or [])
