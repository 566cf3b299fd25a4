"""
Configuration for the Alertmanager client. Process-wide tuning (timeouts, HTTP connection pool sizes, retry defaults, and an optional default Alertmanager location) is loaded from environment variables by the `Config` class. Per-client connection settings are described by the `ClientConfig` model, which points either at an explicit URL or at an in-cluster service reference, and `resolve_endpoint` turns that into the single scheme/host/port/target-port tuple the client connects with.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from alertmanager_kit.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9093

DESC_SERVICE_NAMESPACE = "Namespace of the Alertmanager service"
DESC_SERVICE_NAME = "Name of the Alertmanager service"
DESC_SERVICE_PORT = "Port exposed by the service, defaults to 9093"
DESC_SERVICE_TARGET_PORT = "Port on the backend instances, defaults to the service port"
DESC_CLIENT_URL = "Explicit Alertmanager URL"
DESC_CLIENT_SERVICE = "In-cluster service reference"


def _to_optional_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _to_optional_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _check_port(value: Optional[int], name: str) -> None:
    if value is not None and not 0 < value < 65536:
        raise ConfigError(f"{name} out of range: {value}")


class Config:
    def __init__(self) -> None:
        # Default Alertmanager location, used by ClientConfig.from_env()
        self.ALERTMANAGER_URL: Optional[str] = _to_optional_str(os.getenv("ALERTMANAGER_URL"))
        self.ALERTMANAGER_SERVICE_NAMESPACE: Optional[str] = _to_optional_str(os.getenv("ALERTMANAGER_SERVICE_NAMESPACE"))
        self.ALERTMANAGER_SERVICE_NAME: Optional[str] = _to_optional_str(os.getenv("ALERTMANAGER_SERVICE_NAME"))
        self.ALERTMANAGER_SERVICE_PORT: Optional[int] = _to_optional_int(
            os.getenv("ALERTMANAGER_SERVICE_PORT"), "ALERTMANAGER_SERVICE_PORT"
        )
        self.ALERTMANAGER_SERVICE_TARGET_PORT: Optional[int] = _to_optional_int(
            os.getenv("ALERTMANAGER_SERVICE_TARGET_PORT"), "ALERTMANAGER_SERVICE_TARGET_PORT"
        )

        # Request settings
        self.DEFAULT_TIMEOUT: float = float(os.getenv("DEFAULT_TIMEOUT", "30.0"))
        self.MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))
        self.RETRY_BACKOFF: float = float(os.getenv("RETRY_BACKOFF", "1.0"))
        self.RETRY_MAX_BACKOFF: float = float(os.getenv("RETRY_MAX_BACKOFF", "8.0"))

        # Shared upstream HTTP client pool tuning
        self.HTTP_CLIENT_MAX_CONNECTIONS: int = int(os.getenv("HTTP_CLIENT_MAX_CONNECTIONS", "100"))
        self.HTTP_CLIENT_MAX_KEEPALIVE_CONNECTIONS: int = int(os.getenv("HTTP_CLIENT_MAX_KEEPALIVE_CONNECTIONS", "40"))
        self.HTTP_CLIENT_KEEPALIVE_EXPIRY: float = float(os.getenv("HTTP_CLIENT_KEEPALIVE_EXPIRY", "30"))

        self.validate()

    def validate(self) -> None:
        if self.DEFAULT_TIMEOUT <= 0:
            raise ConfigError("DEFAULT_TIMEOUT must be greater than 0")
        if self.MAX_RETRIES < 0:
            raise ConfigError("MAX_RETRIES cannot be negative")
        if self.HTTP_CLIENT_MAX_CONNECTIONS <= 0:
            raise ConfigError("HTTP_CLIENT_MAX_CONNECTIONS must be greater than 0")
        if self.HTTP_CLIENT_MAX_KEEPALIVE_CONNECTIONS > self.HTTP_CLIENT_MAX_CONNECTIONS:
            raise ConfigError("HTTP_CLIENT_MAX_KEEPALIVE_CONNECTIONS cannot exceed HTTP_CLIENT_MAX_CONNECTIONS")
        _check_port(self.ALERTMANAGER_SERVICE_PORT, "ALERTMANAGER_SERVICE_PORT")
        _check_port(self.ALERTMANAGER_SERVICE_TARGET_PORT, "ALERTMANAGER_SERVICE_TARGET_PORT")
        if bool(self.ALERTMANAGER_SERVICE_NAMESPACE) != bool(self.ALERTMANAGER_SERVICE_NAME):
            logger.warning(
                "Only one of ALERTMANAGER_SERVICE_NAMESPACE/ALERTMANAGER_SERVICE_NAME is set; "
                "the service reference is ignored"
            )


class ServiceReference(BaseModel):
    namespace: str = Field(..., description=DESC_SERVICE_NAMESPACE)
    name: str = Field(..., description=DESC_SERVICE_NAME)
    port: Optional[int] = Field(None, description=DESC_SERVICE_PORT)
    target_port: Optional[int] = Field(None, alias="targetPort", description=DESC_SERVICE_TARGET_PORT)

    model_config = ConfigDict(populate_by_name=True)


class ClientConfig(BaseModel):
    """Where the client should find Alertmanager.

    Set ``url`` for a direct address, or ``service`` for an in-cluster
    ``<name>.<namespace>.svc`` name. When both are set only the service's
    ``target_port`` is honored, which lets alert posts reach the backend
    instances on a port different from the one in the URL.
    """

    url: Optional[str] = Field(None, description=DESC_CLIENT_URL)
    service: Optional[ServiceReference] = Field(None, description=DESC_CLIENT_SERVICE)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_env(cls, settings: Optional[Config] = None) -> "ClientConfig":
        settings = settings or config
        service = None
        if settings.ALERTMANAGER_SERVICE_NAMESPACE and settings.ALERTMANAGER_SERVICE_NAME:
            service = ServiceReference(
                namespace=settings.ALERTMANAGER_SERVICE_NAMESPACE,
                name=settings.ALERTMANAGER_SERVICE_NAME,
                port=settings.ALERTMANAGER_SERVICE_PORT,
                target_port=settings.ALERTMANAGER_SERVICE_TARGET_PORT,
            )
        elif settings.ALERTMANAGER_URL and settings.ALERTMANAGER_SERVICE_TARGET_PORT is not None:
            service = ServiceReference(
                namespace="",
                name="",
                target_port=settings.ALERTMANAGER_SERVICE_TARGET_PORT,
            )
        return cls(url=settings.ALERTMANAGER_URL, service=service)


def format_host(host: str) -> str:
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def build_url(scheme: str, host: str, port: int) -> str:
    return f"{scheme}://{format_host(host)}:{port}"


@dataclass(frozen=True)
class ResolvedEndpoint:
    scheme: str
    host: str
    port: int
    target_port: int

    @property
    def base_url(self) -> str:
        return build_url(self.scheme, self.host, self.port)

    def peer_url(self, peer_host: str) -> str:
        return build_url(self.scheme, peer_host, self.target_port)


def resolve_endpoint(client_config: ClientConfig) -> ResolvedEndpoint:
    host: Optional[str] = None
    port: Optional[int] = None
    target_port: Optional[int] = None

    if client_config.url:
        try:
            parsed = urlsplit(client_config.url.strip())
        except ValueError as exc:
            raise ConfigError(f"Invalid Alertmanager URL {client_config.url!r}: {exc}") from exc
        host = parsed.hostname
        if not host:
            raise ConfigError(
                f"Alertmanager URL {client_config.url!r} has no host; expected e.g. http://alertmanager:9093"
            )
        try:
            port = parsed.port
        except ValueError as exc:
            raise ConfigError(f"Invalid port in Alertmanager URL {client_config.url!r}: {exc}") from exc
        if client_config.service is not None:
            target_port = client_config.service.target_port
    elif client_config.service is not None:
        svc = client_config.service
        host = f"{svc.name}.{svc.namespace}.svc"
        port = svc.port
        target_port = svc.target_port
    else:
        host = DEFAULT_HOST

    if port is None:
        port = DEFAULT_PORT
    if target_port is None:
        target_port = port
    _check_port(port, "port")
    _check_port(target_port, "target port")

    return ResolvedEndpoint(scheme=DEFAULT_SCHEME, host=host, port=port, target_port=target_port)


config = Config()
