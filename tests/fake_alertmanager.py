"""
In-process fake of an Alertmanager cluster for tests. Every host gets its own alert store, all hosts share one silence store (as gossip would), and the status endpoint reports the configured peers. Requests are served through httpx.MockTransport so the client under test runs its real HTTP code path.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import hashlib
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from alertmanager_kit.common.http_client import create_async_client

API_PREFIX = "/api/v2"
DEFAULT_PORTS = {"http": 80, "https": 443}
RECEIVERS = [{"name": "default"}, {"name": "pager"}]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class Call:
    method: str
    host: str
    port: Optional[int]
    path: str
    params: Dict[str, List[str]]
    body: Any = None


@dataclass
class FakeAlertmanagerCluster:
    peers: Optional[List[str]] = None
    fail_hosts: Dict[str, int] = field(default_factory=dict)
    fail_alert_posts: Dict[str, int] = field(default_factory=dict)
    hang_hosts: set = field(default_factory=set)
    calls: List[Call] = field(default_factory=list)
    alerts: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)
    silences: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.transport = httpx.MockTransport(self.handle)
        self.entered = asyncio.Event()

    def client(self) -> httpx.AsyncClient:
        return create_async_client(transport=self.transport)

    def calls_to(self, path: str, method: Optional[str] = None) -> List[Call]:
        return [c for c in self.calls if c.path == API_PREFIX + path and (method is None or c.method == method)]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        params = {key: request.url.params.get_list(key) for key in request.url.params.keys()}
        port = request.url.port or DEFAULT_PORTS[request.url.scheme]
        self.calls.append(Call(request.method, host, port, path, params, body))

        if host in self.hang_hosts:
            self.entered.set()
            await asyncio.Event().wait()
        if host in self.fail_hosts:
            return httpx.Response(self.fail_hosts[host], text="injected failure")

        route = path[len(API_PREFIX):]
        if route == "/status" and request.method == "GET":
            return httpx.Response(200, json=self._status())
        if route == "/receivers" and request.method == "GET":
            return httpx.Response(200, json=RECEIVERS)
        if route == "/alerts" and request.method == "POST" and host in self.fail_alert_posts:
            return httpx.Response(self.fail_alert_posts[host], text="alert rejected")
        if route == "/alerts" and request.method == "POST":
            self.alerts.setdefault(host, []).extend(body or [])
            return httpx.Response(200)
        if route == "/alerts" and request.method == "GET":
            return httpx.Response(200, json=self._gettable_alerts(host, params.get("filter", [])))
        if route == "/alerts/groups" and request.method == "GET":
            return httpx.Response(200, json=self._groups(host))
        if route == "/silences" and request.method == "POST":
            return httpx.Response(200, json={"silenceID": self._store_silence(body)})
        if route == "/silences" and request.method == "GET":
            return httpx.Response(200, json=[self._render_silence(s) for s in self.silences.values()])
        if route.startswith("/silence/"):
            silence_id = route[len("/silence/"):]
            silence = self.silences.get(silence_id)
            if silence is None:
                return httpx.Response(404, text="silence not found")
            if request.method == "DELETE":
                silence["endsAt"] = _iso(_now())
                silence["updatedAt"] = _iso(_now())
                return httpx.Response(200)
            return httpx.Response(200, json=self._render_silence(silence))
        return httpx.Response(404, text="no route")

    def _status(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {
            "config": {"original": "route:\n  receiver: default\n"},
            "uptime": _iso(_now() - timedelta(hours=1)),
            "versionInfo": {"version": "0.27.0", "branch": "HEAD"},
        }
        if self.peers is not None:
            status["cluster"] = {
                "name": "01HFAKE",
                "status": "ready",
                "peers": [{"name": f"peer-{i}", "address": address} for i, address in enumerate(self.peers)],
            }
        return status

    def _gettable(self, alert: Dict[str, Any]) -> Dict[str, Any]:
        labels = alert.get("labels", {})
        fingerprint = hashlib.sha256(json.dumps(labels, sort_keys=True).encode()).hexdigest()[:16]
        starts_at = alert.get("startsAt") or _iso(_now())
        return {
            "labels": labels,
            "annotations": alert.get("annotations", {}),
            "startsAt": starts_at,
            "endsAt": alert.get("endsAt") or _iso(_now() + timedelta(minutes=5)),
            "updatedAt": _iso(_now()),
            "fingerprint": fingerprint,
            "receivers": [{"name": "default"}],
            "status": {"state": "active", "silencedBy": [], "inhibitedBy": []},
        }

    def _gettable_alerts(self, host: str, filters: List[str]) -> List[Dict[str, Any]]:
        result = []
        for alert in self.alerts.get(host, []):
            labels = alert.get("labels", {})
            matched = True
            for expression in filters:
                name, _, value = expression.partition("=")
                if labels.get(name) != value.strip('"'):
                    matched = False
            if matched:
                result.append(self._gettable(alert))
        return result

    def _groups(self, host: str) -> List[Dict[str, Any]]:
        groups: Dict[str, List[Dict[str, Any]]] = {}
        for alert in self.alerts.get(host, []):
            groups.setdefault(alert.get("labels", {}).get("alertname", ""), []).append(self._gettable(alert))
        return [
            {"labels": {"alertname": name}, "receiver": {"name": "default"}, "alerts": members}
            for name, members in groups.items()
        ]

    def _store_silence(self, body: Dict[str, Any]) -> str:
        silence_id = body.get("id") or str(uuid.uuid4())
        stored = dict(body)
        stored["id"] = silence_id
        stored["updatedAt"] = _iso(_now())
        self.silences[silence_id] = stored
        return silence_id

    def _render_silence(self, silence: Dict[str, Any]) -> Dict[str, Any]:
        now = _now()
        if now < _parse(silence["startsAt"]):
            state = "pending"
        elif now >= _parse(silence["endsAt"]):
            state = "expired"
        else:
            state = "active"
        rendered = dict(silence)
        rendered["status"] = {"state": state}
        return rendered
