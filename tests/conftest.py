"""Shared fixtures: settings, a routed fake API for httpx, and room payloads."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from adapters.meetings import MeetingsClient
from core.config import AppSettings

BASE_URL = "https://api.example.test"
BASE_PATH = "/beta/meetings"
API_ROOT = f"{BASE_URL}{BASE_PATH}"

ROOM_LINKS: dict[str, Any] = {
    "host_url": {"href": "https://meetings.example.test/?room_token=982515622&participant_token=host"},
    "guest_url": {"href": "https://meetings.example.test/982515622"},
}

ROOM_ONE: dict[str, Any] = {
    "id": "0c8ba5e4-8f52-4f4c-9a7e-6f0d3a4e1b01",
    "display_name": "Sprint review",
    "metadata": "team=platform",
    "type": "instant",
    "expires_at": "2026-10-20T10:00:00.000Z",
    "recording_options": {"auto_record": False, "record_only_owner": False},
    "meeting_code": "982515622",
    "created_at": "2026-10-19T09:50:00.000Z",
    "is_available": True,
    "expire_after_use": False,
    "theme_id": None,
    "initial_join_options": {"microphone_state": "default"},
    "join_approval_level": "none",
    "callback_urls": {
        "rooms_callback_url": "https://hooks.example.test/rooms",
        "sessions_callback_url": "https://hooks.example.test/sessions",
        "recordings_callback_url": "https://hooks.example.test/recordings",
    },
    "available_features": {
        "is_recording_available": True,
        "is_chat_available": True,
        "is_whiteboard_available": False,
    },
    "ui_settings": {"language": "default"},
}

ROOM_TWO: dict[str, Any] = {
    **ROOM_ONE,
    "id": "5d1f6a2b-77c0-4f0e-8f53-2b9c1d7e4a02",
    "display_name": "Retro",
    "type": "long_term",
    "meeting_code": "117744309",
    "expire_after_use": True,
}


def with_links(room: dict[str, Any]) -> dict[str, Any]:
    return {**room, "_links": ROOM_LINKS}


def page(
    items: list[dict[str, Any]],
    *,
    self_href: str = f"{API_ROOT}/rooms",
    next_href: str | None = None,
    page_size: int = 20,
    total_items: int | None = None,
) -> dict[str, Any]:
    links: dict[str, Any] = {"self": {"href": self_href}}
    if next_href is not None:
        links["next"] = {"href": next_href}
    return {
        "_embedded": [with_links(item) for item in items],
        "_links": links,
        "page_size": page_size,
        "total_items": len(items) if total_items is None else total_items,
    }


class FakeApi:
    """Tabla de rutas para `httpx.MockTransport`.

    Cada `(method, url)` tiene una cola de respuestas; cada petición consume una.
    Las peticiones sin ruta devuelven 404 con un error envelope.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, *, status: int = 200, json_body: Any = None) -> FakeApi:
        response = httpx.Response(status, json=json_body) if json_body is not None else httpx.Response(status)
        self.routes.setdefault((method.upper(), url), []).append(response)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, str(request.url)))
        if not queue:
            return httpx.Response(
                404,
                json={"status": 404, "error": "Not Found", "message": f"no route for {request.method} {request.url}"},
            )
        return queue.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def is_done(self) -> bool:
        return all(not queue for queue in self.routes.values())

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_base_url=BASE_URL,
        api_base_path=BASE_PATH,
        api_token="test-token",
        user_agent="meetings-sdk-tests",
    )


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def meetings(settings: AppSettings, api: FakeApi) -> MeetingsClient:
    return MeetingsClient(settings, transport=api.transport)
