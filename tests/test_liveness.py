from __future__ import annotations

import asyncio
from types import SimpleNamespace

from aiohttp.test_utils import TestClient, TestServer

from bot.services.liveness import build_app, status_text


class _FakeBot:
    def __init__(self, ready: bool):
        self.user = SimpleNamespace(name="camguard") if ready else None
        self._ready = ready

    def is_ready(self) -> bool:
        return self._ready


def test_status_text():
    assert status_text(True, 5) == (
        "Discord Camera Bot is running!\n\nBot Status: Online\nMonitoring 5 channels"
    )
    assert "Bot Status: Offline" in status_text(False, 0)


def _fetch(bot, settings, method: str, path: str):
    async def scenario():
        async with TestClient(TestServer(build_app(bot, settings))) as client:
            resp = await client.request(method, path)
            return resp.status, resp.content_type, await resp.text()

    return asyncio.run(scenario())


def test_any_request_gets_status(settings):
    status, ctype, body = _fetch(_FakeBot(True), settings, "GET", "/")
    assert status == 200
    assert ctype == "text/plain"
    assert "Bot Status: Online" in body
    assert "Monitoring 2 channels" in body

    status, _, body = _fetch(_FakeBot(False), settings, "POST", "/whatever/else")
    assert status == 200
    assert "Bot Status: Offline" in body
