from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from bot.config import Settings  # noqa: E402

CAM_1 = 111
CAM_2 = 222
LOBBY = 999


def make_member(
    user_id: int = 42,
    *,
    administrator: bool = False,
    manage_guild: bool = False,
    roles: tuple[str, ...] = (),
    channels: dict | None = None,
    bot: bool = False,
):
    channels = channels if channels is not None else {CAM_1: SimpleNamespace(id=CAM_1, name="cam-lounge")}
    return SimpleNamespace(
        id=user_id,
        bot=bot,
        guild_permissions=SimpleNamespace(administrator=administrator, manage_guild=manage_guild),
        roles=[SimpleNamespace(name=r) for r in roles],
        guild=SimpleNamespace(get_channel=channels.get),
        move_to=AsyncMock(),
        send=AsyncMock(),
    )


def voice(channel_id: int | None = None, video: bool = False):
    channel = SimpleNamespace(id=channel_id) if channel_id is not None else None
    return SimpleNamespace(channel=channel, self_video=video)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        token="test-token",
        cam_only_channels=frozenset({CAM_1, CAM_2}),
        grace_seconds=0.05,
        heartbeat_minutes=0,
    )
