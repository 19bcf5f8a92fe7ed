# bot/core/transitions.py
from __future__ import annotations

import enum


class Transition(enum.Enum):
    JOIN = "join"
    CAMERA_TOGGLE = "camera_toggle"
    LEAVE = "leave"
    IGNORED = "ignored"


def classify(
    before_channel_id: int | None,
    after_channel_id: int | None,
    before_video: bool,
    after_video: bool,
) -> Transition:
    """
    Turn a (before, after) voice state pair into one transition.

    - nothing -> channel            JOIN
    - channel A -> channel B        JOIN (evaluated like a fresh join into B)
    - same channel, camera changed  CAMERA_TOGGLE
    - channel -> nothing            LEAVE
    - anything else (mute, deafen, stream...)  IGNORED
    """
    if after_channel_id is not None and before_channel_id != after_channel_id:
        return Transition.JOIN

    if before_channel_id is not None and after_channel_id is None:
        return Transition.LEAVE

    if after_channel_id is not None and bool(before_video) != bool(after_video):
        return Transition.CAMERA_TOGGLE

    return Transition.IGNORED


def channel_id_of(voice_state) -> int | None:
    channel = getattr(voice_state, "channel", None)
    return channel.id if channel is not None else None
