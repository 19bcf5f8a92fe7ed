from __future__ import annotations

from dataclasses import dataclass
import logging
import os
import re

from dotenv import load_dotenv

log = logging.getLogger(__name__)


# Camera-only voice channels of the home server
DEFAULT_CAM_ONLY_CHANNELS: tuple[int, ...] = (
    1388844658184032256,
    1388844741306744974,
    1388844848198582362,
    1388844911520120843,
    1388844944420241470,
)

DEFAULT_EXEMPT_ROLES: tuple[str, ...] = ("ADMIN", "Staff", "Owner")


@dataclass(frozen=True)
class Settings:
    token: str

    # ---------------- Bot / Commands ----------------
    command_prefix: str = "!"
    log_level: str = "INFO"

    # ---------------- Liveness ----------------
    port: int = 3000
    heartbeat_minutes: float = 5

    # ---------------- Camera rules ----------------
    cam_only_channels: frozenset[int] = frozenset(DEFAULT_CAM_ONLY_CHANNELS)
    grace_seconds: float = 10.0                 # time to turn the camera on
    exempt_roles: frozenset[str] = frozenset(DEFAULT_EXEMPT_ROLES)  # exact role names

    # ---------------- Warning DM ----------------
    warning_title: str = "📹 Camera Required!"
    warning_description: str = "This voice channel requires you to have your camera turned on."
    warning_color: int = 0xFF6B6B
    warning_footer: str = "Turn on your camera and rejoin the channel."
    fallback_channel_name: str = "Camera-Only Voice Channel"
    disconnect_reason: str = "Camera not enabled in camera-only channel"


def _parse_channel_ids(raw: str) -> frozenset[int]:
    """
    Accepts IDs separated by commas and/or whitespace:
      CAM_ONLY_CHANNELS="123, 456 789"
    """
    ids = set()
    for part in re.split(r"[,\s]+", raw.strip()):
        if not part:
            continue
        try:
            ids.add(int(part))
        except ValueError:
            raise ValueError(f"CAM_ONLY_CHANNELS: not a channel id: {part!r}") from None
    return frozenset(ids)


def _parse_names(raw: str) -> frozenset[str]:
    # role names may contain spaces, so only commas split
    return frozenset(p.strip() for p in raw.split(",") if p.strip())


def _env_number(name: str, default, cast):
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_log_level() -> str:
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    if not raw:
        return "INFO"
    if raw not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return raw


def load_settings() -> Settings:
    # .env is for local runs; never overrides real env vars
    load_dotenv(override=False)

    token = (
        os.getenv("DISCORD_TOKEN", "").strip()
        or os.getenv("TOKEN", "").strip()
        or os.getenv("DISCORD_BOT_TOKEN", "").strip()
    )
    if not token:
        raise RuntimeError(
            "Missing bot token.\n"
            "Set DISCORD_TOKEN=... in the environment or in a .env file.\n"
            "Fallback supported: TOKEN / DISCORD_BOT_TOKEN."
        )

    raw_channels = (os.getenv("CAM_ONLY_CHANNELS") or "").strip()
    channels = _parse_channel_ids(raw_channels) if raw_channels else frozenset(DEFAULT_CAM_ONLY_CHANNELS)

    raw_roles = os.getenv("EXEMPT_ROLES")
    roles = _parse_names(raw_roles) if raw_roles is not None else frozenset(DEFAULT_EXEMPT_ROLES)

    settings = Settings(
        token=token,
        command_prefix=(os.getenv("CAMGUARD_PREFIX") or "").strip() or "!",
        log_level=_env_log_level(),
        port=_env_number("PORT", 3000, int),
        heartbeat_minutes=_env_number("CAMGUARD_HEARTBEAT_MINUTES", 5, float),
        cam_only_channels=channels,
        grace_seconds=_env_number("GRACE_PERIOD_SECONDS", 10.0, float),
        exempt_roles=roles,
    )

    # safe: never logs the token value
    log.info(
        "[CamGuard] config: port=%s channels=%d grace=%ss exempt_roles=%s",
        settings.port,
        len(settings.cam_only_channels),
        settings.grace_seconds,
        sorted(settings.exempt_roles),
    )
    return settings
