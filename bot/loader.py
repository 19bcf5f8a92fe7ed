# bot/loader.py
from __future__ import annotations

import logging

from bot.cogs.camera_guard import CameraGuardCog
from bot.cogs.meta import MetaCog
from bot.cogs.errors import ErrorHandlerCog

log = logging.getLogger(__name__)


async def load_all(bot, settings, tracker=None):
    log.info("[CamGuard] Starting loader...")

    # attach shared deps (so any cog can grab them if needed)
    bot.settings = settings

    # ---------------- CAMERA GUARD ----------------
    guard = CameraGuardCog(bot, settings, tracker=tracker)
    await bot.add_cog(guard)
    bot.grace_tracker = guard.tracker
    log.info("[CamGuard] ✅ CameraGuardCog loaded")

    # ---------------- META ----------------
    try:
        await bot.add_cog(MetaCog(bot, settings, guard.tracker))
        log.info("[CamGuard] ✅ MetaCog loaded")
    except Exception:
        log.exception("[CamGuard] ❌ MetaCog FAILED")

    # ---------------- ERROR HANDLER ----------------
    try:
        await bot.add_cog(ErrorHandlerCog(bot))
        log.info("[CamGuard] ✅ ErrorHandlerCog loaded")
    except Exception:
        log.exception("[CamGuard] ❌ ErrorHandlerCog FAILED")

    log.info("[CamGuard] Loaded cogs: %s", ", ".join(bot.cogs.keys()))
