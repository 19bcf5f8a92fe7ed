# bot/services/liveness.py
from __future__ import annotations

import logging

from aiohttp import web

log = logging.getLogger(__name__)


def status_text(online: bool, channel_count: int) -> str:
    return (
        "Discord Camera Bot is running!\n\n"
        f"Bot Status: {'Online' if online else 'Offline'}\n"
        f"Monitoring {channel_count} channels"
    )


def build_app(bot, settings) -> web.Application:
    """
    Keep-alive endpoint for the host. Any method, any path -> same text body.
    """
    app = web.Application()

    async def status(_: web.Request) -> web.Response:
        online = bot.user is not None and bot.is_ready()
        return web.Response(text=status_text(online, len(settings.cam_only_channels)))

    app.router.add_route("*", "/{tail:.*}", status)
    return app


async def start_liveness_server(bot, settings, host: str = "0.0.0.0") -> web.AppRunner:
    runner = web.AppRunner(build_app(bot, settings))
    await runner.setup()

    site = web.TCPSite(runner, host, settings.port)
    await site.start()

    log.info("[CamGuard] 🌐 HTTP server running on %s:%s", host, settings.port)
    return runner
