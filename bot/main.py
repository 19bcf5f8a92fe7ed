# bot/main.py
import asyncio
import logging
import signal
import sys

import discord
from discord.ext import commands

from bot.config import load_settings
from bot.core.state import GracePeriodTracker
from bot.loader import load_all
from bot.services.liveness import start_liveness_server

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("bot")


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    # stray task failures get logged, never kill the process
    exc = context.get("exception")
    log.error("[CamGuard] unhandled async error: %s", context.get("message"), exc_info=exc)


def build_bot(settings) -> commands.Bot:
    intents = discord.Intents.default()
    intents.voice_states = True
    intents.members = True
    intents.message_content = True

    return commands.Bot(command_prefix=settings.command_prefix, intents=intents)


async def run() -> int:
    try:
        settings = load_settings()
    except (RuntimeError, ValueError) as exc:
        log.error("[CamGuard] ❌ bad configuration: %s", exc)
        return 1

    logging.getLogger().setLevel(settings.log_level)

    loop = asyncio.get_running_loop()
    loop.set_exception_handler(_loop_exception_handler)

    bot = build_bot(settings)
    tracker = GracePeriodTracker(settings.grace_seconds)

    @bot.event
    async def setup_hook():
        await load_all(bot, settings, tracker)
        log.info("[CamGuard] setup_hook: cogs loaded ✅")

    @bot.event
    async def on_error(event_method: str, *args, **kwargs):
        log.exception("[CamGuard] Discord client error in %s", event_method)

    stop_event = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows
            pass

    runner = await start_liveness_server(bot, settings)
    exit_code = 0

    try:
        async with bot:
            bot_task = asyncio.create_task(bot.start(settings.token), name="camguard-bot")
            stop_task = asyncio.create_task(stop_event.wait(), name="camguard-stop")
            done, pending = await asyncio.wait({bot_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)

            if stop_task in done:
                log.info("[CamGuard] 🛑 Shutting down bot...")
            elif bot_task.exception() is not None:
                exc = bot_task.exception()
                if isinstance(exc, discord.LoginFailure):
                    log.error("[CamGuard] ❌ Failed to login: %s", exc)
                else:
                    log.error("[CamGuard] ❌ bot stopped", exc_info=exc)
                exit_code = 1

            for t in pending:
                t.cancel()
            tracker.cancel_all()
    finally:
        await runner.cleanup()

    return exit_code


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
