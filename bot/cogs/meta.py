# bot/cogs/meta.py
from __future__ import annotations

import logging

import discord
from discord.ext import commands, tasks

from bot.ui.formatting import status_embed

log = logging.getLogger(__name__)


class MetaCog(commands.Cog):
    def __init__(self, bot: commands.Bot, settings, tracker):
        self.bot = bot
        self.settings = settings
        self.tracker = tracker

        minutes = float(getattr(settings, "heartbeat_minutes", 5) or 0)
        if minutes > 0:
            self.heartbeat.change_interval(minutes=minutes)
            self.heartbeat.start()

    def cog_unload(self):
        self.heartbeat.cancel()

    @tasks.loop(minutes=5)
    async def heartbeat(self):
        log.info("[CamGuard] 🔄 heartbeat: ready=%s pending=%d", self.bot.is_ready(), len(self.tracker))

    @commands.Cog.listener()
    async def on_ready(self):
        log.info("[CamGuard] ✅ ONLINE as %s | guilds=%d", self.bot.user, len(self.bot.guilds))
        log.info("[CamGuard] 🔍 monitoring %d camera-only channels", len(self.settings.cam_only_channels))

    def _channel_lines(self, guild: discord.Guild | None) -> list[str]:
        lines = []
        for channel_id in sorted(self.settings.cam_only_channels):
            channel = guild.get_channel(channel_id) if guild is not None else None
            if channel is not None:
                lines.append(f"🔊 {channel.mention}")
            else:
                lines.append(f"`{channel_id}` (not in this server)")
        return lines

    @commands.command(name="camguard", aliases=["camstatus"])
    @commands.guild_only()
    async def camguard(self, ctx: commands.Context):
        """
        Shows the camera-only channels and how many users are on a grace period.
        Usage:
          !camguard
        """
        embed = status_embed(
            settings=self.settings,
            channel_lines=self._channel_lines(ctx.guild),
            pending=len(self.tracker),
        )
        await ctx.reply(embed=embed)
