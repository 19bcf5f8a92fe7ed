import logging

import discord
from discord.ext import commands

log = logging.getLogger(__name__)


class ErrorHandlerCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: Exception):
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.NoPrivateMessage):
            return await ctx.reply("That command only works inside a server.")

        if isinstance(error, commands.CommandInvokeError) and isinstance(error.original, discord.Forbidden):
            return await ctx.reply("I’m missing permissions (Send Messages / Embed Links) in this channel.")

        log.error("[CamGuard] command error in %s", ctx.command, exc_info=error)
        await ctx.reply(f"Command error: `{type(error).__name__}`")
