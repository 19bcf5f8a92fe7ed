# bot/ui/formatting.py
import discord


def fmt_seconds(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds == int(seconds):
        seconds = int(seconds)
    if seconds >= 60 and seconds % 60 == 0:
        return f"{int(seconds // 60)}m"
    return f"{seconds}s"


def camera_warning_embed(settings, channel_name: str) -> discord.Embed:
    embed = discord.Embed(
        title=settings.warning_title,
        description=(
            f"{settings.warning_description}\n\n"
            f"**Channel:** {channel_name}\n\n"
            "Please turn on your camera and rejoin the channel."
        ),
        color=settings.warning_color,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_footer(text=settings.warning_footer)
    return embed


def status_embed(
    *,
    settings,
    channel_lines: list[str],
    pending: int,
) -> discord.Embed:
    embed = discord.Embed(
        title="📹 Camera Guard",
        description=f"Camera required in **{len(channel_lines)}** channel(s).",
        color=settings.warning_color,
    )

    embed.add_field(
        name="Channels",
        value="\n".join(channel_lines) if channel_lines else "None configured",
        inline=False,
    )
    embed.add_field(name="Grace period", value=fmt_seconds(settings.grace_seconds), inline=True)
    embed.add_field(name="Pending", value=f"**{pending}** user(s)", inline=True)

    exempt = ", ".join(sorted(settings.exempt_roles)) or "—"
    embed.set_footer(text=f"Exempt: Administrator, Manage Server, roles: {exempt}")
    return embed
