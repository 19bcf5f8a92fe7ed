# bot/cogs/camera_guard.py
from __future__ import annotations

import logging
from dataclasses import dataclass

import discord
from discord.ext import commands

from bot.core.exemption import is_exempt
from bot.core.state import GracePeriodTracker
from bot.core.transitions import Transition, channel_id_of, classify
from bot.ui.formatting import camera_warning_embed

log = logging.getLogger(__name__)

# Discord: "Cannot send messages to this user"
DM_CLOSED_CODE = 50007


@dataclass(frozen=True)
class HandlerResult:
    transition: Transition
    ok: bool = True
    error: BaseException | None = None


class CameraGuardCog(commands.Cog):
    """
    Camera-only voice channels:
    - Ignores bots
    - Join / switch into a monitored channel without camera -> grace period
    - Camera turned on in time -> grace period cleared
    - Camera turned off again -> new grace period
    - Leaving voice always clears the grace period
    - Grace period runs out -> disconnect + warning DM
    - Admins / Manage Server / exempt roles are never touched
    """

    def __init__(self, bot: commands.Bot, settings, tracker: GracePeriodTracker | None = None):
        self.bot = bot
        self.settings = settings
        self.tracker = tracker if tracker is not None else GracePeriodTracker(settings.grace_seconds)

    def cog_unload(self):
        self.tracker.cancel_all()

    # ---------------- helpers ----------------

    def is_monitored(self, channel_id: int | None) -> bool:
        return channel_id is not None and channel_id in self.settings.cam_only_channels

    def _exempt(self, member: discord.Member) -> bool:
        return is_exempt(member, self.settings.exempt_roles)

    def _start_grace(self, member: discord.Member, channel_id: int) -> None:
        async def _fire():
            await self.enforce(member, channel_id)

        self.tracker.start(member.id, channel_id, _fire)

    # ---------------- voice state updates ----------------

    @commands.Cog.listener()
    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ):
        if member.bot:
            return

        result = self._handle_transition(member, before, after)
        if not result.ok:
            log.error(
                "[CamGuard] ❌ voice state update failed: user=%s transition=%s",
                getattr(member, "id", "?"),
                result.transition.value,
                exc_info=result.error,
            )

    def _handle_transition(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> HandlerResult:
        """
        Classify one event and drive the tracker. Never raises: failures
        come back as HandlerResult(ok=False) for the listener to log.
        """
        transition = Transition.IGNORED
        try:
            transition = classify(
                channel_id_of(before),
                channel_id_of(after),
                bool(before.self_video),
                bool(after.self_video),
            )

            if transition is Transition.JOIN:
                self._on_join(member, after)
            elif transition is Transition.CAMERA_TOGGLE:
                self._on_camera_change(member, before, after)
            elif transition is Transition.LEAVE:
                self.tracker.cancel(member.id)

            return HandlerResult(transition)
        except Exception as exc:
            return HandlerResult(transition, ok=False, error=exc)

    def _on_join(self, member: discord.Member, after: discord.VoiceState) -> None:
        channel_id = channel_id_of(after)

        if not self.is_monitored(channel_id):
            # moved out of a camera-only channel: old timer no longer applies
            self.tracker.cancel(member.id)
            return

        if self._exempt(member):
            log.info("[CamGuard] 👑 %s joined camera-only channel %s (exempt)", member, channel_id)
            self.tracker.cancel(member.id)
            return

        if not after.self_video:
            log.info("[CamGuard] 👁️ %s joined camera-only channel %s without camera", member, channel_id)
            self._start_grace(member, channel_id)
        else:
            log.info("[CamGuard] ✅ %s joined camera-only channel %s with camera on", member, channel_id)
            self.tracker.cancel(member.id)

    def _on_camera_change(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        channel_id = channel_id_of(after)
        if not self.is_monitored(channel_id):
            return
        if self._exempt(member):
            return

        if before.self_video and not after.self_video:
            log.info("[CamGuard] 📹 %s turned off camera in %s", member, channel_id)
            self._start_grace(member, channel_id)
        elif not before.self_video and after.self_video:
            log.info("[CamGuard] ✅ %s turned on camera", member)
            self.tracker.cancel(member.id)

    # ---------------- enforcement ----------------

    def _channel_name(self, member: discord.Member, channel_id: int) -> str:
        try:
            channel = member.guild.get_channel(channel_id)
        except Exception:
            channel = None
        if channel is None:
            return self.settings.fallback_channel_name
        return channel.name

    async def enforce(self, member: discord.Member, channel_id: int) -> None:
        """
        Grace period ran out: disconnect from voice, then DM a warning.
        Both steps are best-effort; nothing here propagates.
        """
        channel_name = self._channel_name(member, channel_id)

        disconnected = False
        try:
            await member.move_to(None, reason=self.settings.disconnect_reason)
            disconnected = True
        except discord.HTTPException:
            log.exception("[CamGuard] ❌ could not disconnect %s from %s", member, channel_name)

        try:
            await member.send(embed=camera_warning_embed(self.settings, channel_name))
        except discord.Forbidden as exc:
            if exc.code == DM_CLOSED_CODE:
                log.info("[CamGuard] ❌ cannot DM %s (DMs disabled)", member)
            else:
                log.warning("[CamGuard] ❌ DM to %s forbidden: %s", member, exc)
            return
        except discord.HTTPException:
            log.exception("[CamGuard] ❌ error warning %s", member)
            return

        if disconnected:
            log.info("[CamGuard] 🚫 disconnected %s from %s and sent warning DM", member, channel_name)
        else:
            log.info("[CamGuard] sent warning DM to %s (%s)", member, channel_name)
