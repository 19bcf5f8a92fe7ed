# bot/core/exemption.py
from __future__ import annotations

from typing import Iterable


def is_exempt(member, exempt_roles: Iterable[str]) -> bool:
    """
    Admins, server managers and members holding an exempt role (exact name
    match) don't need a camera. Missing permissions/roles just mean False.
    """
    perms = getattr(member, "guild_permissions", None)
    if perms is not None:
        if getattr(perms, "administrator", False):
            return True
        if getattr(perms, "manage_guild", False):
            return True

    names = set(exempt_roles)
    if not names:
        return False

    for role in getattr(member, "roles", None) or ():
        if getattr(role, "name", None) in names:
            return True
    return False
