from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Who is calling and in which role.

    Issued by the identity provider (login flow, out of scope here) and stored
    in the Flask session as ``user_id`` / ``role``.
    """

    user_id: str
    role: Role

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN


def caller_from_session(data: Mapping) -> Optional[Caller]:
    """Build a Caller from session data, or None when no valid identity is present."""

    user_id = data.get("user_id")
    role_s = data.get("role")
    if user_id is None or str(user_id).strip() == "" or not role_s:
        return None
    try:
        role = Role(str(role_s))
    except ValueError:
        return None
    return Caller(user_id=str(user_id), role=role)
