"""
Identity/session provider contract.

The website workflow only needs the owner id of the signed-in account; it
takes that id as an explicit argument and never reads ambient session state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class UserIdentity:
    """The signed-in account as reported by the identity provider."""
    user_id: UUID
    email: Optional[str] = None


class AuthEvent:
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthChangeCallback = Callable[[str, Optional[UserIdentity]], None]


class IIdentityProvider(Protocol):
    async def get_current_user(self) -> Optional[UserIdentity]:
        ...

    def on_auth_change(self, callback: AuthChangeCallback) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        ...

    async def sign_in(self, email: str, password: str) -> UserIdentity:
        ...

    async def sign_up(self, email: str, password: str) -> UserIdentity:
        ...

    async def sign_out(self) -> None:
        ...
