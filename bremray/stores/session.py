"""Signed-in identity, role, and the admin "view as technician" toggle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from bremray.db.preferences import PreferenceStore
from bremray.permissions import Role
from bremray.stores.base import ObservableStore

logger = logging.getLogger(__name__)

VIEW_MODE_KEY = "adminViewMode"
_VIEW_TECH = "tech"
_VIEW_ADMIN = "admin"


@dataclass(frozen=True)
class Identity:
    email: str
    role: Role
    viewing_as_technician: bool = False


def effective_role(identity: Identity | None) -> Role | None:
    if identity is None:
        return None
    if identity.role == Role.ADMIN and identity.viewing_as_technician:
        return Role.TECHNICIAN
    return identity.role


class SessionStore(ObservableStore[Identity | None]):
    def __init__(self, preferences: PreferenceStore, admin_emails: Iterable[str] = ()):
        super().__init__(None)
        self._preferences = preferences
        self._admin_emails = {e.strip().lower() for e in admin_emails}

    @property
    def identity(self) -> Identity | None:
        return self.data

    @property
    def effective_role(self) -> Role | None:
        return effective_role(self.data)

    async def sign_in(self, email: str, role: Role | None = None) -> Identity:
        """Start a session. Without an explicit role, configured admin emails are admins."""
        if role is None:
            role = Role.ADMIN if email.strip().lower() in self._admin_emails else Role.TECHNICIAN
        viewing = False
        if role == Role.ADMIN:
            viewing = await self._preferences.get(VIEW_MODE_KEY) == _VIEW_TECH
        identity = Identity(email=email, role=role, viewing_as_technician=viewing)
        self._patch(data=identity, error=None)
        return identity

    async def toggle_view_mode(self) -> None:
        """Admins only: switch between admin and technician views. Persisted."""
        identity = self.data
        if identity is None or identity.role != Role.ADMIN:
            logger.info("Ignoring view mode toggle for non-admin session")
            return
        viewing = not identity.viewing_as_technician
        await self._preferences.set(VIEW_MODE_KEY, _VIEW_TECH if viewing else _VIEW_ADMIN)
        self._patch(data=replace(identity, viewing_as_technician=viewing))

    async def logout(self) -> None:
        await self._preferences.delete(VIEW_MODE_KEY)
        self._patch(data=None, error=None)
