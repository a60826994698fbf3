"""Contexte utilisateur et contrôles de rôle (l'authentification est externe)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request

from inevent.models.event import Event


ROLE_ADMIN = "ADMIN"
ROLE_ORGANIZER = "ORGANIZER"
ROLE_USER = "USER"

STAFF_ROLES = frozenset({ROLE_ADMIN, ROLE_ORGANIZER})


@dataclass
class Access:
    user_id: int
    role: str = ROLE_USER

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def can_manage_event(self, event: Event) -> bool:
        if self.role == ROLE_ADMIN:
            return True
        # Un organisateur ne voit que ses propres événements
        return self.role == ROLE_ORGANIZER and event.user_id == self.user_id


def extract_user_context(request: Request) -> tuple[str, Optional[int]]:
    """Récupère role/user_id depuis state (token), headers, cookies ou query (fallback)."""
    state_ctx = getattr(request.state, "user_ctx", None)
    if state_ctx:
        return (state_ctx.get("role") or ROLE_USER), state_ctx.get("user_id")
    role = (
        request.headers.get("X-User-Role")
        or request.cookies.get("user_role")
        or request.query_params.get("user_role")
        or ROLE_USER
    )
    user_id_raw = (
        request.headers.get("X-User-Id")
        or request.cookies.get("user_id")
        or request.query_params.get("user_id")
    )
    try:
        user_id = int(user_id_raw) if user_id_raw not in (None, "") else None
    except ValueError:
        user_id = None
    return role.strip().upper(), user_id


def load_access(request: Request) -> Access:
    """Charge l'utilisateur courant ; 401 si aucun utilisateur identifié."""
    role, user_id = extract_user_context(request)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Vous devez être connecté")
    return Access(user_id=user_id, role=role)


def require_organizer(access: Access) -> None:
    """Lève une exception HTTP 403 si l'utilisateur n'est ni organisateur ni admin."""
    if not access.is_staff:
        raise HTTPException(status_code=403, detail="Non autorisé")


def require_event_access(access: Access, event: Event) -> None:
    if not access.can_manage_event(event):
        raise HTTPException(status_code=403, detail="Accès refusé à cet événement")
