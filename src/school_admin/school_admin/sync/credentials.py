from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from flask import has_request_context, session

from ..core.constants import DEFAULT_USER_STORAGE_KEY


@dataclass(frozen=True)
class Credentials:
    user_id: Any
    token: str
    id_card: str

    @classmethod
    def from_user(cls, user: Optional[Mapping[str, Any]]) -> Optional["Credentials"]:
        if not user or user.get("id") in (None, ""):
            return None
        # Older bridge deployments authenticate with the password itself.
        token = user.get("token") or user.get("password") or ""
        return cls(user_id=user["id"], token=str(token), id_card=str(user.get("idCard") or ""))

    def to_wire(self) -> dict:
        return {"id": self.user_id, "token": self.token, "idCard": self.id_card}


CredentialsProvider = Callable[[], Optional[Credentials]]


class SessionUserStore:
    """The logged-in user record, kept in the Flask session under one key.

    Written by login, cleared by logout, and read fresh by the sync client on
    every call through :meth:`credentials`.

    The record carries the bridge-issued ``token`` when login returned one.
    Otherwise it carries the plaintext password, because older bridge
    deployments accept nothing else as the auth token. Flask's default session
    is a signed cookie: it cannot be forged, but the client can decode and read
    it. Deployments that keep the password fallback should serve over HTTPS
    only (``SESSION_COOKIE_SECURE``) or move to a server-side session.
    """

    def __init__(self, key: str = DEFAULT_USER_STORAGE_KEY):
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Optional[dict]:
        if not has_request_context():
            return None
        raw = session.get(self._key)
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except ValueError:
                session.pop(self._key, None)
                return None
        return raw if isinstance(raw, dict) else None

    def save(self, user: Mapping[str, Any], *, remember: bool = False) -> None:
        session[self._key] = dict(user)
        session.permanent = bool(remember)

    def clear(self) -> None:
        session.pop(self._key, None)

    def credentials(self) -> Optional[Credentials]:
        return Credentials.from_user(self.load())
