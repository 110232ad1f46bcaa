"""
Auth repositories.

Two backends for each store:
- In-memory (simulated mode): process-local dicts, used in development
  and tests.
- Supabase (live mode): tables ``user_token_versions`` and ``users``.

The service container picks one set based on ``STORAGE_BACKEND``.
"""

import logging
import threading
from typing import Optional

from shared.repository import BaseRepository
from .models import SessionUser

logger = logging.getLogger(__name__)

INITIAL_TOKEN_VERSION = 1


class InMemoryTokenVersionStore:
    """Token versions kept in a dict."""

    def __init__(self) -> None:
        self._versions: dict[str, int] = {}
        self._lock = threading.Lock()

    def get_version(self, user_id: str) -> int:
        with self._lock:
            return self._versions.get(user_id, INITIAL_TOKEN_VERSION)

    def increment_version(self, user_id: str) -> int:
        with self._lock:
            version = self._versions.get(user_id, INITIAL_TOKEN_VERSION) + 1
            self._versions[user_id] = version
            return version


class SupabaseTokenVersionStore(BaseRepository[int]):
    """
    Token versions stored in the ``user_token_versions`` table.

    Schema: ``user_id text primary key, token_version integer not null``.
    A missing row means the user has never revoked their sessions.
    """

    TABLE = "user_token_versions"

    def get_version(self, user_id: str) -> int:
        result = (
            self._db.table(self.TABLE)
            .select("token_version")
            .eq("user_id", user_id)
            .execute()
        )
        if not result.data:
            return INITIAL_TOKEN_VERSION
        return int(result.data[0]["token_version"])

    def increment_version(self, user_id: str) -> int:
        version = self.get_version(user_id) + 1
        self._db.table(self.TABLE).upsert(
            {"user_id": user_id, "token_version": version},
            on_conflict="user_id",
        ).execute()
        return version


class InMemoryUserDirectory:
    """Users kept in a dict; populate with add()."""

    def __init__(self, users: Optional[list[SessionUser]] = None) -> None:
        self._users: dict[str, SessionUser] = {u.id: u for u in users or []}

    def add(self, user: SessionUser) -> None:
        self._users[user.id] = user

    def get_user(self, user_id: str) -> Optional[SessionUser]:
        return self._users.get(user_id)


class SupabaseUserDirectory(BaseRepository[SessionUser]):
    """Reads session fields from the ``users`` table."""

    TABLE = "users"

    def get_user(self, user_id: str) -> Optional[SessionUser]:
        result = (
            self._db.table(self.TABLE)
            .select("id, email, is_admin, subscription_status")
            .eq("id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict) -> SessionUser:
        return SessionUser(
            id=str(data["id"]),
            email=data["email"],
            is_admin=bool(data.get("is_admin", False)),
            subscription_status=data.get("subscription_status") or "inactive",
        )
