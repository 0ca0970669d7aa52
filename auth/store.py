"""
UserStore — the email-keyed user table.

Lives in process memory and is owned by the application (created in
``create_app`` and injected into route handlers), so a durable backend can
replace it without touching route logic.  Nothing survives a restart.

All mutations go through one ``asyncio.Lock`` so two concurrent
registrations for the same email cannot both succeed.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Dict, Optional

from auth.models import UserRecord
from utils.errors import Conflict

logger = logging.getLogger(__name__)


class UserStore:
    """In-memory ``email → UserRecord`` table."""

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, email: str) -> bool:
        return email in self._users

    async def get(self, email: str) -> Optional[UserRecord]:
        return self._users.get(email)

    async def create(self, full_name: str, email: str, password_hash: str) -> UserRecord:
        """Insert a new record; raises ``Conflict`` if the email is taken."""
        async with self._lock:
            if email in self._users:
                raise Conflict("User already exists")
            record = UserRecord(
                id=str(uuid.uuid1()),
                full_name=full_name,
                email=email,
                password_hash=password_hash,
            )
            self._users[email] = record
        return record

    async def update_full_name(self, email: str, full_name: str) -> Optional[UserRecord]:
        async with self._lock:
            record = self._users.get(email)
            if record is not None:
                record.full_name = full_name
        return record

    async def set_password_hash(
        self,
        email: str,
        password_hash: str,
        expected_hash: Optional[str] = None,
    ) -> bool:
        """
        Replace a stored hash.

        With ``expected_hash`` the swap only happens if the current hash
        still matches it, so a reset token cannot be replayed against a
        password that was changed in the meantime.
        """
        async with self._lock:
            record = self._users.get(email)
            if record is None:
                return False
            if expected_hash is not None and record.password_hash != expected_hash:
                return False
            record.password_hash = password_hash
        return True

    async def clear(self) -> None:
        async with self._lock:
            count = len(self._users)
            self._users.clear()
        if count:
            logger.info("Discarded %d in-memory user record(s)", count)
