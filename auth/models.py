"""User record kept by the in-memory auth store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from utils.timestamps import isoformat_utc, utc_now


@dataclass
class UserRecord:
    id: str
    full_name: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=utc_now)

    def public_view(self) -> Dict[str, Any]:
        return {"id": self.id, "fullName": self.full_name, "email": self.email}

    def profile_view(self) -> Dict[str, Any]:
        return {**self.public_view(), "createdAt": isoformat_utc(self.created_at)}


__all__ = ["UserRecord"]
