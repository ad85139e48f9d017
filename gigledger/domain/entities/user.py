from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    name: str
    email: str
    password_hash: str

    def to_record(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "passwordHash": self.password_hash}

    @staticmethod
    def from_record(data: dict[str, Any]) -> "User":
        return User(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            password_hash=str(data.get("passwordHash") or ""),
        )


@dataclass(frozen=True)
class Session:
    token: str
    email: str
    created_at: float

    def to_record(self) -> dict[str, Any]:
        return {"token": self.token, "email": self.email, "createdAt": self.created_at}

    @staticmethod
    def from_record(data: dict[str, Any]) -> "Session":
        return Session(
            token=str(data.get("token") or ""),
            email=str(data.get("email") or ""),
            created_at=float(data.get("createdAt") or 0.0),
        )
