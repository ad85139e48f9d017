from __future__ import annotations

import logging
import time
from typing import Callable

from gigledger.application.exceptions import AuthenticationError, DuplicateRecordError, ValidationError
from gigledger.application.ports.ledger_store import SESSIONS, USERS, LedgerStorePort, Records
from gigledger.application.utils.passwords import hash_password, new_session_token, verify_password
from gigledger.application.utils.validation import is_blank
from gigledger.domain.entities.user import Session, User

MIN_PASSWORD_LENGTH = 8


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AccountService:
    def __init__(
        self,
        store: LedgerStorePort,
        session_ttl_seconds: float = 7 * 24 * 3600,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._store = store
        self._session_ttl = session_ttl_seconds
        self._clock = clock or time.time
        self._logger = logging.getLogger(__name__)

    def _find_user(self, email: str) -> User | None:
        for record in self._store.read_collection(USERS):
            user = User.from_record(record)
            if _normalize_email(user.email) == email:
                return user
        return None

    def register(self, name: str, email: str, password: str) -> User:
        errors: dict[str, str] = {}
        if is_blank(name):
            errors["name"] = "Name is required"
        if is_blank(email) or "@" not in email:
            errors["email"] = "A valid email is required"
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if errors:
            raise ValidationError(errors)

        normalized = _normalize_email(email)
        user = User(name=name.strip(), email=normalized, password_hash=hash_password(password))

        def _append(records: Records) -> Records:
            if any(_normalize_email(str(r.get("email") or "")) == normalized for r in records):
                raise DuplicateRecordError(f"User with email '{normalized}' already exists")
            return records + [user.to_record()]

        self._store.update_collection(USERS, _append)
        self._logger.info("User registered", extra={"email": normalized})
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and open a session. Returns the bearer token."""
        normalized = _normalize_email(email)
        user = self._find_user(normalized)
        if user is None or not verify_password(password or "", user.password_hash):
            self._logger.warning("Login failed", extra={"email": normalized})
            raise AuthenticationError("Invalid email or password")

        now = self._clock()
        session = Session(token=new_session_token(), email=user.email, created_at=now)

        def _open(records: Records) -> Records:
            live = [r for r in records if not self._is_expired(Session.from_record(r), now)]
            return live + [session.to_record()]

        self._store.update_collection(SESSIONS, _open)
        self._logger.info("User logged in", extra={"email": user.email})
        return session.token

    def logout(self, token: str) -> bool:
        closed = False

        def _close(records: Records) -> Records:
            nonlocal closed
            remaining = [r for r in records if r.get("token") != token]
            if len(remaining) == len(records):
                return records
            closed = True
            return remaining

        self._store.update_collection(SESSIONS, _close)
        return closed

    def current_user(self, token: str | None) -> User:
        if not token:
            raise AuthenticationError("Missing session token")
        now = self._clock()
        for record in self._store.read_collection(SESSIONS):
            session = Session.from_record(record)
            if session.token != token:
                continue
            if self._is_expired(session, now):
                break
            user = self._find_user(session.email)
            if user is not None:
                return user
            break
        raise AuthenticationError("Session is invalid or has expired")

    def _is_expired(self, session: Session, now: float) -> bool:
        return now - session.created_at > self._session_ttl
