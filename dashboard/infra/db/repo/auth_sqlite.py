from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Optional

import aiosqlite

from dashboard.domain.auth.models import Profile, Session, SignOutScope, User
from dashboard.domain.auth.ports import SessionProvider
from dashboard.domain.common.errors import AlreadyRegisteredError, AuthError, InvalidCredentialsError
from dashboard.domain.common.time import to_utc_iso
from dashboard.domain.items.ports import Clock, IdGenerator
from dashboard.infra.db.connection import Database

_PBKDF2_ROUNDS = 200_000


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ROUNDS)
    return f"pbkdf2_sha256${_PBKDF2_ROUNDS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        _, rounds, salt_hex, digest_hex = encoded.split("$")
        digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(rounds))
    except ValueError:
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)


class SqliteSessionProvider(SessionProvider):
    """Self-hosted identity provider on the same SQLite file (users / profiles / sessions)."""

    def __init__(self, db: Database, clock: Clock, ids: IdGenerator) -> None:
        super().__init__()
        self._db = db
        self._clock = clock
        self._ids = ids

    async def get_session(self, access_token: str) -> Optional[Session]:
        try:
            row = await self._db.fetchone(
                """
                SELECT s.access_token, s.created_at, u.id AS user_id, u.email
                FROM sessions s
                JOIN users u ON u.id = s.user_id
                WHERE s.access_token = ?;
                """,
                (access_token,),
            )
        except aiosqlite.Error as e:
            raise AuthError(f"Could not read session: {e}") from e
        return self._row_to_session(row) if row else None

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        try:
            row = await self._db.fetchone(
                "SELECT user_id, display_name FROM profiles WHERE user_id = ?;",
                (user_id,),
            )
        except aiosqlite.Error as e:
            raise AuthError(f"Could not read profile: {e}") from e
        if not row:
            return None
        return Profile(user_id=row["user_id"], display_name=row["display_name"])

    async def sign_up(self, email: str, password: str, display_name: str) -> Session:
        now_iso = to_utc_iso(self._clock.now())
        user_id = self._ids.new_id()
        try:
            existing = await self._db.fetchone("SELECT id FROM users WHERE email = ?;", (email,))
            if existing:
                raise AlreadyRegisteredError("User already registered")
            await self._db.execute(
                "INSERT INTO users(id, email, password_hash, created_at) VALUES (?, ?, ?, ?);",
                (user_id, email, hash_password(password), now_iso),
            )
            await self._db.execute(
                "INSERT INTO profiles(user_id, display_name, created_at) VALUES (?, ?, ?);",
                (user_id, display_name, now_iso),
            )
        except aiosqlite.IntegrityError as e:
            # lost a race against a concurrent sign-up with the same email
            raise AlreadyRegisteredError("User already registered") from e
        except aiosqlite.Error as e:
            raise AuthError(f"Sign up failed: {e}") from e

        return await self._open_session(User(id=user_id, email=email), now_iso)

    async def sign_in(self, email: str, password: str) -> Session:
        try:
            row = await self._db.fetchone(
                "SELECT id, email, password_hash FROM users WHERE email = ?;",
                (email,),
            )
        except aiosqlite.Error as e:
            raise AuthError(f"Sign in failed: {e}") from e

        if not row or not verify_password(password, row["password_hash"]):
            raise InvalidCredentialsError("Invalid login credentials")

        return await self._open_session(User(id=row["id"], email=row["email"]), to_utc_iso(self._clock.now()))

    async def sign_out(self, access_token: str, scope: SignOutScope = "global") -> None:
        session = await self.get_session(access_token)
        if session is None:
            return
        try:
            if scope == "global":
                await self._db.execute("DELETE FROM sessions WHERE user_id = ?;", (session.user.id,))
            else:
                await self._db.execute("DELETE FROM sessions WHERE access_token = ?;", (access_token,))
        except aiosqlite.Error as e:
            raise AuthError(f"Sign out failed: {e}") from e
        await self._emit("SIGNED_OUT", session)

    async def _open_session(self, user: User, now_iso: str) -> Session:
        token = secrets.token_urlsafe(32)
        try:
            await self._db.execute(
                "INSERT INTO sessions(access_token, user_id, created_at) VALUES (?, ?, ?);",
                (token, user.id, now_iso),
            )
        except aiosqlite.Error as e:
            raise AuthError(f"Could not open session: {e}") from e
        session = Session(access_token=token, user=user, created_at=now_iso)
        await self._emit("SIGNED_IN", session)
        return session

    def _row_to_session(self, row) -> Session:
        return Session(
            access_token=row["access_token"],
            user=User(id=row["user_id"], email=row["email"]),
            created_at=row["created_at"],
        )
