"""
Tests for AuthService against the SQLite session provider:
specific notices for the expected failures, storage cleanup, and
registry activation/teardown.
"""
from __future__ import annotations

import asyncio
import os
import tempfile

from dashboard.domain.auth.models import ACCESS_TOKEN_KEY
from dashboard.domain.auth.registry import SessionRegistry
from dashboard.domain.auth.service import AuthService
from dashboard.domain.common.models import Notice
from dashboard.domain.items.ports import Notifier
from dashboard.infra.clock.system_clock import SystemClock
from dashboard.infra.db.connection import Database
from dashboard.infra.db.repo.auth_sqlite import SqliteSessionProvider, hash_password, verify_password
from dashboard.infra.db.repo.table_sqlite import SqliteRemoteStore
from dashboard.infra.db.schema_version import apply_migrations
from dashboard.infra.ids.uuid_gen import UuidGenerator
from dashboard.infra.storage.memory_storage import MemorySessionStorage

CHAT = 100
OTHER_CHAT = 200


class NullNotifier(Notifier):
    async def notify(self, notice: Notice) -> None:
        return None


class Env:
    def __init__(self, db: Database) -> None:
        clock = SystemClock("UTC")
        ids = UuidGenerator()
        self.provider = SqliteSessionProvider(db, clock, ids)
        self.storage = MemorySessionStorage()
        self.registry = SessionRegistry(SqliteRemoteStore(db, clock, ids), lambda chat_id: NullNotifier())
        self.provider.on_auth_state_change(self.registry.handle_auth_event)
        self.service = AuthService(self.provider, self.storage, self.registry, app_name="Ayesha AI")


def _temp_db_path() -> str:
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    return path


async def _run_with_env(test_fn):
    path = _temp_db_path()
    try:
        db = Database(path)
        await apply_migrations(db, now_iso="2024-01-01T00:00:00+00:00")
        await test_fn(Env(db))
    finally:
        for suffix in ("", "-wal", "-shm"):
            if os.path.exists(path + suffix):
                os.unlink(path + suffix)


def test_password_hash_roundtrip_and_mismatch():
    encoded = hash_password("secret123")
    assert verify_password("secret123", encoded)
    assert not verify_password("secret124", encoded)
    assert not verify_password("secret123", "garbage")


def test_sign_up_activates_dashboard_with_display_name():
    async def run(env: Env):
        result = await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")

        assert result.ok
        assert result.notice.title == "Welcome to Ayesha AI!"
        assert result.dashboard is not None
        assert result.dashboard.display_name == "Ayesha"
        assert env.registry.get(CHAT) is result.dashboard
        assert env.storage.get(CHAT, ACCESS_TOKEN_KEY) == result.dashboard.session.access_token

    asyncio.run(_run_with_env(run))


def test_sign_up_missing_fields_is_local_validation():
    async def run(env: Env):
        result = await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "  ")
        assert not result.ok
        assert result.notice.title == "Missing information"
        assert result.notice.description == "Please fill in all fields"

        short = await env.service.sign_up(CHAT, "ayesha@example.com", "123", "Ayesha")
        assert not short.ok
        assert short.notice.title == "Password too short"

        # nothing was registered, so sign-up with full data still works
        assert (await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")).ok

    asyncio.run(_run_with_env(run))


def test_duplicate_registration_reports_account_exists():
    async def run(env: Env):
        await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")
        again = await env.service.sign_up(OTHER_CHAT, "AYESHA@example.com", "other123", "Someone")

        assert not again.ok
        assert again.notice.title == "Account exists"
        assert again.notice.is_error

    asyncio.run(_run_with_env(run))


def test_sign_in_with_wrong_password_reports_invalid_credentials():
    async def run(env: Env):
        await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")

        bad = await env.service.sign_in(OTHER_CHAT, "ayesha@example.com", "nope-nope")
        assert not bad.ok
        assert bad.notice.title == "Invalid credentials"
        assert env.registry.get(OTHER_CHAT) is None

        unknown = await env.service.sign_in(OTHER_CHAT, "nobody@example.com", "secret123")
        assert unknown.notice.title == "Invalid credentials"

        missing = await env.service.sign_in(OTHER_CHAT, "", "secret123")
        assert missing.notice.title == "Missing information"

    asyncio.run(_run_with_env(run))


def test_sign_in_replaces_previous_session_of_chat():
    async def run(env: Env):
        first = await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")
        old_token = first.dashboard.session.access_token
        env.storage.set(CHAT, "dashboard.auth.refresh_token", "stale")
        env.storage.set(CHAT, "theme", "dark")

        second = await env.service.sign_in(CHAT, "ayesha@example.com", "secret123")
        assert second.ok
        assert second.notice.title == "Welcome back!"

        # auth keys were cleared first, unrelated keys kept
        assert env.storage.get(CHAT, "dashboard.auth.refresh_token") is None
        assert env.storage.get(CHAT, "theme") == "dark"
        assert await env.provider.get_session(old_token) is None
        assert env.storage.get(CHAT, ACCESS_TOKEN_KEY) == second.dashboard.session.access_token

    asyncio.run(_run_with_env(run))


def test_global_sign_out_tears_down_every_chat_of_the_user():
    async def run(env: Env):
        await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")
        # same account signed in from a second chat
        await env.service.sign_in(OTHER_CHAT, "ayesha@example.com", "secret123")
        assert env.registry.get(OTHER_CHAT) is not None

        notice = await env.service.sign_out(OTHER_CHAT)
        assert not notice.is_error

        assert env.registry.get(CHAT) is None
        assert env.registry.get(OTHER_CHAT) is None
        assert env.storage.get(OTHER_CHAT, ACCESS_TOKEN_KEY) is None
        assert len(env.registry) == 0

    asyncio.run(_run_with_env(run))


def test_resolve_restores_session_from_storage():
    async def run(env: Env):
        result = await env.service.sign_up(CHAT, "ayesha@example.com", "secret123", "Ayesha")
        token = result.dashboard.session.access_token

        # process-wide state lost (e.g. registry entry dropped), token still stored
        env.registry.teardown(CHAT)
        restored = await env.service.resolve(CHAT)
        assert restored is not None
        assert restored.session.access_token == token
        assert restored.display_name == "Ayesha"

        # unknown token -> no session, storage cleaned
        env.registry.teardown(CHAT)
        env.storage.set(CHAT, ACCESS_TOKEN_KEY, "bogus")
        assert await env.service.resolve(CHAT) is None
        assert env.storage.get(CHAT, ACCESS_TOKEN_KEY) is None

    asyncio.run(_run_with_env(run))
