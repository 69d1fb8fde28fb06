"""
Buttons pressed on an old list (empty or outdated local cache) reload the
list instead of acting on nothing. Handlers are called directly with
hand-written stand-ins for aiogram's CallbackQuery / Message.
"""
from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path

from dashboard.config import Settings
from dashboard.domain.auth.models import Session, User
from dashboard.domain.auth.registry import DashboardSession
from dashboard.domain.common.models import Notice
from dashboard.domain.items.controller import ViewStateController
from dashboard.domain.items.ports import Notifier
from dashboard.infra.clock.system_clock import SystemClock
from dashboard.infra.db.connection import Database
from dashboard.infra.db.repo.table_sqlite import SqliteRemoteStore
from dashboard.infra.db.schema_version import apply_migrations
from dashboard.infra.ids.uuid_gen import UuidGenerator
from dashboard.ui.telegram.handlers.notes import note_edit
from dashboard.ui.telegram.handlers.tasks import task_toggle
from dashboard.ui.telegram.texts import dashboard as t

OWNER = "u1"

SETTINGS = Settings(
    bot_token="123:abc",
    timezone="UTC",
    db_path=Path("unused.db"),
    app_name="Ayesha AI",
    note_preview_chars=160,
    log_level="INFO",
)


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.notices: list[Notice] = []

    async def notify(self, notice: Notice) -> None:
        self.notices.append(notice)


class FakeMessage:
    def __init__(self) -> None:
        self.edits: list[str] = []
        self.sent: list[str] = []

    async def edit_text(self, text, reply_markup=None):
        self.edits.append(text)

    async def answer(self, text, reply_markup=None):
        self.sent.append(text)


class FakeCallback:
    def __init__(self, data: str) -> None:
        self.data = data
        self.message = FakeMessage()
        self.answers: list = []

    async def answer(self, text=None, **kwargs):
        self.answers.append(text)


def _temp_db_path() -> str:
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    return path


async def _run_with_dash(test_fn):
    path = _temp_db_path()
    try:
        db = Database(path)
        await apply_migrations(db, now_iso="2024-01-01T00:00:00+00:00")
        store = SqliteRemoteStore(db, SystemClock("UTC"), UuidGenerator())
        notifier = RecordingNotifier()
        dash = DashboardSession(
            chat_id=1,
            session=Session(access_token="tok", user=User(id=OWNER, email="a@example.com"),
                            created_at="2024-01-01T00:00:00+00:00"),
            profile=None,
            controller=ViewStateController(store, notifier),
        )
        await test_fn(dash, store, notifier)
    finally:
        for suffix in ("", "-wal", "-shm"):
            if os.path.exists(path + suffix):
                os.unlink(path + suffix)


def test_toggle_on_old_list_reloads_tasks_without_toggling():
    async def run(dash: DashboardSession, store: SqliteRemoteStore, notifier: RecordingNotifier):
        # row exists remotely, local cache is still empty
        row = await store.table("tasks").insert(OWNER, {"text": "Buy groceries", "completed": False})

        cb = FakeCallback(f"task:toggle:{row['id']}")
        await task_toggle(cb, dash)

        assert cb.answers == [t.STALE_ITEM]
        assert len(cb.message.edits) == 1
        assert "0/1 done" in cb.message.edits[0]
        assert t.NO_TASKS not in cb.message.edits[0]
        assert (await store.table("tasks").select(OWNER))[0]["completed"] is False
        assert notifier.notices == []

    asyncio.run(_run_with_dash(run))


def test_toggle_on_current_list_toggles():
    async def run(dash: DashboardSession, store: SqliteRemoteStore, notifier: RecordingNotifier):
        await dash.controller.add_task("Buy groceries", OWNER)

        cb = FakeCallback(f"task:toggle:{dash.controller.tasks[0].id}")
        await task_toggle(cb, dash)

        assert cb.answers == ["Done ✅"]
        assert "1/1 done" in cb.message.edits[0]

    asyncio.run(_run_with_dash(run))


def test_edit_on_old_list_reloads_notes():
    async def run(dash: DashboardSession, store: SqliteRemoteStore, notifier: RecordingNotifier):
        row = await store.table("notes").insert(OWNER, {"title": "Meeting Notes", "content": "Key points"})

        cb = FakeCallback(f"note:edit:{row['id']}")
        await note_edit(cb, dash, SETTINGS)

        assert cb.answers == [t.STALE_ITEM]
        assert len(cb.message.edits) == 1
        assert "Meeting Notes" in cb.message.edits[0]
        assert [n.id for n in dash.controller.notes] == [row["id"]]
        # the edit stub only fires for notes the user can actually see
        assert notifier.notices == []

    asyncio.run(_run_with_dash(run))


def test_edit_on_current_list_reports_not_supported():
    async def run(dash: DashboardSession, store: SqliteRemoteStore, notifier: RecordingNotifier):
        await dash.controller.add_note("Meeting Notes", "Key points", OWNER)

        cb = FakeCallback(f"note:edit:{dash.controller.notes[0].id}")
        await note_edit(cb, dash, SETTINGS)

        assert cb.answers == [None]
        assert cb.message.edits == []
        assert [n.description for n in notifier.notices] == ["Editing notes is not supported yet."]

    asyncio.run(_run_with_dash(run))
