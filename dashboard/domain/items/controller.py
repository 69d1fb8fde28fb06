from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from dashboard.domain.common.errors import RemoteStoreError
from dashboard.domain.common.models import Notice, error_notice
from dashboard.domain.items.models import NOTES_TABLE, TASKS_TABLE, Note, Task
from dashboard.domain.items.ports import Notifier, RemoteStore
from dashboard.domain.items.rules import normalize_note, normalize_task_text

logger = logging.getLogger(__name__)

EDIT_NOTE_UNSUPPORTED = Notice(
    title="Not available yet",
    description="Editing notes is not supported yet.",
)


class ViewStateController:
    """
    In-memory mirrors of one owner's tasks and notes.

    The lists are caches of the remote store:
    - fetches replace them wholesale (newest first)
    - inserts are followed by a full re-fetch
    - toggle and delete patch the cache after the remote call succeeds
    Every remote failure turns into one notice; nothing is retried.
    No aiogram here.
    """

    def __init__(self, store: RemoteStore, notifier: Notifier) -> None:
        self._tasks_table = store.table(TASKS_TABLE)
        self._notes_table = store.table(NOTES_TABLE)
        self._notifier = notifier

        self.tasks: list[Task] = []
        self.notes: list[Note] = []
        self.tasks_loading = False
        self.notes_loading = False

    # ---- tasks ----

    async def fetch_tasks(self, owner_id: str) -> bool:
        self.tasks_loading = True
        try:
            rows = await self._tasks_table.select(owner_id, order_by="created_at", descending=True)
        except RemoteStoreError:
            logger.error("fetch_tasks failed owner_id=%s", owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to fetch tasks"))
            return False
        finally:
            self.tasks_loading = False

        self.tasks = [Task.from_row(r) for r in rows]
        return True

    async def add_task(self, text: str, owner_id: str) -> bool:
        clean = normalize_task_text(text)
        if clean is None:
            return False

        try:
            await self._tasks_table.insert(owner_id, {"text": clean, "completed": False})
        except RemoteStoreError:
            logger.error("add_task failed owner_id=%s", owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to add task"))
            return False

        await self.fetch_tasks(owner_id)
        return True

    async def toggle_task(self, task_id: str, owner_id: str) -> Optional[Task]:
        current = self.find_task(task_id)
        if current is None:
            logger.warning("toggle_task: unknown task_id=%s owner_id=%s", task_id, owner_id)
            return None

        new_value = not current.completed
        try:
            await self._tasks_table.update(task_id, owner_id, {"completed": new_value})
        except RemoteStoreError:
            logger.error("toggle_task failed task_id=%s owner_id=%s", task_id, owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to update task"))
            return None

        toggled = replace(current, completed=new_value)
        self.tasks = [toggled if t.id == task_id else t for t in self.tasks]
        return toggled

    async def delete_task(self, task_id: str, owner_id: str) -> bool:
        try:
            await self._tasks_table.delete(task_id, owner_id)
        except RemoteStoreError:
            logger.error("delete_task failed task_id=%s owner_id=%s", task_id, owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to delete task"))
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        return True

    # ---- notes ----

    async def fetch_notes(self, owner_id: str) -> bool:
        self.notes_loading = True
        try:
            rows = await self._notes_table.select(owner_id, order_by="created_at", descending=True)
        except RemoteStoreError:
            logger.error("fetch_notes failed owner_id=%s", owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to fetch notes"))
            return False
        finally:
            self.notes_loading = False

        self.notes = [Note.from_row(r) for r in rows]
        return True

    async def add_note(self, title: str, content: str, owner_id: str) -> bool:
        fields = normalize_note(title, content)
        if fields is None:
            return False
        clean_title, clean_content = fields

        try:
            await self._notes_table.insert(owner_id, {"title": clean_title, "content": clean_content})
        except RemoteStoreError:
            logger.error("add_note failed owner_id=%s", owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to add note"))
            return False

        await self.fetch_notes(owner_id)
        return True

    async def delete_note(self, note_id: str, owner_id: str) -> bool:
        try:
            await self._notes_table.delete(note_id, owner_id)
        except RemoteStoreError:
            logger.error("delete_note failed note_id=%s owner_id=%s", note_id, owner_id, exc_info=True)
            await self._notifier.notify(error_notice("Error", "Failed to delete note"))
            return False

        self.notes = [n for n in self.notes if n.id != note_id]
        return True

    async def edit_note(self, note: Note) -> None:
        # Intentionally no remote mutation until editing has product requirements.
        logger.info("edit_note requested note_id=%s (not supported)", note.id)
        await self._notifier.notify(EDIT_NOTE_UNSUPPORTED)

    # ---- lookups ----

    def find_task(self, task_id: str) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def find_note(self, note_id: str) -> Optional[Note]:
        for n in self.notes:
            if n.id == note_id:
                return n
        return None
