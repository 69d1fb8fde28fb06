from __future__ import annotations

from typing import Optional

from dashboard.domain.auth.ports import SessionStorage


class MemorySessionStorage(SessionStorage):
    """Per-chat key/value store kept in process memory (lost on restart)."""

    def __init__(self) -> None:
        self._data: dict[int, dict[str, str]] = {}

    def get(self, chat_id: int, key: str) -> Optional[str]:
        return self._data.get(chat_id, {}).get(key)

    def set(self, chat_id: int, key: str, value: str) -> None:
        self._data.setdefault(chat_id, {})[key] = value

    def remove(self, chat_id: int, key: str) -> None:
        bucket = self._data.get(chat_id)
        if not bucket:
            return
        bucket.pop(key, None)
        if not bucket:
            del self._data[chat_id]

    def keys(self, chat_id: int) -> list[str]:
        return list(self._data.get(chat_id, {}))
