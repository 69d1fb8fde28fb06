from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping

from dashboard.domain.common.models import Notice


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class RemoteTable(ABC):
    """
    One table of the remote store. Every operation is scoped by owner_id;
    the store only ever touches rows whose user_id equals it.
    Failures raise RemoteStoreError.
    """

    @abstractmethod
    async def select(
        self,
        owner_id: str,
        order_by: str = "created_at",
        descending: bool = True,
    ) -> list[dict[str, Any]]: ...

    @abstractmethod
    async def insert(self, owner_id: str, values: Mapping[str, Any]) -> dict[str, Any]: ...

    @abstractmethod
    async def update(self, row_id: str, owner_id: str, values: Mapping[str, Any]) -> int: ...

    @abstractmethod
    async def delete(self, row_id: str, owner_id: str) -> int: ...


class RemoteStore(ABC):
    @abstractmethod
    def table(self, name: str) -> RemoteTable: ...


class Notifier(ABC):
    @abstractmethod
    async def notify(self, notice: Notice) -> None: ...
