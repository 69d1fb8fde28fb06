from __future__ import annotations

from typing import Callable, Dict, Any, Awaitable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from dashboard.config import Settings
from dashboard.domain.auth.service import AuthService


class DIMiddleware(BaseMiddleware):
    """
    Inject dependencies to handlers via `data` dict.

    Handlers can request args by name, e.g.
      async def handler(message: Message, auth_service: AuthService, settings: Settings): ...
    """

    def __init__(self, auth_service: AuthService, settings: Settings) -> None:
        self._auth = auth_service
        self._settings = settings

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        # keep names stable across the project
        data["auth_service"] = self._auth
        data["settings"] = self._settings

        return await handler(event, data)
