from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from dashboard.domain.auth.service import AuthService
from dashboard.domain.common.errors import AuthError
from dashboard.ui.telegram.keyboards.common import auth_kb
from dashboard.ui.telegram.texts.auth import SIGN_IN_REQUIRED

logger = logging.getLogger(__name__)


def _chat_id(event: TelegramObject) -> int | None:
    if isinstance(event, Message):
        return event.chat.id
    if isinstance(event, CallbackQuery) and event.message:
        return event.message.chat.id
    return None


class SessionRequiredMiddleware(BaseMiddleware):
    """
    Gate for dashboard routers: resolves the chat's session into data["dash"],
    or sends the sign-in prompt and stops the event.
    Runs after DIMiddleware (needs data["auth_service"]).
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        auth_service: AuthService = data["auth_service"]
        chat_id = _chat_id(event)

        dash = None
        if chat_id is not None:
            try:
                dash = await auth_service.resolve(chat_id)
            except AuthError:
                logger.error("session lookup failed chat_id=%s", chat_id, exc_info=True)

        if dash is None:
            if isinstance(event, Message):
                await event.answer(SIGN_IN_REQUIRED, reply_markup=auth_kb())
            elif isinstance(event, CallbackQuery):
                await event.answer(SIGN_IN_REQUIRED, show_alert=True)
            return None

        data["dash"] = dash
        return await handler(event, data)
