from __future__ import annotations

import logging

from aiogram import Bot, html
from aiogram.exceptions import TelegramAPIError

from dashboard.domain.common.models import Notice
from dashboard.domain.items.ports import Notifier

logger = logging.getLogger(__name__)


def format_notice(notice: Notice) -> str:
    icon = "⚠️" if notice.is_error else "ℹ️"
    text = f"{icon} {html.bold(html.quote(notice.title))}"
    if notice.description:
        text += f"\n{html.quote(notice.description)}"
    return text


class ChatNotifier(Notifier):
    """Sends notices as chat messages (the toast of a chat UI)."""

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    async def notify(self, notice: Notice) -> None:
        try:
            await self._bot.send_message(chat_id=self._chat_id, text=format_notice(notice))
        except TelegramAPIError:
            # a notice that cannot be delivered must not break the action that raised it
            logger.warning("notice not delivered chat_id=%s title=%r", self._chat_id, notice.title, exc_info=True)
