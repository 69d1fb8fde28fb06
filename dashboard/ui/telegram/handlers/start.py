from __future__ import annotations

import logging

from aiogram import Router, html
from aiogram.filters import CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, ReplyKeyboardRemove

from dashboard.config import Settings
from dashboard.domain.auth.service import AuthService
from dashboard.domain.common.errors import AuthError
from dashboard.ui.telegram.handlers._common import show_dashboard
from dashboard.ui.telegram.keyboards.common import auth_kb
from dashboard.ui.telegram.texts.auth import WELCOME

logger = logging.getLogger(__name__)

router = Router()


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext, auth_service: AuthService, settings: Settings):
    await state.clear()
    try:
        dash = await auth_service.resolve(message.chat.id)
    except AuthError:
        logger.error("session lookup failed chat_id=%s", message.chat.id, exc_info=True)
        dash = None

    if dash is None:
        await message.answer(f"✨ {html.quote(settings.app_name)}", reply_markup=ReplyKeyboardRemove())
        await message.answer(WELCOME, reply_markup=auth_kb())
        return

    await show_dashboard(message, dash, settings)
