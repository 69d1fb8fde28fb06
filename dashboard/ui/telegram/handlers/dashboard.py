from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from dashboard.config import Settings
from dashboard.domain.auth.registry import DashboardSession
from dashboard.ui.telegram.handlers._common import show_dashboard
from dashboard.ui.telegram.keyboards.mainmenu import MM_DASHBOARD
from dashboard.ui.telegram.middlewares.session import SessionRequiredMiddleware

router = Router()
router.message.middleware(SessionRequiredMiddleware())


@router.message(Command("menu"))
@router.message(F.text == MM_DASHBOARD)
async def dashboard_cmd(message: Message, state: FSMContext, dash: DashboardSession, settings: Settings):
    await state.clear()
    await show_dashboard(message, dash, settings)

