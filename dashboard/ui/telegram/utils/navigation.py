from __future__ import annotations

from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from dashboard.ui.telegram.keyboards.mainmenu import main_menu_kb
from dashboard.ui.telegram.texts.dashboard import MENU_HINT


async def go_to_main_menu(
    message: Message,
    state: FSMContext | None = None,
    text: str = MENU_HINT,
) -> None:
    """
    Clears FSM state (if provided) and returns user to the main menu.
    Safe to call from anywhere.
    """
    if state is not None:
        await state.clear()

    await message.answer(
        text,
        reply_markup=main_menu_kb()
    )
