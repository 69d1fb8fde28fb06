from __future__ import annotations

from aiogram.types import ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

MM_DASHBOARD = "Dashboard"
MM_TASKS = "Tasks"
MM_NOTES = "Notes"
MM_ADD_TASK = "Add task"
MM_ADD_NOTE = "Add note"
MM_SIGN_OUT = "Sign out"


def main_menu_kb() -> ReplyKeyboardMarkup:
    kb = ReplyKeyboardBuilder()

    kb.button(text=MM_DASHBOARD)
    kb.button(text=MM_TASKS)
    kb.button(text=MM_NOTES)
    kb.button(text=MM_ADD_TASK)
    kb.button(text=MM_ADD_NOTE)
    kb.button(text=MM_SIGN_OUT)

    # 1 / 2 / 2 / 1
    kb.adjust(1, 2, 2, 1)

    return kb.as_markup(resize_keyboard=True, one_time_keyboard=False)
