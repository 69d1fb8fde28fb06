from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from dashboard.domain.items.models import Task
from dashboard.ui.components import DELETE_ICON, task_row


def tasks_list_kb(tasks: list[Task]) -> InlineKeyboardMarkup:
    """One row per task: [checkbox + text] [delete], then an add button."""
    kb = InlineKeyboardBuilder()
    for task in tasks:
        view = task_row(task)
        kb.row(
            InlineKeyboardButton(text=view.label, callback_data=view.toggle_data),
            InlineKeyboardButton(text=DELETE_ICON, callback_data=view.delete_data),
        )
    kb.row(InlineKeyboardButton(text="➕ Add new task", callback_data="task:add"))
    return kb.as_markup()
