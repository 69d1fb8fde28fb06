from __future__ import annotations

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from dashboard.domain.items.models import Note
from dashboard.ui.components import DELETE_ICON, EDIT_ICON, note_card


def notes_list_kb(notes: list[Note], page: int = 0, pages: int = 1) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for note in notes:
        view = note_card(note)
        kb.row(
            InlineKeyboardButton(text=f"{EDIT_ICON} {view.title}", callback_data=view.edit_data),
            InlineKeyboardButton(text=DELETE_ICON, callback_data=view.delete_data),
        )

    nav: list[InlineKeyboardButton] = []
    if page > 0:
        nav.append(InlineKeyboardButton(text="◀️", callback_data=f"note:page:{page - 1}"))
    if page < pages - 1:
        nav.append(InlineKeyboardButton(text="▶️", callback_data=f"note:page:{page + 1}"))
    if nav:
        kb.row(*nav)

    kb.row(InlineKeyboardButton(text="➕ Add Note", callback_data="note:add"))
    return kb.as_markup()
