from __future__ import annotations

import asyncio

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message

from dashboard.config import Settings
from dashboard.domain.auth.registry import DashboardSession
from dashboard.ui.telegram.keyboards.mainmenu import main_menu_kb
from dashboard.ui.telegram.keyboards.notes import notes_list_kb
from dashboard.ui.telegram.keyboards.tasks import tasks_list_kb
from dashboard.ui.telegram.views import notes_page, render_notes_text, render_overview_text, render_tasks_text


async def send_or_edit(
    target_message: Message,
    text: str,
    markup: InlineKeyboardMarkup,
    prefer_edit: bool,
) -> None:
    """
    prefer_edit=True: edit target_message in place (callback UX).
    prefer_edit=False: send a new message (command / add UX).
    """
    if prefer_edit:
        try:
            await target_message.edit_text(text, reply_markup=markup)
            return
        except TelegramBadRequest:
            # old message, identical content, etc.: fall back to a new message
            pass
    await target_message.answer(text, reply_markup=markup)


async def show_tasks(target_message: Message, dash: DashboardSession, prefer_edit: bool) -> None:
    c = dash.controller
    await send_or_edit(target_message, render_tasks_text(c), tasks_list_kb(c.tasks), prefer_edit)


async def show_notes(
    target_message: Message,
    dash: DashboardSession,
    settings: Settings,
    prefer_edit: bool,
    page: int = 0,
) -> int:
    """Render one page of notes; returns the page actually shown."""
    c = dash.controller
    page_notes, page, pages = notes_page(c.notes, settings.note_preview_chars, page)
    text = render_notes_text(c, settings.note_preview_chars, page)
    await send_or_edit(target_message, text, notes_list_kb(page_notes, page, pages), prefer_edit)
    return page


async def show_dashboard(message: Message, dash: DashboardSession, settings: Settings) -> None:
    """Fetch both collections (concurrently), then render overview, tasks and notes."""
    c = dash.controller
    await asyncio.gather(c.fetch_tasks(dash.owner_id), c.fetch_notes(dash.owner_id))

    await message.answer(render_overview_text(dash, settings.app_name), reply_markup=main_menu_kb())
    await show_tasks(message, dash, prefer_edit=False)
    await show_notes(message, dash, settings, prefer_edit=False)


def callback_arg(data: str | None) -> str:
    """'task:del:<id>' -> '<id>'"""
    return (data or "").split(":", 2)[-1]


def command_args(message: Message) -> str:
    text = (message.text or "").strip()
    if not text:
        return ""
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()
