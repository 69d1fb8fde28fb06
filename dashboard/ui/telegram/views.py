"""
Message renderers for the dashboard sections.

- render_overview_text(): header + appointments + birthdays
- render_tasks_text():    To-Do List card (loading / empty / progress)
- render_notes_text():    Recent Notes card, one page of note cards

Notes are split into pages so a single message stays under Telegram's
text limit.
"""
from __future__ import annotations

from aiogram import html

from dashboard.domain.auth.registry import DashboardSession
from dashboard.domain.items.controller import ViewStateController
from dashboard.domain.items.models import Note
from dashboard.domain.items.samples import upcoming_appointments, upcoming_birthdays
from dashboard.ui.components import (
    appointment_card,
    birthday_card,
    dashboard_card,
    note_card,
    render_appointment_card,
    render_birthday_card,
    render_note_card,
)
from dashboard.ui.telegram.texts import dashboard as t


def render_overview_text(dash: DashboardSession, app_name: str) -> str:
    header = "\n".join(
        [
            html.bold(html.quote(f"Welcome back, {dash.display_name}!")),
            html.italic(html.quote(t.TAGLINE)),
            html.quote(t.SUBTITLE),
        ]
    )
    appointments = "\n\n".join(render_appointment_card(appointment_card(a)) for a in upcoming_appointments())
    birthdays = "\n".join(render_birthday_card(birthday_card(b)) for b in upcoming_birthdays())
    return "\n\n".join(
        [
            f"✨ {html.quote(app_name)}",
            header,
            dashboard_card(t.APPOINTMENTS_TITLE, t.APPOINTMENTS_ICON, appointments),
            dashboard_card(t.BIRTHDAYS_TITLE, t.BIRTHDAYS_ICON, birthdays),
        ]
    )


def render_tasks_text(controller: ViewStateController) -> str:
    if controller.tasks_loading:
        body = t.LOADING
    elif not controller.tasks:
        body = t.NO_TASKS
    else:
        done = sum(1 for task in controller.tasks if task.completed)
        body = f"{done}/{len(controller.tasks)} done"
    return dashboard_card(t.TASKS_TITLE, t.TASKS_ICON, body)


MESSAGE_LIMIT = 4096


def _page_footer(page: int, pages: int) -> str:
    return t.PAGE_LABEL.format(page=page + 1, pages=pages)


def _notes_card(notes: list[Note], preview_chars: int, footer: str = "") -> str:
    body = "\n\n".join(render_note_card(note_card(n, preview_chars)) for n in notes)
    if footer:
        body = f"{body}\n\n{footer}"
    return dashboard_card(t.NOTES_TITLE, t.NOTES_ICON, body)


def paginate_notes(notes: list[Note], preview_chars: int, limit: int = MESSAGE_LIMIT) -> list[list[Note]]:
    """Greedy split: each page takes as many notes as fit, always at least one."""
    # room for the widest footer we will ever print
    reserve = len(_page_footer(998, 999)) + 2
    pages: list[list[Note]] = []
    current: list[Note] = []
    for note in notes:
        candidate = current + [note]
        if current and len(_notes_card(candidate, preview_chars)) + reserve > limit:
            pages.append(current)
            current = [note]
        else:
            current = candidate
    if current:
        pages.append(current)
    return pages


def notes_page(notes: list[Note], preview_chars: int, page: int = 0) -> tuple[list[Note], int, int]:
    """-> (notes on the page, page clamped into range, page count)"""
    pages = paginate_notes(notes, preview_chars)
    if not pages:
        return [], 0, 1
    page = max(0, min(page, len(pages) - 1))
    return pages[page], page, len(pages)


def render_notes_text(controller: ViewStateController, preview_chars: int, page: int = 0) -> str:
    if controller.notes_loading:
        return dashboard_card(t.NOTES_TITLE, t.NOTES_ICON, t.LOADING)
    if not controller.notes:
        return dashboard_card(t.NOTES_TITLE, t.NOTES_ICON, t.NO_NOTES)

    page_notes, page, pages = notes_page(controller.notes, preview_chars, page)
    footer = _page_footer(page, pages) if pages > 1 else ""
    return _notes_card(page_notes, preview_chars, footer)
