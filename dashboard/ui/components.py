"""
Presentation components: pure functions from one item to its visual form.

Each component has a small view dataclass (what to show) and, where the item
is shown as message text, a render_* function producing Telegram HTML.
Keyboards are built from the same views in ui/telegram/keyboards.
No state, no I/O.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from aiogram import html

from dashboard.domain.common.time import format_date
from dashboard.domain.items.models import Appointment, Birthday, Note, Task

CHECKED = "✅"
UNCHECKED = "⬜"
DELETE_ICON = "🗑️"
EDIT_ICON = "✏️"

# accent per appointment category (meeting=info, personal=primary, health=success, other=warning)
APPOINTMENT_ACCENTS = {
    "meeting": "🔵",
    "personal": "🟣",
    "health": "🟢",
    "other": "🟡",
}

BirthdayHighlight = Literal["today", "upcoming", "none"]

UPCOMING_BIRTHDAY_DAYS = 7


def truncate(text: str, max_len: int) -> str:
    t = " ".join(text.split())
    return t[:max_len] + ("…" if len(t) > max_len else "")


def strike(text: str) -> str:
    """Strike-through for plain text (button labels cannot carry HTML)."""
    return "".join(ch + "\u0336" for ch in text)


# ---- task row ----

@dataclass(frozen=True)
class TaskRowView:
    task_id: str
    label: str
    completed: bool
    toggle_data: str
    delete_data: str


def task_row(task: Task, max_len: int = 40) -> TaskRowView:
    text = truncate(task.text, max_len)
    if task.completed:
        label = f"{CHECKED} {strike(text)}"
    else:
        label = f"{UNCHECKED} {text}"
    return TaskRowView(
        task_id=task.id,
        label=label,
        completed=task.completed,
        toggle_data=f"task:toggle:{task.id}",
        delete_data=f"task:del:{task.id}",
    )


# ---- note card ----

def note_timestamp_label(created_at: str, updated_at: str) -> str:
    if updated_at != created_at:
        return f"Updated {format_date(updated_at)}"
    return f"Created {format_date(created_at)}"


@dataclass(frozen=True)
class NoteCardView:
    note_id: str
    title: str
    preview: str
    timestamp_label: str
    edit_data: str
    delete_data: str


def note_card(note: Note, preview_chars: int = 160, title_chars: int = 48) -> NoteCardView:
    return NoteCardView(
        note_id=note.id,
        title=truncate(note.title, title_chars),
        preview=truncate(note.content, preview_chars),
        timestamp_label=note_timestamp_label(note.created_at, note.updated_at),
        edit_data=f"note:edit:{note.id}",
        delete_data=f"note:del:{note.id}",
    )


def render_note_card(view: NoteCardView) -> str:
    return "\n".join(
        [
            html.bold(html.quote(view.title)),
            html.quote(view.preview),
            html.italic(html.quote(view.timestamp_label)),
        ]
    )


# ---- appointment card ----

@dataclass(frozen=True)
class AppointmentCardView:
    title: str
    accent: str
    date: str
    time: str
    location: Optional[str]


def appointment_card(appointment: Appointment) -> AppointmentCardView:
    return AppointmentCardView(
        title=appointment.title,
        accent=APPOINTMENT_ACCENTS.get(appointment.category, APPOINTMENT_ACCENTS["other"]),
        date=appointment.date,
        time=appointment.time,
        location=appointment.location or None,
    )


def render_appointment_card(view: AppointmentCardView) -> str:
    details = [f"📅 {html.quote(view.date)}", f"🕒 {html.quote(view.time)}"]
    if view.location:
        details.append(f"📍 {html.quote(view.location)}")
    return f"{view.accent} {html.bold(html.quote(view.title))}\n" + "  ".join(details)


# ---- birthday card ----

def birthday_highlight(days_until: int) -> BirthdayHighlight:
    if days_until == 0:
        return "today"
    if 0 < days_until <= UPCOMING_BIRTHDAY_DAYS:
        return "upcoming"
    return "none"


def birthday_countdown_label(days_until: int) -> str:
    if days_until == 0:
        return "Today!"
    return f"{days_until} day{'s' if days_until != 1 else ''}"


@dataclass(frozen=True)
class BirthdayCardView:
    name: str
    date_label: str
    countdown: str
    highlight: BirthdayHighlight


def birthday_card(birthday: Birthday) -> BirthdayCardView:
    date_label = birthday.date
    if birthday.age:
        date_label += f" ({birthday.age} years)"
    return BirthdayCardView(
        name=birthday.name,
        date_label=date_label,
        countdown=birthday_countdown_label(birthday.days_until),
        highlight=birthday_highlight(birthday.days_until),
    )


def render_birthday_card(view: BirthdayCardView) -> str:
    name = html.quote(view.name)
    countdown = html.quote(view.countdown)
    if view.highlight == "today":
        return f"🎉 {html.bold(name)} · {html.quote(view.date_label)} · {html.bold(countdown)}"
    if view.highlight == "upcoming":
        return f"⚠️ {html.bold(name)} · {html.quote(view.date_label)} · {html.underline(countdown)}"
    return f"🎂 {name} · {html.quote(view.date_label)} · {countdown}"


# ---- generic container ----

def dashboard_card(title: str, icon: str, body: str) -> str:
    """Titled, icon-labelled card. `body` is already HTML."""
    header = html.bold(f"{icon} {html.quote(title)}")
    return f"{header}\n{body}" if body else header
