"""
Tests for the Telegram message renderers and inline keyboards.
No network: only text and markup objects are inspected.
"""
from __future__ import annotations

from dashboard.domain.auth.models import Profile, Session, User
from dashboard.domain.auth.registry import DashboardSession
from dashboard.domain.common.models import Notice
from dashboard.domain.items.controller import ViewStateController
from dashboard.domain.items.models import Note, Task
from dashboard.domain.items.ports import Notifier, RemoteStore, RemoteTable
from dashboard.ui.telegram.keyboards.notes import notes_list_kb
from dashboard.ui.telegram.keyboards.tasks import tasks_list_kb
from dashboard.ui.telegram.notifier import format_notice
from dashboard.ui.telegram.views import (
    MESSAGE_LIMIT,
    notes_page,
    paginate_notes,
    render_notes_text,
    render_overview_text,
    render_tasks_text,
)


class UnusedStore(RemoteStore):
    def table(self, name: str) -> RemoteTable:
        return None  # renderers never touch the store


class NullNotifier(Notifier):
    async def notify(self, notice: Notice) -> None:
        return None


def _controller() -> ViewStateController:
    return ViewStateController(UnusedStore(), NullNotifier())


def _tasks() -> list[Task]:
    return [
        Task(id="1", user_id="u", text="Review project proposal", completed=False, created_at="2024-01-14T10:00:00+00:00"),
        Task(id="2", user_id="u", text="Buy groceries", completed=True, created_at="2024-01-13T10:00:00+00:00"),
    ]


def _dash(display_name):
    session = Session(access_token="tok", user=User(id="u", email="a@example.com"), created_at="2024-01-01T00:00:00+00:00")
    return DashboardSession(
        chat_id=1,
        session=session,
        profile=Profile(user_id="u", display_name=display_name),
        controller=_controller(),
    )


def test_overview_greets_profile_name_and_shows_samples():
    text = render_overview_text(_dash("Ayesha"), "Ayesha AI")
    assert "Welcome back, Ayesha!" in text
    assert "Upcoming Appointments" in text
    assert "Team Meeting" in text
    assert "Conference Room A" in text
    assert "John Smith" in text and "Today!" in text
    assert "3 days" in text


def test_overview_falls_back_to_user():
    assert "Welcome back, User!" in render_overview_text(_dash(None), "Ayesha AI")


def test_tasks_text_states():
    c = _controller()
    assert "No tasks yet." in render_tasks_text(c)

    c.tasks = _tasks()
    assert "1/2 done" in render_tasks_text(c)

    c.tasks_loading = True
    assert "Loading..." in render_tasks_text(c)


def test_notes_text_renders_each_card():
    c = _controller()
    assert "No notes yet." in render_notes_text(c, preview_chars=50)

    c.notes = [
        Note(id="n1", user_id="u", title="Project Ideas", content="Some concepts",
             created_at="2024-01-10T08:00:00+00:00", updated_at="2024-01-12T08:00:00+00:00"),
        Note(id="n2", user_id="u", title="Meeting Notes", content="Key points",
             created_at="2024-01-14T08:00:00+00:00", updated_at="2024-01-14T08:00:00+00:00"),
    ]
    text = render_notes_text(c, preview_chars=50)
    assert "Updated 2024-01-12" in text
    assert "Created 2024-01-14" in text


def test_tasks_keyboard_has_toggle_and_delete_per_row():
    markup = tasks_list_kb(_tasks())
    rows = markup.inline_keyboard

    assert len(rows) == 3
    assert [b.callback_data for b in rows[0]] == ["task:toggle:1", "task:del:1"]
    assert rows[1][0].text.startswith("✅")
    assert rows[-1][0].callback_data == "task:add"


def test_notes_keyboard_has_edit_and_delete_per_row():
    notes = [
        Note(id="n1", user_id="u", title="Project Ideas", content="c",
             created_at="2024-01-10", updated_at="2024-01-10"),
    ]
    rows = notes_list_kb(notes).inline_keyboard
    assert [b.callback_data for b in rows[0]] == ["note:edit:n1", "note:del:n1"]
    assert rows[-1][0].callback_data == "note:add"


def test_format_notice_marks_errors():
    err = format_notice(Notice("Error", "Failed to fetch tasks", "destructive"))
    assert err.startswith("⚠️")
    assert "Failed to fetch tasks" in err

    ok = format_notice(Notice("Welcome back!"))
    assert ok.startswith("ℹ️")
    assert "\n" not in ok


def _long_notes(n: int) -> list[Note]:
    return [
        Note(id=f"n{i}", user_id="u", title=f"Note {i} " + "t" * 60, content="word " * 80,
             created_at="2024-01-10T08:00:00+00:00", updated_at="2024-01-12T08:00:00+00:00")
        for i in range(n)
    ]


def test_many_notes_are_split_into_pages_under_message_limit():
    c = _controller()
    c.notes = _long_notes(25)

    pages = paginate_notes(c.notes, preview_chars=160)
    assert len(pages) > 1
    assert [n.id for page in pages for n in page] == [n.id for n in c.notes]

    for i in range(len(pages)):
        text = render_notes_text(c, preview_chars=160, page=i)
        assert len(text) <= MESSAGE_LIMIT
        assert f"Page {i + 1}/{len(pages)}" in text


def test_notes_page_is_clamped_and_keyboard_navigates():
    notes = _long_notes(25)
    page_notes, page, pages = notes_page(notes, preview_chars=160, page=99)
    assert page == pages - 1
    assert page_notes == paginate_notes(notes, preview_chars=160)[-1]

    first = notes_list_kb(notes[:3], page=0, pages=pages).inline_keyboard
    assert [b.callback_data for b in first[-2]] == ["note:page:1"]

    last = notes_list_kb(page_notes, page=page, pages=pages).inline_keyboard
    assert [b.callback_data for b in last[-2]] == [f"note:page:{page - 1}"]
    assert last[-1][0].callback_data == "note:add"


def test_few_notes_fit_on_one_page_without_footer():
    c = _controller()
    c.notes = _long_notes(2)
    assert len(paginate_notes(c.notes, preview_chars=160)) == 1
    assert "Page " not in render_notes_text(c, preview_chars=160)
    assert len(notes_list_kb(c.notes).inline_keyboard) == 3
