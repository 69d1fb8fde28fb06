from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from dashboard.config import Settings
from dashboard.domain.auth.registry import DashboardSession
from dashboard.ui.telegram.handlers._common import callback_arg, show_notes
from dashboard.ui.telegram.keyboards.common import cancel_kb
from dashboard.ui.telegram.keyboards.mainmenu import MM_ADD_NOTE, MM_NOTES
from dashboard.ui.telegram.middlewares.session import SessionRequiredMiddleware
from dashboard.ui.telegram.states.items import NotesFlow
from dashboard.ui.telegram.texts import dashboard as t

router = Router()
router.message.middleware(SessionRequiredMiddleware())
router.callback_query.middleware(SessionRequiredMiddleware())


@router.message(Command("notes"))
@router.message(F.text == MM_NOTES)
async def notes_list(message: Message, state: FSMContext, dash: DashboardSession, settings: Settings):
    await state.clear()
    await dash.controller.fetch_notes(dash.owner_id)
    await show_notes(message, dash, settings, prefer_edit=False)


@router.message(Command("note_add"))
@router.message(F.text == MM_ADD_NOTE)
async def note_add_cmd(message: Message, state: FSMContext):
    await state.set_state(NotesFlow.add_title)
    await message.answer(t.ASK_NOTE_TITLE, reply_markup=cancel_kb())


@router.callback_query(F.data == "note:add")
async def note_add_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.set_state(NotesFlow.add_title)
    await cb.message.answer(t.ASK_NOTE_TITLE, reply_markup=cancel_kb())


@router.message(NotesFlow.add_title)
async def note_add_title(message: Message, state: FSMContext):
    title = (message.text or "").strip()
    if not title:
        await message.answer(t.EMPTY_NOTE_TITLE)
        return

    await state.update_data(note_title=title)
    await state.set_state(NotesFlow.add_content)
    await message.answer(t.ASK_NOTE_CONTENT, reply_markup=cancel_kb())


@router.message(NotesFlow.add_content)
async def note_add_content(message: Message, state: FSMContext, dash: DashboardSession, settings: Settings):
    content = (message.text or "").strip()
    if not content:
        await message.answer(t.EMPTY_NOTE_CONTENT)
        return

    data = await state.get_data()
    added = await dash.controller.add_note(data.get("note_title", ""), content, dash.owner_id)
    await state.clear()
    if added:
        await message.answer(t.NOTE_SAVED)
    await show_notes(message, dash, settings, prefer_edit=False)


@router.callback_query(F.data.startswith("note:page:"))
async def notes_page_cb(cb: CallbackQuery, state: FSMContext, dash: DashboardSession, settings: Settings):
    await cb.answer()
    try:
        page = int(callback_arg(cb.data))
    except ValueError:
        page = 0
    shown = await show_notes(cb.message, dash, settings, prefer_edit=True, page=page)
    await state.update_data(notes_page=shown)


@router.callback_query(F.data.startswith("note:edit:"))
async def note_edit(cb: CallbackQuery, dash: DashboardSession, settings: Settings):
    note = dash.controller.find_note(callback_arg(cb.data))
    if note is None:
        # pressed on an old list: reload instead of doing nothing
        await cb.answer(t.STALE_ITEM)
        await dash.controller.fetch_notes(dash.owner_id)
        await show_notes(cb.message, dash, settings, prefer_edit=True)
        return

    await cb.answer()
    await dash.controller.edit_note(note)


@router.callback_query(F.data.startswith("note:del:"))
async def note_delete(cb: CallbackQuery, state: FSMContext, dash: DashboardSession, settings: Settings):
    note_id = callback_arg(cb.data)
    deleted = await dash.controller.delete_note(note_id, dash.owner_id)
    await cb.answer("Deleted 🗑️" if deleted else None)

    data = await state.get_data()
    shown = await show_notes(cb.message, dash, settings, prefer_edit=True, page=data.get("notes_page", 0))
    await state.update_data(notes_page=shown)
