from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from dashboard.domain.auth.registry import DashboardSession
from dashboard.ui.telegram.handlers._common import callback_arg, command_args, show_tasks
from dashboard.ui.telegram.keyboards.common import cancel_kb
from dashboard.ui.telegram.keyboards.mainmenu import MM_ADD_TASK, MM_TASKS
from dashboard.ui.telegram.middlewares.session import SessionRequiredMiddleware
from dashboard.ui.telegram.states.items import TasksFlow
from dashboard.ui.telegram.texts import dashboard as t

router = Router()
router.message.middleware(SessionRequiredMiddleware())
router.callback_query.middleware(SessionRequiredMiddleware())


@router.message(Command(commands=["tasks", "td"]))
@router.message(F.text == MM_TASKS)
async def tasks_list(message: Message, state: FSMContext, dash: DashboardSession):
    await state.clear()
    await dash.controller.fetch_tasks(dash.owner_id)
    await show_tasks(message, dash, prefer_edit=False)


@router.message(Command("task_add"))
async def task_add_cmd(message: Message, state: FSMContext, dash: DashboardSession):
    args = command_args(message)

    # /task_add <text> -> add directly
    if args:
        await _add_task(message, state, dash, args)
        return

    # /task_add -> FSM
    await state.set_state(TasksFlow.add_text)
    await message.answer(t.ASK_TASK_TEXT, reply_markup=cancel_kb())


@router.message(F.text == MM_ADD_TASK)
async def task_add_menu(message: Message, state: FSMContext):
    await state.set_state(TasksFlow.add_text)
    await message.answer(t.ASK_TASK_TEXT, reply_markup=cancel_kb())


@router.callback_query(F.data == "task:add")
async def task_add_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.set_state(TasksFlow.add_text)
    await cb.message.answer(t.ASK_TASK_TEXT, reply_markup=cancel_kb())


@router.message(TasksFlow.add_text)
async def task_add_text(message: Message, state: FSMContext, dash: DashboardSession):
    await _add_task(message, state, dash, message.text or "")


async def _add_task(message: Message, state: FSMContext, dash: DashboardSession, text: str) -> None:
    if not text.strip():
        # validation is local: no remote call, stay in the flow
        await message.answer(t.EMPTY_TASK)
        return

    added = await dash.controller.add_task(text, dash.owner_id)
    await state.clear()
    if added:
        await message.answer(t.TASK_ADDED)
    await show_tasks(message, dash, prefer_edit=False)


@router.callback_query(F.data.startswith("task:toggle:"))
async def task_toggle(cb: CallbackQuery, dash: DashboardSession):
    task_id = callback_arg(cb.data)
    if dash.controller.find_task(task_id) is None:
        # pressed on an old list: reload instead of showing a stale or empty one
        await cb.answer(t.STALE_ITEM)
        await dash.controller.fetch_tasks(dash.owner_id)
        await show_tasks(cb.message, dash, prefer_edit=True)
        return

    toggled = await dash.controller.toggle_task(task_id, dash.owner_id)
    if toggled is None:
        await cb.answer()
    else:
        await cb.answer("Done ✅" if toggled.completed else "Reopened")
    await show_tasks(cb.message, dash, prefer_edit=True)


@router.callback_query(F.data.startswith("task:del:"))
async def task_delete(cb: CallbackQuery, dash: DashboardSession):
    task_id = callback_arg(cb.data)
    deleted = await dash.controller.delete_task(task_id, dash.owner_id)
    await cb.answer("Deleted 🗑️" if deleted else None)
    await show_tasks(cb.message, dash, prefer_edit=True)
