from aiogram.fsm.state import StatesGroup, State


class TasksFlow(StatesGroup):
    add_text = State()


class NotesFlow(StatesGroup):
    add_title = State()
    add_content = State()
