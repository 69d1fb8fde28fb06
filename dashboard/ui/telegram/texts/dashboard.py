TAGLINE = "Automate the ordinary. Focus on the extraordinary."
SUBTITLE = "Manage your appointments, tasks, birthdays, and notes all in one place"
LOADING = "Loading..."

APPOINTMENTS_TITLE = "Upcoming Appointments"
BIRTHDAYS_TITLE = "Upcoming Birthdays"
TASKS_TITLE = "To-Do List"
NOTES_TITLE = "Recent Notes"

APPOINTMENTS_ICON = "📅"
BIRTHDAYS_ICON = "🎂"
TASKS_ICON = "☑️"
NOTES_ICON = "🗒️"

NO_TASKS = "No tasks yet."
NO_NOTES = "No notes yet."
ASK_TASK_TEXT = "Add new task... (one message)"
ASK_NOTE_TITLE = "Create New Note. Note title:"
ASK_NOTE_CONTENT = "Write your note here:"
EMPTY_TASK = "Task text cannot be empty. Write the task."
EMPTY_NOTE_TITLE = "Note title cannot be empty. Write a title."
EMPTY_NOTE_CONTENT = "Note content cannot be empty. Write the note."
TASK_ADDED = "Task added."
NOTE_SAVED = "Note saved."
MENU_HINT = "Choose an action."
PAGE_LABEL = "Page {page}/{pages}"
STALE_ITEM = "That item is gone. List refreshed."
