"""Personal productivity dashboard: tasks, notes, appointments and birthdays over Telegram."""

__version__ = "0.1.0"
