from __future__ import annotations

from dashboard.domain.items.models import Appointment, Birthday

MAX_APPOINTMENTS_SHOWN = 3

SAMPLE_APPOINTMENTS: tuple[Appointment, ...] = (
    Appointment(
        id="1",
        title="Team Meeting",
        date="2024-01-15",
        time="10:00 AM",
        location="Conference Room A",
        category="meeting",
    ),
    Appointment(
        id="2",
        title="Doctor Appointment",
        date="2024-01-16",
        time="2:30 PM",
        location="Medical Center",
        category="health",
    ),
    Appointment(
        id="3",
        title="Coffee with Sarah",
        date="2024-01-17",
        time="11:00 AM",
        location="Downtown Café",
        category="personal",
    ),
)

SAMPLE_BIRTHDAYS: tuple[Birthday, ...] = (
    Birthday(id="1", name="John Smith", date="Jan 15", age=32, days_until=0),
    Birthday(id="2", name="Emma Wilson", date="Jan 18", age=28, days_until=3),
    Birthday(id="3", name="Mike Johnson", date="Jan 22", age=35, days_until=7),
)


def upcoming_appointments(limit: int = MAX_APPOINTMENTS_SHOWN) -> list[Appointment]:
    return list(SAMPLE_APPOINTMENTS[:limit])


def upcoming_birthdays() -> list[Birthday]:
    return list(SAMPLE_BIRTHDAYS)
