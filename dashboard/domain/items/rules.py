from __future__ import annotations

from typing import Optional


def normalize_task_text(text: Optional[str]) -> Optional[str]:
    """Trimmed task text, or None when nothing is left."""
    t = (text or "").strip()
    return t or None


def normalize_note(title: Optional[str], content: Optional[str]) -> Optional[tuple[str, str]]:
    """Both fields are required; returns trimmed (title, content) or None."""
    t = (title or "").strip()
    c = (content or "").strip()
    if not t or not c:
        return None
    return t, c
