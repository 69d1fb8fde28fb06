from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NoticeVariant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notice:
    """User-visible, non-fatal notification (the toast of the dashboard)."""

    title: str
    description: str = ""
    variant: NoticeVariant = "default"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


def error_notice(title: str, description: str = "") -> Notice:
    return Notice(title=title, description=description, variant="destructive")
