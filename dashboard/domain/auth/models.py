from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

AuthEvent = Literal["SIGNED_IN", "SIGNED_OUT"]
SignOutScope = Literal["global", "local"]

# Session storage keys that belong to authentication start with this.
AUTH_KEY_PREFIX = "dashboard.auth."
ACCESS_TOKEN_KEY = AUTH_KEY_PREFIX + "access_token"

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class User:
    id: str
    email: str


@dataclass(frozen=True)
class Session:
    access_token: str
    user: User
    created_at: str


@dataclass(frozen=True)
class Profile:
    user_id: str
    display_name: Optional[str]
