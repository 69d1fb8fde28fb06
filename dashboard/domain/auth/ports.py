from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from dashboard.domain.auth.models import AuthEvent, Profile, Session, SignOutScope

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, Session], Awaitable[None]]


class SessionProvider(ABC):
    """
    Identity provider. Raises AlreadyRegisteredError / InvalidCredentialsError
    for the two expected failures, AuthError for anything else.
    """

    def __init__(self) -> None:
        self._listeners: list[AuthListener] = []

    def on_auth_state_change(self, listener: AuthListener) -> None:
        self._listeners.append(listener)

    async def _emit(self, event: AuthEvent, session: Session) -> None:
        logger.info("auth event %s user_id=%s", event, session.user.id)
        for listener in list(self._listeners):
            await listener(event, session)

    @abstractmethod
    async def get_session(self, access_token: str) -> Optional[Session]: ...

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]: ...

    @abstractmethod
    async def sign_up(self, email: str, password: str, display_name: str) -> Session: ...

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Session: ...

    @abstractmethod
    async def sign_out(self, access_token: str, scope: SignOutScope = "global") -> None: ...


class SessionStorage(ABC):
    """Per-chat key/value storage for transient client state (tokens)."""

    @abstractmethod
    def get(self, chat_id: int, key: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, chat_id: int, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, chat_id: int, key: str) -> None: ...

    @abstractmethod
    def keys(self, chat_id: int) -> list[str]: ...
