from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from dashboard.domain.auth.models import AuthEvent, Profile, Session
from dashboard.domain.items.controller import ViewStateController
from dashboard.domain.items.ports import Notifier, RemoteStore

logger = logging.getLogger(__name__)

NotifierFactory = Callable[[int], Notifier]


@dataclass
class DashboardSession:
    chat_id: int
    session: Session
    profile: Optional[Profile]
    controller: ViewStateController

    @property
    def owner_id(self) -> str:
        return self.session.user.id

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.display_name:
            return self.profile.display_name
        return "User"


class SessionRegistry:
    """
    Process-wide session/profile state, one entry per chat.
    Entries only appear through activate() and only disappear through teardown.
    """

    def __init__(self, store: RemoteStore, notifier_factory: NotifierFactory) -> None:
        self._store = store
        self._notifier_factory = notifier_factory
        self._sessions: dict[int, DashboardSession] = {}

    def activate(self, chat_id: int, session: Session, profile: Optional[Profile]) -> DashboardSession:
        controller = ViewStateController(self._store, self._notifier_factory(chat_id))
        dash = DashboardSession(chat_id=chat_id, session=session, profile=profile, controller=controller)
        self._sessions[chat_id] = dash
        logger.info("session activated chat_id=%s user_id=%s", chat_id, session.user.id)
        return dash

    def get(self, chat_id: int) -> Optional[DashboardSession]:
        return self._sessions.get(chat_id)

    def teardown(self, chat_id: int) -> None:
        if self._sessions.pop(chat_id, None) is not None:
            logger.info("session torn down chat_id=%s", chat_id)

    def teardown_user(self, user_id: str) -> list[int]:
        chats = [cid for cid, d in self._sessions.items() if d.owner_id == user_id]
        for cid in chats:
            self.teardown(cid)
        return chats

    async def handle_auth_event(self, event: AuthEvent, session: Session) -> None:
        # Global sign-out ends the session in every chat of that user.
        if event == "SIGNED_OUT":
            self.teardown_user(session.user.id)

    def __len__(self) -> int:
        return len(self._sessions)
