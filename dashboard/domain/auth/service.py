from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from dashboard.domain.auth.models import ACCESS_TOKEN_KEY, AUTH_KEY_PREFIX, MIN_PASSWORD_LENGTH, Session
from dashboard.domain.auth.ports import SessionProvider, SessionStorage
from dashboard.domain.auth.registry import DashboardSession, SessionRegistry
from dashboard.domain.common.errors import AlreadyRegisteredError, AuthError, DomainError, InvalidCredentialsError
from dashboard.domain.common.models import Notice, error_notice

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    ok: bool
    notice: Notice
    dashboard: Optional[DashboardSession] = None


class AuthService:
    """
    Sign-up / sign-in / sign-out for one chat at a time.

    Validation and the two expected auth failures become specific notices;
    anything else becomes a generic "... failed" notice. No aiogram.
    """

    def __init__(
        self,
        provider: SessionProvider,
        storage: SessionStorage,
        registry: SessionRegistry,
        app_name: str,
    ) -> None:
        self._provider = provider
        self._storage = storage
        self._registry = registry
        self._app_name = app_name

    async def sign_up(self, chat_id: int, email: str, password: str, display_name: str) -> AuthResult:
        email = (email or "").strip()
        display_name = (display_name or "").strip()
        if not email or not password or not display_name:
            return AuthResult(False, error_notice("Missing information", "Please fill in all fields"))
        if len(password) < MIN_PASSWORD_LENGTH:
            return AuthResult(
                False,
                error_notice("Password too short", f"Use at least {MIN_PASSWORD_LENGTH} characters"),
            )

        await self._clean_up_auth_state(chat_id)

        try:
            session = await self._provider.sign_up(email, password, display_name)
        except AlreadyRegisteredError:
            return AuthResult(
                False,
                error_notice("Account exists", "This email is already registered. Please sign in instead."),
            )
        except AuthError as e:
            logger.warning("sign_up failed chat_id=%s: %s", chat_id, e)
            return AuthResult(False, error_notice("Sign up failed", str(e) or "An error occurred during sign up"))

        dash = await self._start(chat_id, session)
        notice = Notice(f"Welcome to {self._app_name}!", "Your account has been created successfully.")
        return AuthResult(True, notice, dash)

    async def sign_in(self, chat_id: int, email: str, password: str) -> AuthResult:
        email = (email or "").strip()
        if not email or not password:
            return AuthResult(False, error_notice("Missing information", "Please enter your email and password"))

        await self._clean_up_auth_state(chat_id)

        try:
            session = await self._provider.sign_in(email, password)
        except InvalidCredentialsError:
            return AuthResult(False, error_notice("Invalid credentials", "Please check your email and password"))
        except AuthError as e:
            logger.warning("sign_in failed chat_id=%s: %s", chat_id, e)
            return AuthResult(False, error_notice("Sign in failed", str(e) or "An error occurred during sign in"))

        dash = await self._start(chat_id, session)
        return AuthResult(True, Notice("Welcome back!", "You've been signed in successfully."), dash)

    async def sign_out(self, chat_id: int) -> Notice:
        token = self._storage.get(chat_id, ACCESS_TOKEN_KEY)
        self._clear_auth_keys(chat_id)
        self._registry.teardown(chat_id)
        if token:
            try:
                await self._provider.sign_out(token, scope="global")
            except AuthError as e:
                logger.warning("sign_out failed chat_id=%s: %s", chat_id, e)
                return error_notice("Sign out failed", str(e))
        return Notice("Signed out", "See you soon!")

    async def resolve(self, chat_id: int) -> Optional[DashboardSession]:
        """Active dashboard session of the chat, restored from storage if needed."""
        dash = self._registry.get(chat_id)
        if dash is not None:
            return dash

        token = self._storage.get(chat_id, ACCESS_TOKEN_KEY)
        if not token:
            return None

        session = await self._provider.get_session(token)
        if session is None:
            self._clear_auth_keys(chat_id)
            return None

        profile = await self._provider.get_profile(session.user.id)
        return self._registry.activate(chat_id, session, profile)

    async def _start(self, chat_id: int, session: Session) -> DashboardSession:
        self._storage.set(chat_id, ACCESS_TOKEN_KEY, session.access_token)
        profile = await self._provider.get_profile(session.user.id)
        return self._registry.activate(chat_id, session, profile)

    async def _clean_up_auth_state(self, chat_id: int) -> None:
        token = self._storage.get(chat_id, ACCESS_TOKEN_KEY)
        self._clear_auth_keys(chat_id)
        self._registry.teardown(chat_id)
        if not token:
            return
        # Best effort: a stale token must not block a fresh sign-in.
        try:
            await self._provider.sign_out(token, scope="global")
        except DomainError as e:
            logger.debug("pre-auth sign_out ignored chat_id=%s: %s", chat_id, e)

    def _clear_auth_keys(self, chat_id: int) -> None:
        for key in self._storage.keys(chat_id):
            if key.startswith(AUTH_KEY_PREFIX):
                self._storage.remove(chat_id, key)
