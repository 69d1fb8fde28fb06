from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import ExceptionTypeFilter
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent

from dashboard.config import load_settings
from dashboard.domain.auth.registry import SessionRegistry
from dashboard.domain.auth.service import AuthService
from dashboard.domain.common.time import to_utc_iso
from dashboard.infra.clock.system_clock import SystemClock
from dashboard.infra.db.connection import Database
from dashboard.infra.db.repo.auth_sqlite import SqliteSessionProvider
from dashboard.infra.db.repo.table_sqlite import SqliteRemoteStore
from dashboard.infra.db.schema_version import apply_migrations
from dashboard.infra.ids.uuid_gen import UuidGenerator
from dashboard.infra.storage.memory_storage import MemorySessionStorage

from dashboard.ui.telegram.handlers.auth import router as auth_router
from dashboard.ui.telegram.handlers.cancel import router as cancel_router
from dashboard.ui.telegram.handlers.dashboard import router as dashboard_router
from dashboard.ui.telegram.handlers.notes import router as notes_router
from dashboard.ui.telegram.handlers.start import router as start_router
from dashboard.ui.telegram.handlers.tasks import router as tasks_router
from dashboard.ui.telegram.middlewares.di import DIMiddleware
from dashboard.ui.telegram.notifier import ChatNotifier


async def main() -> None:
    """
    Entry point for the dashboard bot.

    Only run ONE polling instance per bot token; a second one gets
    TelegramConflictError ("terminated by other getUpdates request").
    """
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )
    logger = logging.getLogger(__name__)

    pid = os.getpid()
    logger.info("=" * 60)
    logger.info("Dashboard bot starting - PID: %s", pid)
    logger.info("=" * 60)

    # --- DB path: one place, always absolute, ensure dir exists ---
    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = Path.cwd() / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("DB_PATH: %s", db_path)

    db = Database(str(db_path))
    clock = SystemClock(settings.timezone)
    ids = UuidGenerator()

    applied = await apply_migrations(db=db, now_iso=to_utc_iso(clock.now()))
    if applied:
        logger.info("Applied migrations: %s", applied)

    # --- bot/dispatcher ---
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = Dispatcher(storage=MemoryStorage())

    # --- services ---
    store = SqliteRemoteStore(db, clock, ids)
    provider = SqliteSessionProvider(db, clock, ids)
    registry = SessionRegistry(store, notifier_factory=lambda chat_id: ChatNotifier(bot, chat_id))
    provider.on_auth_state_change(registry.handle_auth_event)
    auth_service = AuthService(
        provider=provider,
        storage=MemorySessionStorage(),
        registry=registry,
        app_name=settings.app_name,
    )

    # --- middlewares ---
    dp.message.middleware(DIMiddleware(auth_service, settings))
    dp.callback_query.middleware(DIMiddleware(auth_service, settings))

    # --- routers (cancel first so it wins over FSM text steps) ---
    dp.include_router(cancel_router)
    dp.include_router(start_router)
    dp.include_router(auth_router)
    dp.include_router(dashboard_router)
    dp.include_router(tasks_router)
    dp.include_router(notes_router)

    @dp.error(ExceptionTypeFilter(TelegramBadRequest))
    async def handle_old_callback_query(event: ErrorEvent) -> None:
        """Ignore TelegramBadRequest for old/invalid callback queries (e.g. after bot restart)."""
        msg = str(event.exception).lower()
        if "query is too old" in msg or "query id is invalid" in msg or "response timeout expired" in msg:
            logger.debug("Ignoring old/invalid callback query: %s", event.exception)
            return
        raise event.exception

    logger.info("Starting polling - PID: %s", pid)
    try:
        await dp.start_polling(bot)
    except Exception:
        logger.error("Bot crashed - PID: %s", pid, exc_info=True)
        raise
    finally:
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", pid)


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Bot stopped by user")


if __name__ == "__main__":
    run()
