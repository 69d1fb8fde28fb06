from dataclasses import dataclass
import os
from pathlib import Path

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception:
    pass


# one note card must always fit into a single Telegram message
NOTE_PREVIEW_MAX = 1000


@dataclass(frozen=True)
class Settings:
    bot_token: str
    timezone: str
    db_path: Path
    app_name: str
    note_preview_chars: int
    log_level: str


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_settings() -> Settings:
    bot_token = os.getenv("BOT_TOKEN", "").strip()
    tz = os.getenv("TZ", "Europe/Helsinki").strip()
    db_raw = os.getenv("DB_PATH", "data/dashboard.db").strip()
    app_name = os.getenv("APP_NAME", "Ayesha AI").strip() or "Ayesha AI"
    preview = _env_int("NOTE_PREVIEW_CHARS", 160)
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")
    if not 0 < preview <= NOTE_PREVIEW_MAX:
        raise RuntimeError(f"NOTE_PREVIEW_CHARS must be between 1 and {NOTE_PREVIEW_MAX}")

    # db_path may be relative; the entry point resolves it
    return Settings(
        bot_token=bot_token,
        timezone=tz,
        db_path=Path(db_raw),
        app_name=app_name,
        note_preview_chars=preview,
        log_level=log_level,
    )
