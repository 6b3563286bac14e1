# Settings - read from environment (.env loaded by python-dotenv)
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()  # Load .env so local runs pick up LEDGER_ADMIN_ID / DEMO_MODE


def _env_flag(name: str, default: str = "") -> bool:
    return os.environ.get(name, default).lower() == "true"


def is_demo_mode() -> bool:
    """True only when DEMO_MODE env var is explicitly 'true' (case-insensitive)."""
    return _env_flag("DEMO_MODE")


@dataclass
class Settings:
    admin_id: str
    accepting: bool
    frontend_url: str
    log_level: str


def load_settings() -> Settings:
    return Settings(
        admin_id=os.environ.get("LEDGER_ADMIN_ID", "admin"),
        accepting=_env_flag("LEDGER_ACCEPTING", "true"),
        frontend_url=os.environ.get("FRONTEND_URL", ""),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
