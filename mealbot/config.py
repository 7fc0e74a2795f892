import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

from mealbot.exceptions import ConfigurationError

load_dotenv()

TELEGRAM_TOKEN = os.getenv("TELEGRAM_TOKEN")
MENU_SERVICE_URL = os.getenv("MENU_SERVICE_URL", "http://localhost:8080")
KNOWN_USERS = os.getenv("KNOWN_USERS", "")
WEBHOOK_SECRET = os.getenv("WEBHOOK_SECRET")
REQUEST_TIMEOUT = os.getenv("REQUEST_TIMEOUT", "10")


@dataclass(frozen=True)
class Settings:
    telegram_token: str
    menu_service_url: str = "http://localhost:8080"
    known_users: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    webhook_secret: Optional[str] = None
    request_timeout: float = 10.0

    def user_name(self, user_id) -> Optional[str]:
        """Display name of a known user, None for strangers."""
        return self.known_users.get(str(user_id))


def parse_known_users(raw: str) -> Mapping[str, str]:
    """Parse ``"<chat id>=<name>,<chat id>=<name>"`` into a read-only mapping."""
    users = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        chat_id, sep, name = entry.partition("=")
        chat_id, name = chat_id.strip(), name.strip()
        if not sep or not name:
            raise ConfigurationError(f"Known user entry '{entry}' must look like <chat id>=<name>", config_key="KNOWN_USERS")
        try:
            int(chat_id)
        except ValueError:
            raise ConfigurationError(f"Known user id '{chat_id}' is not a number", config_key="KNOWN_USERS")
        users[chat_id] = name
    return MappingProxyType(users)


def load_settings() -> Settings:
    if not TELEGRAM_TOKEN:
        raise ConfigurationError("TELEGRAM_TOKEN is not set", config_key="TELEGRAM_TOKEN")

    try:
        timeout = float(REQUEST_TIMEOUT)
    except ValueError:
        raise ConfigurationError(f"REQUEST_TIMEOUT '{REQUEST_TIMEOUT}' is not a number", config_key="REQUEST_TIMEOUT")

    return Settings(
        telegram_token=TELEGRAM_TOKEN,
        menu_service_url=(MENU_SERVICE_URL or "http://localhost:8080").rstrip("/"),
        known_users=parse_known_users(KNOWN_USERS),
        webhook_secret=WEBHOOK_SECRET or None,
        request_timeout=timeout,
    )
