from typing import Optional, Sequence, Tuple

import requests

from mealbot.config import Settings
from mealbot.logger import get_logger

logger = get_logger("mealbot.telegram")

API_URL = "https://api.telegram.org/bot{token}/{method}"

# (label, callback data)
Button = Tuple[str, str]


class TelegramClient:
    """Thin sender for the Telegram Bot API."""

    def __init__(self, settings: Settings):
        self.token = settings.telegram_token
        self.timeout = settings.request_timeout

    def _call(self, method: str, payload: dict) -> bool:
        url = API_URL.format(token=self.token, method=method)
        try:
            response = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Telegram %s failed: %s", method, exc)
            return False

        if response.status_code != 200:
            logger.error("Telegram %s answered %s: %s", method, response.status_code, response.text)
            return False
        return True

    def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: Optional[str] = None,
        buttons: Optional[Sequence[Button]] = None,
    ) -> bool:
        """Send `text` to `chat_id`, optionally as Markdown and with one row of inline buttons."""
        payload = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [
                    [{"text": label, "callback_data": data} for label, data in buttons]
                ]
            }
        return self._call("sendMessage", payload)

    def answer_callback(self, callback_query_id: str) -> bool:
        return self._call("answerCallbackQuery", {"callback_query_id": callback_query_id})
