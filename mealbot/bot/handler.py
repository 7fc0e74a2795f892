"""Dispatch of chat events to the menu service and the formatter.

Telegram updates are first turned into a `Start` or `GetMeal` event by
`event_from_update`, then `handle_event` answers it through a sender object
that exposes ``send_message(chat_id, text, parse_mode=None, buttons=None)``.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from mealbot.bot import messages
from mealbot.bot.formatter import format_meal_message
from mealbot.bot.parser import parse_meal_response
from mealbot.config import Settings
from mealbot.exceptions import OuterDecodeError, TransportError
from mealbot.logger import get_logger
from mealbot.menu_client import fetch_meal

logger = get_logger("mealbot.bot.handler")

MARKDOWN = "Markdown"

GET_MEAL_BUTTONS = [(messages.GET_MEAL_BUTTON, messages.GET_MEAL_CALLBACK)]
RETRY_BUTTONS = [(messages.RETRY_BUTTON, messages.GET_MEAL_CALLBACK)]
START_BUTTONS = [(messages.START_BUTTON, messages.START_CALLBACK)]


@dataclass(frozen=True)
class Start:
    chat_id: int
    user_id: int
    callback_id: Optional[str] = None


@dataclass(frozen=True)
class GetMeal:
    chat_id: int
    user_id: int
    callback_id: Optional[str] = None


Event = Union[Start, GetMeal]

Fetcher = Callable[[Settings, str], bytes]


def _is_start_command(text: str) -> bool:
    if not text.startswith("/"):
        return False
    command = text.split()[0][1:]
    return command.split("@")[0] == "start"


def event_from_update(update: Dict[str, Any]) -> Optional[Event]:
    """Map a Telegram update to an event, or None when there is nothing to answer."""
    message = update.get("message")
    if message:
        if _is_start_command(message.get("text") or ""):
            return Start(chat_id=message["chat"]["id"], user_id=message["from"]["id"])
        return None

    query = update.get("callback_query")
    if not query:
        return None

    user_id = query["from"]["id"]
    if query.get("data") == messages.START_CALLBACK:
        return Start(chat_id=user_id, user_id=user_id, callback_id=query.get("id"))
    if query.get("data") == messages.GET_MEAL_CALLBACK:
        chat = (query.get("message") or {}).get("chat") or {}
        return GetMeal(chat_id=chat.get("id", user_id), user_id=user_id, callback_id=query.get("id"))
    return None


def send_error(sender, chat_id: int, text: str) -> None:
    sender.send_message(chat_id, messages.ERROR.format(text=text), buttons=RETRY_BUTTONS)


def handle_start(event: Start, settings: Settings, sender) -> None:
    name = settings.user_name(event.user_id)
    if name is None:
        sender.send_message(event.chat_id, messages.UNKNOWN_USER)
        return
    sender.send_message(event.chat_id, messages.WELCOME_BACK.format(name=name), buttons=GET_MEAL_BUTTONS)


def handle_get_meal(event: GetMeal, settings: Settings, sender, fetch: Fetcher = fetch_meal) -> None:
    name = settings.user_name(event.user_id)
    if name is None:
        sender.send_message(event.chat_id, messages.UNKNOWN_USER)
        return

    sender.send_message(event.chat_id, messages.PICKING_MEAL.format(name=name))

    try:
        raw = fetch(settings, name)
    except TransportError as exc:
        if exc.status_code is None:
            send_error(sender, event.chat_id, messages.FETCH_FAILED)
        else:
            send_error(sender, event.chat_id, messages.BAD_STATUS.format(body=exc.body))
        return

    try:
        response = parse_meal_response(raw)
    except OuterDecodeError as exc:
        logger.error("Bad meal response for %s: %s", name, exc.details)
        send_error(sender, event.chat_id, messages.DECODE_FAILED)
        return

    logger.info("Meal %s for %s: %d dish(es)", response.meal.id, name, len(response.meal.dish_name))
    text = format_meal_message(response)
    sender.send_message(event.chat_id, text, parse_mode=MARKDOWN, buttons=GET_MEAL_BUTTONS)


def handle_event(event: Event, settings: Settings, sender, fetch: Fetcher = fetch_meal) -> None:
    if isinstance(event, Start):
        handle_start(event, settings, sender)
    elif isinstance(event, GetMeal):
        handle_get_meal(event, settings, sender, fetch)
    else:
        raise TypeError(f"Unknown event {event!r}")


def broadcast(settings: Settings, sender, template: str, buttons=None) -> None:
    """Send `template` (formatted with the user's name) to every known user."""
    for chat_id, name in settings.known_users.items():
        if not sender.send_message(int(chat_id), template.format(name=name), buttons=buttons):
            logger.warning("Broadcast to %s (%s) was not delivered", name, chat_id)


def broadcast_started(settings: Settings, sender) -> None:
    broadcast(settings, sender, messages.BOT_STARTED, buttons=START_BUTTONS)


def broadcast_stopped(settings: Settings, sender) -> None:
    broadcast(settings, sender, messages.BOT_STOPPED)
