import requests

from mealbot.config import Settings
from mealbot.exceptions import TransportError
from mealbot.logger import get_logger

logger = get_logger("mealbot.menu_client")

GET_MEAL_PATH = "/api/v1/menus/getMeal"


def fetch_meal(settings: Settings, user_name: str) -> bytes:
    """Ask the menu service for the user's next meal and return the raw body.

    Raises:
        TransportError: If the request fails or the status is not 200. The
            response body, when there is one, is attached as ``body``.
    """
    url = f"{settings.menu_service_url}{GET_MEAL_PATH}"
    logger.info("-> %s?user_id=%s", url, user_name)

    try:
        response = requests.get(url, params={"user_id": user_name}, timeout=settings.request_timeout)
    except requests.RequestException as exc:
        logger.error("Menu service request failed: %s", exc)
        raise TransportError("Failed to fetch data") from exc

    logger.info("<- %s %s", response.status_code, url)
    if response.status_code != 200:
        raise TransportError("Response status is not OK", status_code=response.status_code, body=response.text)

    return response.content
