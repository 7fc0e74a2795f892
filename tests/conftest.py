"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports.
"""

import json
import sys
from pathlib import Path
from types import MappingProxyType

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mealbot.config import Settings  # noqa: E402

KNOWN_ID = 111111111
STRANGER_ID = 999999999


class FakeSender:
    """Records everything the bot would send to Telegram."""

    def __init__(self, delivered=True):
        self.sent = []
        self.answered = []
        self.delivered = delivered

    def send_message(self, chat_id, text, parse_mode=None, buttons=None):
        self.sent.append({"chat_id": chat_id, "text": text, "parse_mode": parse_mode, "buttons": buttons})
        return self.delivered

    def answer_callback(self, callback_query_id):
        self.answered.append(callback_query_id)
        return True


def recipe_blob(steps, ingredients):
    return json.dumps({"steps": steps, "ingredients": ingredients})


def meal_payload(dish_names, recipes, shopping_list=""):
    return json.dumps(
        {
            "meal": {
                "id": "meal-1",
                "ID_dish": [f"dish-{i}" for i in range(len(dish_names))],
                "dishname": dish_names,
                "type": "breakfast",
                "recipe": recipes,
                "total_nutrition": {"proteins": 30, "fats": 20, "carbohydrates": 50, "calories": 500},
            },
            "shopping_list": shopping_list,
        }
    ).encode()


OMELETTE_RECIPE = recipe_blob(["Beat eggs"], [{"unit": "g", "amount": 100, "product_id": "egg"}])


@pytest.fixture
def settings():
    return Settings(
        telegram_token="123:test",
        menu_service_url="http://menu.test",
        known_users=MappingProxyType({str(KNOWN_ID): "Ivan"}),
    )


@pytest.fixture
def sender():
    return FakeSender()
