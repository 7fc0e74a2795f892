"""Decoders for the menu service payloads.

Decoding happens in two stages. `parse_meal_response` only decodes the outer
object; every recipe blob and the shopping list blob is decoded on its own
with `parse_recipe` / `parse_shopping_list`, so a broken fragment never
invalidates the rest of the response.
"""

from typing import Union

from pydantic import ValidationError

from mealbot.bot.models import MealResponse, Recipe, ShoppingList
from mealbot.exceptions import InnerDecodeError, OuterDecodeError


def parse_meal_response(raw: Union[bytes, str]) -> MealResponse:
    """Decode the menu service response.

    Raises:
        OuterDecodeError: If the payload is not JSON of the meal response shape.
    """
    try:
        return MealResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise OuterDecodeError("Failed to decode meal response", details={"errors": exc.errors(include_url=False)}) from exc


def parse_recipe(blob: str) -> Recipe:
    """Decode a single recipe blob. Raises `InnerDecodeError` on failure."""
    try:
        return Recipe.model_validate_json(blob)
    except ValidationError as exc:
        raise InnerDecodeError(f"Failed to decode recipe: {exc.error_count()} error(s)", blob=blob) from exc


def parse_shopping_list(blob: str) -> ShoppingList:
    """Decode the shopping list blob. Raises `InnerDecodeError` on failure."""
    try:
        return ShoppingList.model_validate_json(blob)
    except ValidationError as exc:
        raise InnerDecodeError(f"Failed to decode shopping list: {exc.error_count()} error(s)", blob=blob) from exc
