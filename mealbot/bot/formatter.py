"""Render a meal response as a Telegram Markdown message.

Formatting never fails: a recipe that can't be decoded is shown raw, and a
broken shopping list is replaced by a single error line.
"""

from typing import List, Optional

from mealbot.bot import messages
from mealbot.bot.models import Ingredient, MealResponse, Recipe, ShoppingListItem
from mealbot.bot.parser import parse_recipe, parse_shopping_list
from mealbot.exceptions import InnerDecodeError
from mealbot.logger import get_logger

logger = get_logger("mealbot.bot.formatter")

# Characters with a meaning in Telegram's legacy Markdown.
MARKDOWN_SPECIAL = "_*`["


def escape_markdown(text: str) -> str:
    for char in MARKDOWN_SPECIAL:
        text = text.replace(char, "\\" + char)
    return text


def format_ingredient(ingredient: Ingredient) -> str:
    return "- {}: {:.0f} {}".format(
        escape_markdown(ingredient.product_id),
        ingredient.amount,
        escape_markdown(ingredient.unit),
    )


def format_shopping_item(item: ShoppingListItem) -> str:
    """One bullet; each optional clause is added only when its value is positive."""
    line = "• " + escape_markdown(item.display_name)
    if item.amount > 0:
        line += f" ({item.amount} g)"
    if item.weight_per_pkg > 0:
        line += f" {item.weight_per_pkg:.2f} kg"
    if item.price_per_pkg > 0:
        line += f" - {item.price_per_pkg:.2f}₽"
    return line


def _recipe_lines(recipe: Recipe) -> List[str]:
    lines = [messages.RECIPE_HEADER]
    lines.extend("- " + escape_markdown(step) for step in recipe.steps)
    lines.append("")
    lines.append(messages.INGREDIENTS_HEADER)
    lines.extend(format_ingredient(ingredient) for ingredient in recipe.ingredients)
    lines.append("")
    return lines


def _dish_lines(name: str, blob: Optional[str] = None) -> List[str]:
    lines = [messages.DISH.format(name=escape_markdown(name))]
    if blob is None:
        return lines

    try:
        recipe = parse_recipe(blob)
    except InnerDecodeError as exc:
        logger.warning("Recipe for '%s' kept raw: %s", name, exc.message)
        lines.append(messages.RECIPE_RAW.format(raw=escape_markdown(blob)))
        lines.append("")
        return lines

    lines.extend(_recipe_lines(recipe))
    return lines


def _shopping_list_lines(blob: str) -> List[str]:
    try:
        shopping_list = parse_shopping_list(blob)
    except InnerDecodeError as exc:
        logger.warning("Shopping list not rendered: %s", exc.message)
        return [messages.SHOPPING_LIST_ERROR]

    lines = [messages.SHOPPING_LIST_HEADER]
    lines.extend(format_shopping_item(item) for item in shopping_list.products)
    return lines


def format_shopping_list(blob: str) -> str:
    """Render the raw shopping list blob, or the error line if it is malformed."""
    return "\n".join(_shopping_list_lines(blob)) + "\n"


def format_meal_message(response: MealResponse) -> str:
    """Build the "next meal" message for a decoded menu service response."""
    meal = response.meal
    lines = [messages.MEAL_HEADER, ""]

    for i, name in enumerate(meal.dish_name):
        blob = meal.recipe[i] if i < len(meal.recipe) else None
        lines.extend(_dish_lines(name, blob))

    if response.shopping_list:
        lines.append("")
        lines.extend(_shopping_list_lines(response.shopping_list))

    return "\n".join(lines) + "\n"
