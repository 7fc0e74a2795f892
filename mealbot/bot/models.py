"""Schemas for the menu service payloads.

The meal response carries two string fields that hold JSON of their own
(each recipe, and the shopping list). They stay raw strings here and are
decoded separately by the parser.

Decoding follows the service's zero-value rules: a missing field or a
``null`` anywhere (an object, a field, a list element) becomes the zero value
of its type, while numbers and booleans must already have the right JSON type.
"""

from datetime import datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, model_validator

# A string where JSON null reads as "".
Text = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


class WireModel(BaseModel):
    """Immutable model where missing or null fields fall back to their defaults."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Nutrition(WireModel):
    proteins: StrictInt = 0
    fats: StrictInt = 0
    carbohydrates: StrictInt = 0
    calories: StrictInt = 0


class Meal(WireModel):
    """A single serving recommendation.

    `dish_name[i]` and `recipe[i]` describe the same dish; `recipe` may be
    shorter than `dish_name`.
    """

    id: Text = ""
    dish_ids: List[Text] = Field(default_factory=list, alias="ID_dish")
    dish_name: List[Text] = Field(default_factory=list, alias="dishname")
    type: Text = ""
    recipe: List[Text] = Field(default_factory=list)
    nutrition: Nutrition = Field(default_factory=Nutrition, alias="total_nutrition")


class MealResponse(WireModel):
    meal: Meal = Field(default_factory=Meal)
    shopping_list: Text = ""


class Ingredient(WireModel):
    unit: Text = ""
    amount: StrictFloat = 0.0
    product_id: Text = ""


class Recipe(WireModel):
    steps: List[Text] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=list)


class ShoppingListItem(WireModel):
    id: Text = ""
    name: Text = ""
    weight_per_pkg: StrictFloat = 0.0
    amount: StrictInt = 0
    price_per_pkg: StrictFloat = 0.0
    expiration_date: Optional[datetime] = None
    present_in_fridge: StrictBool = False
    nutritional_value_relative: Nutrition = Field(default_factory=Nutrition)

    @property
    def display_name(self) -> str:
        return self.name or self.id


class ShoppingList(WireModel):
    products: List[ShoppingListItem] = Field(default_factory=list)
