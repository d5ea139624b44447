from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Quantity = Union[int, float, str]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Text(_Frozen):
    type: Literal["text"] = "text"
    value: str


class Ingredient(_Frozen):
    type: Literal["ingredient"] = "ingredient"
    name: str
    quantity: Quantity
    units: str = ""
    preparation: Optional[str] = None
    step: Optional[int] = None


class Cookware(_Frozen):
    type: Literal["cookware"] = "cookware"
    name: str
    quantity: Quantity
    step: Optional[int] = None


class Timer(_Frozen):
    type: Literal["timer"] = "timer"
    name: str = ""
    quantity: Quantity = 0
    units: str = ""


StepItem = Annotated[Union[Text, Ingredient, Cookware, Timer], Field(discriminator="type")]
Step = List[StepItem]


class Item(_Frozen):
    name: str
    synonym: str = ""


class Recipe(_Frozen):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ingredients: List[Ingredient] = []
    cookwares: List[Cookware] = []
    metadata: Dict[str, str] = {}
    steps: List[Step] = []
    shopping_list: Dict[str, List[Item]] = Field(default_factory=dict, alias="shoppingList")


class ParserOptions(_Frozen):
    """
    default_ingredient_amount: quantity used when an ingredient gives none
    default_cookware_amount: quantity used when a cookware gives none
    include_step_number: tag ingredients and cookware with their zero-based step
    """

    default_ingredient_amount: Quantity = "some"
    default_cookware_amount: Quantity = 1
    include_step_number: bool = False
