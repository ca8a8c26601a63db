from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipeName: str = Field(description="The name of the recipe.")
    description: str = Field(description="A short, appetizing description of the dish.")
    prepTime: str = Field(description="Preparation time, e.g., '15 minutes'.")
    cookTime: str = Field(description="Cooking time, e.g., '30 minutes'.")
    ingredients: List[str] = Field(
        description="A list of ingredients required for the recipe, derived from the user's list. "
                    "Each item is a specific ingredient with quantity."
    )
    instructions: List[str] = Field(
        description="A step-by-step list of instructions to prepare the dish, one step per item."
    )
