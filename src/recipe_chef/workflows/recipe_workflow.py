from typing import Optional

from langgraph.graph import END, StateGraph
from pydantic import BaseModel

from recipe_chef.schema import ErrorInfo, Ok, Recipe

GENERATE_RECIPE = "generate_recipe"
GENERATE_IMAGE = "generate_image"


class RecipeWorkflowState(BaseModel):
    ingredients: str
    recipe: Optional[Recipe] = None
    image_url: Optional[str] = None
    error: Optional[ErrorInfo] = None
    image_error: Optional[ErrorInfo] = None


def build_recipe_workflow(client):
    """Compile the recipe -> image graph around a GenerationClient.

    The image node only runs when the recipe node produced a recipe. Stream it
    with ``stream_mode="updates"`` to observe each node's output as it lands.
    """

    async def generate_recipe_node(state: RecipeWorkflowState) -> dict:
        result = await client.generate_recipe(state.ingredients)
        if isinstance(result, Ok):
            return {"recipe": result.value}
        return {"error": result.error}

    async def generate_image_node(state: RecipeWorkflowState) -> dict:
        result = await client.generate_recipe_image(state.recipe.recipeName, state.recipe.description)
        if isinstance(result, Ok):
            return {"image_url": result.value}
        return {"image_error": result.error}

    def route_after_recipe(state: RecipeWorkflowState) -> str:
        return GENERATE_IMAGE if state.recipe is not None else END

    graph = StateGraph(state_schema=RecipeWorkflowState)
    graph.add_node(GENERATE_RECIPE, generate_recipe_node)
    graph.add_node(GENERATE_IMAGE, generate_image_node)

    graph.set_entry_point(GENERATE_RECIPE)
    graph.add_conditional_edges(
        GENERATE_RECIPE,
        route_after_recipe,
        {GENERATE_IMAGE: GENERATE_IMAGE, END: END},
    )
    graph.add_edge(GENERATE_IMAGE, END)

    return graph.compile()
