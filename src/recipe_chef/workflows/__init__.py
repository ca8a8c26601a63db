from .recipe_workflow import RecipeWorkflowState, build_recipe_workflow
from .kitchen_view import KitchenView, append_ingredient
__all__ = ["RecipeWorkflowState", "build_recipe_workflow", "KitchenView", "append_ingredient"]
