"""
Stateless Streamlit components for the recipe form.

Nothing here changes state. Components render whatever they are given, into
the current Streamlit container or into an explicit one (e.g. an ``st.empty()``
slot that is redrawn while a workflow progresses).
"""

from contextlib import contextmanager
from typing import Callable, List, Literal, Optional

import streamlit as st

from recipe_chef.agents.image_agent import decode_data_uri
from recipe_chef.schema import Loading, Recipe, Succeeded, WorkflowState

ImageRegion = Literal["placeholder", "image", "absent"]


def image_region(image_state: WorkflowState) -> ImageRegion:
    """Which of the three image states the recipe panel should show."""
    if isinstance(image_state, Loading):
        return "placeholder"
    if isinstance(image_state, Succeeded):
        return "image"
    return "absent"


@contextmanager
def working_spinner(label: str = "Thinking..."):
    with st.spinner(label):
        yield


def loading_indicator(container=None) -> None:
    target = container or st
    target.info("⏳ Generating your masterpiece...")


def error_banner(message: str, container=None) -> None:
    target = container or st
    target.error(f"⚠️ {message}")


def empty_results(container=None) -> None:
    target = container or st
    target.info("Your recipe will appear here.")


def recipe_panel(recipe: Recipe, image_state: WorkflowState, container=None) -> None:
    target = container or st

    region = image_region(image_state)
    if region == "placeholder":
        target.caption("🖼️ Creating a delicious visual...")
    elif region == "image":
        target.image(decode_data_uri(image_state.value), caption=recipe.recipeName)

    target.subheader(recipe.recipeName)
    target.write(recipe.description)

    prep_col, cook_col = target.columns(2)
    prep_col.metric("Prep time", recipe.prepTime)
    cook_col.metric("Cook time", recipe.cookTime)

    ingredients_col, instructions_col = target.columns([1, 2])
    ingredients_col.markdown("#### Ingredients")
    ingredients_col.markdown("\n".join(f"- {item}" for item in recipe.ingredients))
    instructions_col.markdown("#### Instructions")
    instructions_col.markdown("\n".join(f"{number}. {step}" for number, step in enumerate(recipe.instructions, 1)))


def suggestion_chips(
    suggestions: List[str],
    on_accept: Callable[[str], None],
    disabled: bool = False,
    container=None,
) -> None:
    if not suggestions:
        return
    target = container or st
    target.caption("Suggestions:")
    columns = target.columns(len(suggestions))
    for index, (column, suggestion) in enumerate(zip(columns, suggestions)):
        column.button(
            f"+ {suggestion}",
            key=f"suggestion-{index}-{suggestion}",
            on_click=on_accept,
            args=(suggestion,),
            disabled=disabled,
        )


def results_area(
    recipe: Optional[Recipe],
    image_state: WorkflowState,
    is_loading: bool,
    error_message: Optional[str],
    container=None,
) -> None:
    target = container or st
    if is_loading:
        loading_indicator(target)
    if error_message:
        error_banner(error_message, target)
    if recipe is not None:
        recipe_panel(recipe, image_state, target)
    if not is_loading and not error_message and recipe is None:
        empty_results(target)
