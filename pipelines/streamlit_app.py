import asyncio

import streamlit as st

from recipe_chef.agents import GenerationClient
from recipe_chef.config import Settings, configure_logging
from recipe_chef.ui import error_banner, results_area, suggestion_chips, working_spinner
from recipe_chef.workflows import KitchenView

INGREDIENTS_KEY = "ingredients"

settings = Settings.from_env()
configure_logging(settings.log_level)

# One view per browser session; reloading the page starts over
if "kitchen_view" not in st.session_state:
    st.session_state.kitchen_view = KitchenView(GenerationClient.from_settings(settings))
view: KitchenView = st.session_state.kitchen_view

if INGREDIENTS_KEY not in st.session_state:
    st.session_state[INGREDIENTS_KEY] = view.ingredients


def sync_ingredients():
    view.set_ingredients(st.session_state[INGREDIENTS_KEY])


def accept_suggestion(suggestion: str):
    view.accept_suggestion(suggestion)
    st.session_state[INGREDIENTS_KEY] = view.ingredients


st.title("👩‍🍳 Recipe Generator")
st.caption("Got ingredients? Let's turn them into a delicious meal!")

st.text_area(
    "Your Available Ingredients",
    key=INGREDIENTS_KEY,
    on_change=sync_ingredients,
    placeholder="e.g., chicken breast, broccoli, garlic, olive oil, lemon",
    height=120,
    disabled=view.busy,
)
sync_ingredients()

suggest_col, generate_col = st.columns([1, 2])
suggest_clicked = suggest_col.button("Suggest Ingredients", disabled=view.busy)
generate_clicked = generate_col.button("Generate Recipe", type="primary", disabled=view.busy)

if suggest_clicked:
    with working_spinner("Thinking..."):
        asyncio.run(view.suggest_ingredients())

if view.suggestion_error:
    error_banner(view.suggestion_error)
suggestion_chips(view.suggestions, on_accept=accept_suggestion, disabled=view.busy)

st.divider()
results_slot = st.empty()


def render_results(current: KitchenView):
    with results_slot.container():
        results_area(current.recipe, current.image_state, current.is_loading, current.error_message)


if generate_clicked:
    asyncio.run(view.generate_recipe(on_update=render_results))
    # Redraw the whole form so the cleared suggestions and re-enabled controls show up
    st.rerun()

render_results(view)
