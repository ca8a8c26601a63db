import asyncio
import json

import pytest

from conftest import RECIPE_PAYLOAD, FakeGenerationClient, fake_llm, image_transport, make_recipe, provider_err
from recipe_chef.agents import GenerationClient, ImageAgent, RecipeAgent
from recipe_chef.schema import ErrorKind, Failed, Idle, Loading, Ok, Succeeded
from recipe_chef.workflows import KitchenView, append_ingredient
from recipe_chef.workflows.kitchen_view import (
    EMPTY_RECIPE_INPUT,
    EMPTY_SUGGESTION_INPUT,
    SUGGESTION_RETRY_MESSAGE,
)


def make_view(client=None, ingredients="chicken, lemon"):
    view = KitchenView(client or FakeGenerationClient())
    view.set_ingredients(ingredients)
    return view


# Recipe workflow

def test_successful_run_sets_recipe_and_image_and_clears_loading():
    view = make_view()

    asyncio.run(view.generate_recipe())

    assert view.recipe == make_recipe()
    assert view.image_url == "data:image/png;base64,aW1hZ2U="
    assert view.error_message is None
    assert not view.is_loading
    assert not view.is_image_loading
    assert not view.busy


def test_recipe_failure_sets_error_and_no_recipe():
    client = FakeGenerationClient(recipe_results=[provider_err()])
    view = make_view(client)

    asyncio.run(view.generate_recipe())

    assert view.recipe is None
    assert view.image_url is None
    assert view.error_message == "Failed to communicate with the recipe AI."
    assert not view.is_loading
    assert client.image_calls == []


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_input_sets_validation_error_without_calling_provider(text):
    client = FakeGenerationClient()
    view = make_view(client, ingredients=text)

    asyncio.run(view.generate_recipe())

    assert client.recipe_calls == []
    assert view.error_message == EMPTY_RECIPE_INPUT
    assert view.input_error.kind is ErrorKind.VALIDATION
    assert not view.is_loading


def test_image_failure_keeps_recipe_without_error_banner():
    client = FakeGenerationClient(image_results=[provider_err("Failed to generate an image for the recipe.")])
    view = make_view(client)

    asyncio.run(view.generate_recipe())

    assert view.recipe == make_recipe()
    assert view.image_url is None
    assert view.error_message is None
    assert isinstance(view.image_state, Failed)


def test_failed_rerun_leaves_no_stale_recipe_or_image():
    client = FakeGenerationClient(recipe_results=[Ok(value=make_recipe()), provider_err()])
    view = make_view(client)

    asyncio.run(view.generate_recipe())
    assert view.recipe is not None and view.image_url is not None

    asyncio.run(view.generate_recipe())

    assert view.recipe is None
    assert view.image_url is None
    assert view.error_message is not None


def test_recipe_run_clears_suggestions():
    view = make_view()
    asyncio.run(view.suggest_ingredients())
    assert view.suggestions == ["salt", "pepper"]

    asyncio.run(view.generate_recipe())

    assert view.suggestions == []
    assert isinstance(view.suggestion_state, Idle)


def test_updates_show_recipe_before_image_arrives():
    snapshots = []
    view = make_view()

    asyncio.run(view.generate_recipe(on_update=lambda v: snapshots.append(
        (v.recipe_state.status, v.image_state.status, v.busy)
    )))

    assert snapshots == [
        ("loading", "idle", True),
        ("succeeded", "loading", True),
        ("succeeded", "succeeded", False),
    ]


def test_newer_recipe_request_wins_over_stale_response():
    first, second = make_recipe("Chicken Piccata"), make_recipe("Risotto")
    client = FakeGenerationClient(recipe_results=[Ok(value=first), Ok(value=second)])
    view = make_view(client, ingredients="chicken")

    async def scenario():
        client.first_recipe_started = asyncio.Event()
        client.release_first_recipe = asyncio.Event()
        stale = asyncio.create_task(view.generate_recipe())
        await client.first_recipe_started.wait()

        view.set_ingredients("rice")
        await view.generate_recipe()

        client.release_first_recipe.set()
        await stale

    asyncio.run(scenario())

    assert client.recipe_calls == ["chicken", "rice"]
    assert view.recipe == second
    assert view.image_url is not None
    assert not view.busy


def test_unexpected_exception_still_clears_loading():
    class ExplodingClient(FakeGenerationClient):
        async def generate_recipe(self, ingredients):
            raise RuntimeError("bug")

    view = make_view(ExplodingClient())

    with pytest.raises(RuntimeError):
        asyncio.run(view.generate_recipe())

    assert not view.is_loading
    assert isinstance(view.recipe_state, Failed)


# Suggestion workflow

def test_suggestions_are_stored():
    client = FakeGenerationClient(suggestion_results=[Ok(value=["olive oil", "salt", "pepper"])])
    view = make_view(client)

    asyncio.run(view.suggest_ingredients())

    assert view.suggestions == ["olive oil", "salt", "pepper"]
    assert view.suggestion_error is None
    assert not view.is_suggesting
    assert client.suggestion_calls == ["chicken, lemon"]


def test_blank_input_sets_suggestion_error_without_calling_provider():
    client = FakeGenerationClient()
    view = make_view(client, ingredients="  ")

    asyncio.run(view.suggest_ingredients())

    assert client.suggestion_calls == []
    assert view.suggestion_error == EMPTY_SUGGESTION_INPUT


def test_suggestion_failure_uses_retry_message():
    client = FakeGenerationClient(suggestion_results=[provider_err("Failed to get ingredient suggestions.")])
    view = make_view(client)

    asyncio.run(view.suggest_ingredients())

    assert view.suggestions == []
    assert view.suggestion_error == SUGGESTION_RETRY_MESSAGE
    assert view.suggestion_state.error.kind is ErrorKind.PROVIDER
    assert not view.is_suggesting


def test_suggestion_exception_clears_suggesting_and_propagates():
    client = FakeGenerationClient(suggestion_results=[ConnectionError("down")])
    view = make_view(client)

    with pytest.raises(ConnectionError):
        asyncio.run(view.suggest_ingredients())

    assert not view.is_suggesting
    assert view.suggestion_error == SUGGESTION_RETRY_MESSAGE


# Accepting suggestions

@pytest.mark.parametrize(
    "ingredients, expected",
    [
        ("eggs", "eggs, milk"),
        ("", "milk"),
        ("eggs,", "eggs, milk"),
        ("  eggs  ", "eggs, milk"),
    ],
)
def test_accept_suggestion_joins_with_commas_and_removes_it(ingredients, expected):
    client = FakeGenerationClient(suggestion_results=[Ok(value=["milk", "butter"])])
    view = make_view(client, ingredients="eggs")
    asyncio.run(view.suggest_ingredients())
    view.set_ingredients(ingredients)

    view.accept_suggestion("milk")

    assert view.ingredients == expected
    assert view.suggestions == ["butter"]


def test_append_ingredient_on_whitespace_only_text():
    assert append_ingredient("   ", "milk") == "milk"


def test_initial_state_is_idle():
    view = KitchenView(FakeGenerationClient())

    assert isinstance(view.recipe_state, Idle)
    assert isinstance(view.image_state, Idle)
    assert isinstance(view.suggestion_state, Idle)
    assert not view.busy


def test_loading_state_carries_request_id():
    seen = []
    view = make_view()

    asyncio.run(view.generate_recipe(on_update=lambda v: seen.append(v.recipe_state)))

    assert isinstance(seen[0], Loading)
    assert seen[0].request_id >= 1
    assert isinstance(seen[-1], Succeeded)


def test_blank_input_keeps_the_recipe_on_screen():
    view = make_view()
    asyncio.run(view.generate_recipe())

    view.set_ingredients("  ")
    asyncio.run(view.generate_recipe())

    assert view.recipe == make_recipe()
    assert view.image_url is not None
    assert view.error_message == EMPTY_RECIPE_INPUT

    view.set_ingredients("chicken")
    asyncio.run(view.generate_recipe())

    assert view.input_error is None
    assert view.error_message is None


def test_malformed_image_response_keeps_recipe_without_banner():
    client = GenerationClient(
        recipe_agent=RecipeAgent(fake_llm(json.dumps(RECIPE_PAYLOAD))),
        image_agent=ImageAgent(api_key="k", transport=image_transport({"candidates": [{"content": None}]})),
    )
    view = make_view(client)

    asyncio.run(view.generate_recipe())

    assert view.recipe is not None
    assert view.image_url is None
    assert view.error_message is None
    assert isinstance(view.image_state, Failed)
    assert not view.busy


def test_newer_suggestion_request_wins_over_stale_response():
    client = FakeGenerationClient(suggestion_results=[Ok(value=["stale"]), Ok(value=["fresh", "herbs"])])
    view = make_view(client)

    async def scenario():
        client.first_suggestion_started = asyncio.Event()
        client.release_first_suggestion = asyncio.Event()
        stale = asyncio.create_task(view.suggest_ingredients())
        await client.first_suggestion_started.wait()

        await view.suggest_ingredients()

        client.release_first_suggestion.set()
        await stale

    asyncio.run(scenario())

    assert len(client.suggestion_calls) == 2
    assert view.suggestions == ["fresh", "herbs"]
    assert not view.is_suggesting


def test_recipe_run_drops_in_flight_suggestions():
    client = FakeGenerationClient(suggestion_results=[Ok(value=["stale"])])
    view = make_view(client)

    async def scenario():
        client.first_suggestion_started = asyncio.Event()
        client.release_first_suggestion = asyncio.Event()
        stale = asyncio.create_task(view.suggest_ingredients())
        await client.first_suggestion_started.wait()

        await view.generate_recipe()

        client.release_first_suggestion.set()
        await stale

    asyncio.run(scenario())

    assert view.recipe == make_recipe()
    assert view.suggestions == []
    assert isinstance(view.suggestion_state, Idle)
