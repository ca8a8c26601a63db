"""
Orchestrating view for the recipe form.

``KitchenView`` owns every piece of mutable UI state: the ingredient text and
one state machine per workflow (recipe, image, suggestions). It sequences calls
to the generation client and is independent of the UI toolkit, so the
Streamlit page and the CLI drive the same object.

Overlapping requests follow a last-request-wins policy. Starting a workflow
allocates a new request id, and a completion whose id is no longer the active
one for that workflow is dropped.
"""

import itertools
import logging
from typing import Callable, List, Optional

from recipe_chef.schema import (
    ErrorInfo,
    ErrorKind,
    Failed,
    Idle,
    InputValidationError,
    Loading,
    Ok,
    Recipe,
    Succeeded,
    WorkflowState,
)
from recipe_chef.workflows.recipe_workflow import GENERATE_IMAGE, GENERATE_RECIPE, build_recipe_workflow

logger = logging.getLogger(__name__)

EMPTY_RECIPE_INPUT = "Please enter some ingredients."
EMPTY_SUGGESTION_INPUT = "Please enter at least one ingredient to get suggestions."
SUGGESTION_RETRY_MESSAGE = "Could not get suggestions. Please try again."
UNKNOWN_ERROR = "An unknown error occurred."


def append_ingredient(ingredients: str, suggestion: str) -> str:
    trimmed = ingredients.strip()
    if not trimmed:
        return suggestion
    if trimmed.endswith(","):
        return f"{trimmed} {suggestion}"
    return f"{trimmed}, {suggestion}"


class KitchenView:
    def __init__(self, client):
        self.client = client
        self.workflow = build_recipe_workflow(client)

        self.ingredients = ""
        self.recipe_state: WorkflowState = Idle()
        self.image_state: WorkflowState = Idle()
        self.suggestion_state: WorkflowState = Idle()
        # Blank-input error for the recipe form; leaves the displayed recipe alone
        self.input_error: Optional[ErrorInfo] = None

        self._request_ids = itertools.count(1)
        self._active_recipe_request: Optional[int] = None
        self._active_suggestion_request: Optional[int] = None

    # Read-only views for rendering

    @property
    def recipe(self) -> Optional[Recipe]:
        return self.recipe_state.value if isinstance(self.recipe_state, Succeeded) else None

    @property
    def image_url(self) -> Optional[str]:
        return self.image_state.value if isinstance(self.image_state, Succeeded) else None

    @property
    def error_message(self) -> Optional[str]:
        if self.input_error is not None:
            return self.input_error.message
        return self.recipe_state.error.message if isinstance(self.recipe_state, Failed) else None

    @property
    def suggestions(self) -> List[str]:
        return list(self.suggestion_state.value) if isinstance(self.suggestion_state, Succeeded) else []

    @property
    def suggestion_error(self) -> Optional[str]:
        return self.suggestion_state.error.message if isinstance(self.suggestion_state, Failed) else None

    @property
    def is_loading(self) -> bool:
        return isinstance(self.recipe_state, Loading)

    @property
    def is_image_loading(self) -> bool:
        return isinstance(self.image_state, Loading)

    @property
    def is_suggesting(self) -> bool:
        return isinstance(self.suggestion_state, Loading)

    @property
    def busy(self) -> bool:
        return self.is_loading or self.is_image_loading or self.is_suggesting

    # Actions

    def set_ingredients(self, text: str) -> None:
        self.ingredients = text

    def accept_suggestion(self, suggestion: str) -> None:
        self.ingredients = append_ingredient(self.ingredients, suggestion)
        if isinstance(self.suggestion_state, Succeeded):
            remaining = [item for item in self.suggestion_state.value if item != suggestion]
            self.suggestion_state = Succeeded(value=remaining)

    async def generate_recipe(self, on_update: Optional[Callable[["KitchenView"], None]] = None) -> None:
        if not self.ingredients.strip():
            self.input_error = InputValidationError(EMPTY_RECIPE_INPUT).to_info()
            self._notify(on_update)
            return

        self.input_error = None
        request_id = next(self._request_ids)
        self._active_recipe_request = request_id
        self.recipe_state = Loading(request_id=request_id)
        self.image_state = Idle()
        self.suggestion_state = Idle()
        self._active_suggestion_request = None
        self._notify(on_update)

        try:
            async for update in self.workflow.astream(
                {"ingredients": self.ingredients}, stream_mode="updates"
            ):
                if request_id != self._active_recipe_request:
                    logger.info("Discarding stale recipe response for request %s", request_id)
                    return
                self._apply_recipe_update(request_id, update)
                self._notify(on_update)
        finally:
            if request_id == self._active_recipe_request:
                if isinstance(self.recipe_state, Loading):
                    self.recipe_state = Failed(error=ErrorInfo(kind=ErrorKind.PROVIDER, message=UNKNOWN_ERROR))
                if isinstance(self.image_state, Loading):
                    self.image_state = Idle()

    def _apply_recipe_update(self, request_id: int, update: dict) -> None:
        if GENERATE_RECIPE in update:
            payload = update[GENERATE_RECIPE] or {}
            recipe = payload.get("recipe")
            if recipe is not None:
                self.recipe_state = Succeeded(value=recipe)
                self.image_state = Loading(request_id=request_id)
            else:
                self.recipe_state = Failed(error=payload.get("error") or ErrorInfo(kind=ErrorKind.PROVIDER, message=UNKNOWN_ERROR))

        if GENERATE_IMAGE in update:
            payload = update[GENERATE_IMAGE] or {}
            image_url = payload.get("image_url")
            if image_url:
                self.image_state = Succeeded(value=image_url)
            else:
                error = payload.get("image_error") or ErrorInfo(kind=ErrorKind.PROVIDER, message=UNKNOWN_ERROR)
                # The recipe stays on screen without an illustration
                logger.warning("Image generation failed: %s (%s)", error.message, error.detail)
                self.image_state = Failed(error=error)

    async def suggest_ingredients(self) -> None:
        if not self.ingredients.strip():
            self.suggestion_state = Failed(error=InputValidationError(EMPTY_SUGGESTION_INPUT).to_info())
            return

        request_id = next(self._request_ids)
        self._active_suggestion_request = request_id
        self.suggestion_state = Loading(request_id=request_id)

        try:
            result = await self.client.suggest_ingredients(self.ingredients)
        except Exception:
            if request_id == self._active_suggestion_request:
                self.suggestion_state = Failed(
                    error=ErrorInfo(kind=ErrorKind.PROVIDER, message=SUGGESTION_RETRY_MESSAGE)
                )
            raise

        if request_id != self._active_suggestion_request:
            logger.info("Discarding stale suggestions for request %s", request_id)
            return

        if isinstance(result, Ok):
            self.suggestion_state = Succeeded(value=list(result.value))
        else:
            self.suggestion_state = Failed(
                error=result.error.model_copy(update={"message": SUGGESTION_RETRY_MESSAGE})
            )

    def _notify(self, on_update: Optional[Callable[["KitchenView"], None]]) -> None:
        if on_update is not None:
            on_update(self)
