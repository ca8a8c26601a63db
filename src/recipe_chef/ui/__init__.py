from .components import (
    image_region,
    working_spinner,
    loading_indicator,
    error_banner,
    empty_results,
    recipe_panel,
    suggestion_chips,
    results_area,
)
__all__ = [
    "image_region", "working_spinner", "loading_indicator", "error_banner",
    "empty_results", "recipe_panel", "suggestion_chips", "results_area",
]
