import asyncio
from pathlib import Path

from recipe_chef.agents import GenerationClient
from recipe_chef.agents.image_agent import decode_data_uri
from recipe_chef.config import Settings, configure_logging
from recipe_chef.schema import Recipe
from recipe_chef.workflows import KitchenView


def format_recipe_for_print(recipe: Recipe):
    print(f"\n🍲 {recipe.recipeName}")
    print(f"📝 {recipe.description}")
    print(f"⏱️ Prep: {recipe.prepTime} | Cook: {recipe.cookTime}\n")
    print("🧂 Ingredients:")
    for item in recipe.ingredients:
        print(f"  - {item}")
    print("\n🧑‍🍳 Instructions:")
    for number, step in enumerate(recipe.instructions, 1):
        print(f"  {number}. {step}")
    print()


def offer_suggestions(view: KitchenView):
    asyncio.run(view.suggest_ingredients())
    if view.suggestion_error:
        print(f"⚠️ {view.suggestion_error}")
        return

    while view.suggestions:
        print("\nSuggestions:")
        for idx, suggestion in enumerate(view.suggestions, 1):
            print(f"{idx}: {suggestion}")
        choice = input("Add a suggestion (number, Enter to continue): ").strip()
        if not choice:
            break
        if not choice.isdigit() or not 1 <= int(choice) <= len(view.suggestions):
            print("Invalid choice. Try again.")
            continue
        view.accept_suggestion(view.suggestions[int(choice) - 1])
        print(f"Ingredients: {view.ingredients}")


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    view = KitchenView(GenerationClient.from_settings(settings))

    print("👩‍🍳 Welcome to the Recipe Generator CLI! 🍽️\n")
    view.set_ingredients(input("📝 Your available ingredients: ").strip())

    if input("Want ingredient suggestions first? (y/N) ").strip().lower() == "y":
        print("\n⏳ Thinking...")
        offer_suggestions(view)

    print("\n⏳ Generating your masterpiece...\n")
    asyncio.run(view.generate_recipe())

    if view.error_message:
        print(f"⚠️ {view.error_message}")
        raise SystemExit(1)

    format_recipe_for_print(view.recipe)

    if view.image_url:
        image_path = Path("recipe.png")
        image_path.write_bytes(decode_data_uri(view.image_url))
        print(f"🖼️ Saved an illustration to {image_path}")
