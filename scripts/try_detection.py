import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.app.config import settings
from src.app.services.recipe_engine import execute_recipe
from src.app.services.recipe_model import RecipeModel
from src.services.detection import analyze_input


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask Gemini what the input looks like and bake its suggestion.")
    parser.add_argument("text", help="Raw input text to analyze")
    args = parser.parse_args()

    if not settings.GEMINI_API_KEY:
        raise SystemExit("GEMINI_API_KEY is not set. Add it to .env or the environment.")

    print("Sending input to the model...")
    result = asyncio.run(analyze_input(args.text))
    if result is None:
        print("No suggestion (see logs for details).")
        return

    print("\n--- Detection ---")
    print(json.dumps(result.__dict__, indent=2, ensure_ascii=False))

    recipe = RecipeModel()
    recipe.append_batch(result.suggested_operations)
    report = execute_recipe(args.text, recipe.snapshot())
    print("\n--- Output after applying suggestion ---")
    print(report.output)


if __name__ == "__main__":
    main()
