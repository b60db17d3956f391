#!/usr/bin/env python3
"""
Recipe Scanner - Extract recipes from web pages and saved HTML files

Fetches a recipe page (or reads a saved one), extracts the title,
ingredients, directions and cover image, and writes them as structured JSON
plus a printable HTML page.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from custom_components.recipe_scanner.const import ALLORIGINS_PROXY_URL
from custom_components.recipe_scanner.exceptions import RecipeScannerError
from custom_components.recipe_scanner.models.recipe import Recipe
from custom_components.recipe_scanner.services.recipe_renderer import export_filename
from custom_components.recipe_scanner.services.recipe_service import (
    export_recipe,
    extract_recipe_from_file,
    extract_recipe_from_url,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def scan_recipe(
    source: str,
    output_dir: Path,
    is_file: bool = False,
    proxy_url: str | None = None,
    embed_image: bool = True,
) -> bool:
    """Extract a recipe and save the results.

    Args:
        source: URL of the recipe page, or path of a saved page
        output_dir: Directory to save the output files
        is_file: Whether source is a local file
        proxy_url: Optional pass-through proxy prefix
        embed_image: Whether to inline the cover image in the HTML page

    Returns:
        True if successful, False otherwise
    """
    try:
        if is_file:
            recipe_data = extract_recipe_from_file(source)
        else:
            recipe_data = extract_recipe_from_url(source, proxy_url=proxy_url)
    except (RecipeScannerError, ValueError, OSError) as e:
        logger.error(f"Error scanning recipe: {str(e)}")
        return False

    if not recipe_data:
        logger.error("No recipe found in %s", source)
        return False

    try:
        exported = export_recipe(
            recipe_data, output_dir, embed_image=embed_image, proxy_url=proxy_url)
    except OSError as e:
        logger.error(f"Error writing recipe: {str(e)}")
        return False

    json_file = output_dir / Path(exported["filename"]).with_suffix(".json").name
    logger.info(f"Saving structured recipe to: {json_file}")
    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(recipe_data, f, indent=2, ensure_ascii=False)

    # Print summary
    print(f"\n✅ Recipe successfully scanned ({recipe_data['extraction_method']})")
    print(f"📝 Title: {recipe_data['title'] or '(untitled)'}")
    print(f"🥘 Ingredients: {len(recipe_data['ingredients'])}")
    print(f"📋 Directions: {len(recipe_data['directions'])}")
    if recipe_data['image']:
        print(f"🖼️  Image: {recipe_data['image']}")
    print(f"\n📄 Output files:")
    print(f"   - JSON: {json_file}")
    print(f"   - HTML: {exported['path']}")
    print(f"   Print the HTML page to PDF as {export_filename(Recipe.model_validate(recipe_data))}")

    return True


def main():
    """Main entry point for the recipe scanner."""
    parser = argparse.ArgumentParser(
        description="Extract recipes from web pages into structured JSON and printable HTML"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "url",
        type=str,
        nargs="?",
        help="URL of the recipe page"
    )
    source.add_argument(
        "--file",
        type=Path,
        help="Saved .html/.htm page to read instead of fetching a URL"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory to save output files (default: ./output)"
    )
    parser.add_argument(
        "--proxy-url",
        default=os.getenv("RECIPE_SCANNER_PROXY_URL"),
        help=f"Pass-through proxy prefix, e.g. {ALLORIGINS_PROXY_URL} "
             "(can also be set via RECIPE_SCANNER_PROXY_URL env var)"
    )
    parser.add_argument(
        "--no-embed-image",
        dest="embed_image",
        action="store_false",
        help="Link the cover image instead of embedding it in the HTML page"
    )

    args = parser.parse_args()

    success = scan_recipe(
        source=str(args.file) if args.file else args.url,
        output_dir=args.output_dir,
        is_file=args.file is not None,
        proxy_url=args.proxy_url or None,
        embed_image=args.embed_image,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
