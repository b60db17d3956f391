"""
Printable recipe layout.

Renders an extracted recipe as a self-contained, print-ready HTML page
(A4, portrait) and derives the file name used when the recipe is exported.
"""
from __future__ import annotations

import re
from html import escape

from ..const import DEFAULT_FILENAME
from ..models.recipe import Recipe

# Characters not allowed in file names on common filesystems
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')


def export_filename(recipe: Recipe, extension: str = ".pdf") -> str:
    """Derive a file name from the recipe title.

    Whitespace runs become underscores, e.g. "Apple Pie" -> "Apple_Pie.pdf".
    A blank title gives "recipe".
    """
    title = _UNSAFE_FILENAME_CHARS.sub("", recipe.title).strip()
    stem = re.sub(r"\s+", "_", title) if title else DEFAULT_FILENAME
    return stem + extension


def render_printable_html(recipe: Recipe, image_src: str | None = None) -> str:
    """Render a recipe as a printable HTML document.

    Args:
        recipe: The recipe to render
        image_src: Image source to use instead of recipe.image, e.g. an
            embedded data: URL

    Returns:
        HTML content as a string
    """
    title = escape(recipe.title)
    image_src = image_src or recipe.image
    alt = f"{recipe.title} image" if recipe.title else "recipe image"

    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title or DEFAULT_FILENAME}</title>
    <style>
        @page {{
            size: A4 portrait;
            margin: 10mm;
        }}
        body {{
            font-family: Georgia, 'Times New Roman', serif;
            line-height: 1.5;
            max-width: 190mm;
            margin: 0 auto;
            color: #222;
        }}
        .cover-image {{
            display: block;
            max-width: 100%;
            max-height: 110mm;
            margin: 0 auto 16px;
            object-fit: cover;
        }}
        .recipe-title {{
            margin-bottom: 10px;
        }}
        h3 {{
            border-bottom: 1px solid #ccc;
            padding-bottom: 4px;
        }}
        li, p {{
            page-break-inside: avoid;
            break-inside: avoid;
        }}
    </style>
</head>
<body>
    <div class="result pdf-layout">
"""
    if image_src:
        html += f"""        <img class="cover-image" src="{escape(image_src)}" alt="{escape(alt)}">
"""

    html += f"""        <h2 class="recipe-title">{title}</h2>
"""

    if recipe.ingredients:
        html += """        <div class="ingredients">
            <h3>Ingredients:</h3>
            <ul>
"""
        for ingredient in recipe.ingredients:
            html += f"""                <li>{escape(ingredient)}</li>
"""
        html += """            </ul>
        </div>
"""

    if recipe.directions:
        html += """        <div class="directions">
            <h3>Directions:</h3>
"""
        for direction in recipe.directions:
            html += f"""            <p>{escape(direction)}</p>
"""
        html += """        </div>
"""

    html += """    </div>
</body>
</html>
"""
    return html
