"""Parsers package."""
from .base_parser import BaseRecipeParser
from .document import ParsedDocument, HtmlParser, parse_html
from .image_resolver import resolve_image
from .jsonld_parser import JSONLDRecipeParser
from .microdata_parser import MicrodataRecipeParser
from .site_pattern_parser import SitePatternRecipeParser
from .text_utils import normalize_text

__all__ = [
    "BaseRecipeParser",
    "HtmlParser",
    "JSONLDRecipeParser",
    "MicrodataRecipeParser",
    "ParsedDocument",
    "SitePatternRecipeParser",
    "normalize_text",
    "parse_html",
    "resolve_image",
]
