"""Constants for the Recipe Scanner integration."""

DOMAIN = "recipe_scanner"

# Configuration and option keys
CONF_PROXY_URL = "proxy_url"
CONF_TIMEOUT = "timeout"
CONF_EMBED_IMAGE = "embed_image"

# Default values
DEFAULT_TIMEOUT = 30
DEFAULT_MIN_TIMEOUT = 5
DEFAULT_MAX_TIMEOUT = 120
DEFAULT_MAX_RETRIES = 3
DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_EMBED_IMAGE = True
DEFAULT_FILENAME = "recipe"

# Known pass-through proxy, the target URL is appended percent-encoded
ALLORIGINS_PROXY_URL = "https://api.allorigins.win/raw?url="

# Accepted local file suffixes
HTML_FILE_SUFFIXES = (".html", ".htm")

# Export location, relative to the Home Assistant config directory
EXPORT_SUBDIR = ("www", DOMAIN)

# Extraction methods
METHOD_JSONLD = "json-ld"
METHOD_MICRODATA = "microdata"
METHOD_SITE_PATTERN = "site-pattern"

# Service names
SERVICE_EXTRACT = "extract"
SERVICE_EXTRACT_FILE = "extract_file"
SERVICE_EXPORT = "export"

# Event names
EVENT_EXTRACTION_STARTED = "recipe_scanner_extraction_started"
EVENT_EXTRACTION_METHOD_DETECTED = "recipe_scanner_extraction_method_detected"
EVENT_RECIPE_EXTRACTED = "recipe_scanner_recipe_extracted"
EVENT_EXTRACTION_FAILED = "recipe_scanner_extraction_failed"

# Service data keys
DATA_URL = "url"
DATA_PATH = "path"
DATA_SOURCE = "source"
DATA_RECIPE = "recipe"
DATA_ERROR = "error"
DATA_EMBED_IMAGE = "embed_image"
DATA_EXTRACTION_METHOD = "extraction_method"
DATA_MESSAGE = "message"
