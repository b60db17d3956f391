"""
Page retrieval utilities for the recipe extraction engine.

This module fetches recipe pages from URLs (optionally through a
pass-through proxy) and reads saved pages from disk, returning decoded HTML
text ready for extraction.
"""
from __future__ import annotations

import base64
import ipaddress
import logging
import time
from pathlib import Path
from urllib.parse import quote, urlparse

import cloudscraper
import requests
from bs4 import UnicodeDammit

from ..const import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    HTML_FILE_SUFFIXES,
)
from ..exceptions import FetchError

_LOGGER = logging.getLogger(__name__)

HTML_CONTENT_TYPES = ('text/html', 'application/xhtml', 'application/xml')


def validate_url(url: str) -> None:
    """Validate URL scheme and prevent requests to internal IPs.

    Raises:
        ValueError: If the URL is not http(s) or targets a private address
    """
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https'):
        raise ValueError("Only HTTP/HTTPS protocols allowed")
    if not parsed.hostname:
        raise ValueError(f"URL has no host: {url}")

    try:
        ip = ipaddress.ip_address(parsed.hostname)
    except ValueError:
        return  # Hostname is not an IP

    if ip.is_private or ip.is_loopback or ip.is_link_local:
        raise ValueError("Cannot access internal IP addresses")


def proxied_url(url: str, proxy_url: str | None) -> str:
    """Route a URL through a pass-through proxy, if one is configured.

    The proxy URL is used as a prefix and the target URL is appended
    percent-encoded, e.g. https://api.allorigins.win/raw?url=<url>.
    """
    if not proxy_url:
        return url
    return proxy_url + quote(url, safe='')


def create_session() -> requests.Session:
    """Create a cloudscraper session for better anti-bot protection."""
    session = cloudscraper.create_scraper(
        browser={
            'browser': 'chrome',
            'platform': 'windows',
            'desktop': True
        }
    )
    session.max_redirects = DEFAULT_MAX_REDIRECTS
    return session


def _download(response: requests.Response) -> bytes:
    """Download a streamed response body with size limit enforcement.

    Raises:
        ValueError: If the response is too large
    """
    content_length = response.headers.get('content-length')
    if content_length and int(content_length) > DEFAULT_MAX_RESPONSE_SIZE:
        raise ValueError(
            f"Response size ({content_length} bytes) exceeds maximum allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

    content = b''
    for chunk in response.iter_content(chunk_size=8192):
        content += chunk
        if len(content) > DEFAULT_MAX_RESPONSE_SIZE:
            raise ValueError(
                f"Response size exceeds maximum allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")
    return content


def _fetch_with_retry(
    session: requests.Session,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    content_types: tuple[str, ...] = HTML_CONTENT_TYPES,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> tuple[bytes, str]:
    """Fetch URL with exponential backoff retry logic.

    Args:
        session: Requests session to use
        url: URL to fetch
        timeout: Request timeout in seconds
        content_types: Accepted Content-Type prefixes
        max_retries: Maximum number of attempts

    Returns:
        Tuple of the response content and its Content-Type

    Raises:
        FetchError: If all attempts fail
        ValueError: If response is too large or has an invalid content type
    """
    last_error: Exception | None = None
    attempts = 0

    for attempt in range(max_retries):
        attempts += 1
        try:
            _LOGGER.debug("Fetching %s (attempt %d/%d)",
                          url, attempt + 1, max_retries)
            # Use stream=True to check headers before downloading
            response = session.get(
                url,
                timeout=timeout,
                allow_redirects=True,
                stream=True
            )
            try:
                response.raise_for_status()

                content_type = response.headers.get('content-type', '').lower()
                if not any(kind in content_type for kind in content_types):
                    _LOGGER.warning(
                        "Invalid content type for %s: %s", url, content_type)
                    raise ValueError(
                        f"Invalid content type: {content_type}. Expected one of: {', '.join(content_types)}")

                return _download(response), content_type
            finally:
                response.close()

        except requests.exceptions.HTTPError as e:
            last_error = e
            status = e.response.status_code if e.response is not None else None
            if status != 403:
                break
            if attempt < max_retries - 1:
                # Wait with exponential backoff for rate limiting
                wait_time = 2 ** attempt
                _LOGGER.warning(
                    "Got 403 for %s, retrying after %ds", url, wait_time)
                time.sleep(wait_time)
        except requests.exceptions.RequestException as e:
            last_error = e
            if attempt < max_retries - 1:
                wait_time = 2 ** attempt
                _LOGGER.warning(
                    "Error fetching %s: %s, retrying after %ds", url, e, wait_time)
                time.sleep(wait_time)

    raise FetchError(
        f"Failed to fetch {url} after {attempts} attempt(s): {last_error}") from last_error


def decode_html(content: bytes) -> str:
    """Decode raw page bytes, detecting the declared or sniffed encoding."""
    dammit = UnicodeDammit(content, is_html=True)
    if dammit.unicode_markup is None:
        return content.decode('utf-8', errors='replace')
    return dammit.unicode_markup


def fetch_recipe_html(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    proxy_url: str | None = None,
) -> str:
    """Fetch the HTML of a recipe page.

    Args:
        url: The URL of the recipe website
        timeout: Request timeout in seconds
        proxy_url: Optional pass-through proxy prefix

    Returns:
        The decoded HTML text

    Raises:
        FetchError: If fetching fails
        ValueError: If URL is invalid or the response is not HTML
    """
    if not url or not url.strip():
        raise ValueError("URL cannot be empty")
    url = url.strip()
    validate_url(url)

    target = proxied_url(url, proxy_url)
    _LOGGER.info("Fetching recipe from %s", url)
    if target != url:
        _LOGGER.debug("Using proxy %s", proxy_url)

    session = create_session()
    try:
        content, _ = _fetch_with_retry(session, target, timeout=timeout)
    except FetchError as e:
        _LOGGER.error("Failed to fetch %s: %s", url, str(e))
        raise
    finally:
        session.close()

    _LOGGER.debug("Successfully fetched %d bytes from %s", len(content), url)
    return decode_html(content)


def fetch_image_data_url(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    proxy_url: str | None = None,
) -> str:
    """Fetch an image and return it as a base64 data: URL.

    Raises:
        FetchError: If fetching fails
        ValueError: If URL is invalid or the response is not an image
    """
    if url.startswith('data:'):
        return url
    validate_url(url)

    session = create_session()
    try:
        content, content_type = _fetch_with_retry(
            session, proxied_url(url, proxy_url), timeout=timeout,
            content_types=('image/',))
    finally:
        session.close()

    mime_type = content_type.split(';')[0].strip()
    encoded = base64.b64encode(content).decode('ascii')
    _LOGGER.debug("Embedded %d bytes of %s from %s",
                  len(content), mime_type, url)
    return f"data:{mime_type};base64,{encoded}"


def read_recipe_file(path: str | Path) -> str:
    """Read a saved recipe page from disk.

    Args:
        path: Path to an .html or .htm file

    Returns:
        The decoded HTML text

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not HTML or is too large
    """
    path = Path(path)
    if path.suffix.lower() not in HTML_FILE_SUFFIXES:
        raise ValueError(
            f"Unsupported file type: {path.name}. Expected one of: {', '.join(HTML_FILE_SUFFIXES)}")
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    size = path.stat().st_size
    if size > DEFAULT_MAX_RESPONSE_SIZE:
        raise ValueError(
            f"File size ({size} bytes) exceeds maximum allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

    _LOGGER.info("Reading recipe from %s", path)
    return decode_html(path.read_bytes())
