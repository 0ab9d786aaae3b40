"""Download remote font files."""

from __future__ import annotations

import logging
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import unquote, urlparse

from font_bounds.exceptions import FontDownloadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# Maximum font size to download (20MB)
MAX_SIZE = 20 * 1024 * 1024

DEFAULT_DOWNLOAD_DIR = Path(tempfile.gettempdir()) / "font-bounds" / "downloads"


def is_font_url(source: str) -> bool:
    return source.strip().startswith(("http://", "https://"))


def font_filename(url: str) -> str:
    """Last path component of ``url``, or a generic name."""
    name = Path(unquote(urlparse(url).path)).name
    return name or "downloaded-font.ttf"


def fetch_font(url: str, timeout: int = DEFAULT_TIMEOUT, max_size: int = MAX_SIZE) -> bytes:
    """Fetch font bytes from an HTTP(S) URL.

    Raises:
        FontDownloadError: On network errors, non-HTTP URLs or oversize files.
    """
    if not is_font_url(url):
        raise FontDownloadError(f"Unsupported URL scheme: {url}")

    request = urllib.request.Request(url, headers={"User-Agent": "font-bounds/0.1"})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            length = response.headers.get("Content-Length")
            if length and int(length) > max_size:
                raise FontDownloadError(f"Font too large: {length} bytes (max {max_size})")
            data = response.read(max_size + 1)
    except urllib.error.URLError as e:
        raise FontDownloadError(f"Failed to download {url}: {e}") from e
    except TimeoutError as e:
        raise FontDownloadError(f"Timed out downloading {url}") from e

    if len(data) > max_size:
        raise FontDownloadError(f"Font too large: more than {max_size} bytes")
    logger.info("Downloaded %d bytes from %s", len(data), url)
    return data


def download_font(
    url: str,
    dest_dir: Path | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    max_size: int = MAX_SIZE,
) -> Path:
    """Download a font to ``dest_dir`` and return the local path."""
    data = fetch_font(url, timeout=timeout, max_size=max_size)
    target_dir = dest_dir or DEFAULT_DOWNLOAD_DIR
    target = target_dir / font_filename(url)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as e:
        raise FontDownloadError(f"Cannot save font to {target}: {e}") from e
    return target
