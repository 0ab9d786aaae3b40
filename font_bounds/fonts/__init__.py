"""Font resolution for font-bounds.

This subpackage provides:
- System font index with a persistent JSON cache
- Process-local registration of extra font files
- Remote font downloading
"""

from font_bounds.fonts.cache import FontCache
from font_bounds.fonts.downloader import download_font, fetch_font, font_filename, is_font_url
from font_bounds.fonts.registry import FontRegistry, RegisteredFont

__all__ = [
    "FontCache",
    "FontRegistry",
    "RegisteredFont",
    "download_font",
    "fetch_font",
    "font_filename",
    "is_font_url",
]
