"""Exception hierarchy for font-bounds."""

from __future__ import annotations


class FontBoundsError(Exception):
    """Base class for all font-bounds errors."""


class FontNotFoundError(FontBoundsError):
    """A font name could not be resolved to a font file.

    Raised even after any registration step; callers must not substitute
    a fallback font.
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Font not found: {name!r}")


class OracleQueryError(FontBoundsError):
    """The shaping oracle could not measure a piece of text."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot measure {text!r}: {reason}")


class FontRegistrationError(FontBoundsError):
    """Font bytes could not be registered with the process font table."""


class FontDownloadError(FontBoundsError):
    """A remote font could not be downloaded."""


class ConfigError(FontBoundsError):
    """The configuration file is invalid."""
