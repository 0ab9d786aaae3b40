"""Unit tests for font_bounds.fonts.downloader module.

Network access is mocked; no test performs a real download.
"""

import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from font_bounds.exceptions import FontDownloadError
from font_bounds.fonts.downloader import (
    download_font,
    fetch_font,
    font_filename,
    is_font_url,
)

URL = "https://example.com/fonts/My%20Font-Regular.ttf"


def mock_response(data: bytes, length: str | None = None) -> MagicMock:
    response = MagicMock()
    response.headers = {"Content-Length": length} if length is not None else {}
    response.read.return_value = data
    opened = MagicMock()
    opened.__enter__.return_value = response
    return opened


class TestUrlHelpers:
    @pytest.mark.parametrize(
        "source, expected",
        [
            ("https://example.com/a.ttf", True),
            ("http://example.com/a.otf", True),
            ("  https://example.com/a.ttf", True),
            ("ftp://example.com/a.ttf", False),
            ("/usr/share/fonts/a.ttf", False),
            ("Helvetica", False),
        ],
    )
    def test_is_font_url(self, source, expected):
        assert is_font_url(source) is expected

    def test_font_filename_unquotes(self):
        assert font_filename(URL) == "My Font-Regular.ttf"

    def test_font_filename_without_path(self):
        assert font_filename("https://example.com/") == "downloaded-font.ttf"


class TestFetchFont:
    """Tests for fetch_font()."""

    def test_returns_bytes(self):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            return_value=mock_response(b"font-data", "9"),
        ) as urlopen:
            assert fetch_font(URL, timeout=5) == b"font-data"

        request = urlopen.call_args.args[0]
        assert request.full_url == URL
        assert request.get_header("User-agent").startswith("font-bounds/")
        assert urlopen.call_args.kwargs["timeout"] == 5

    def test_rejects_non_http_url(self):
        with pytest.raises(FontDownloadError, match="Unsupported URL scheme"):
            fetch_font("file:///etc/passwd")

    def test_network_error(self):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            side_effect=urllib.error.URLError("no route"),
        ):
            with pytest.raises(FontDownloadError, match="Failed to download"):
                fetch_font(URL)

    def test_timeout(self):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            side_effect=TimeoutError(),
        ):
            with pytest.raises(FontDownloadError, match="Timed out"):
                fetch_font(URL)

    def test_declared_size_too_large(self):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            return_value=mock_response(b"", "2048"),
        ):
            with pytest.raises(FontDownloadError, match="too large"):
                fetch_font(URL, max_size=1024)

    def test_body_larger_than_limit(self):
        """A server that lies about (or omits) the length is still capped."""
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            return_value=mock_response(b"x" * 11),
        ):
            with pytest.raises(FontDownloadError, match="too large"):
                fetch_font(URL, max_size=10)


class TestDownloadFont:
    """Tests for download_font()."""

    def test_saves_to_destination(self, tmp_path):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            return_value=mock_response(b"font-data"),
        ):
            path = download_font(URL, dest_dir=tmp_path / "downloads")

        assert path == tmp_path / "downloads" / "My Font-Regular.ttf"
        assert path.read_bytes() == b"font-data"

    def test_download_error_leaves_no_file(self, tmp_path):
        with patch(
            "font_bounds.fonts.downloader.urllib.request.urlopen",
            side_effect=urllib.error.URLError("refused"),
        ):
            with pytest.raises(FontDownloadError):
                download_font(URL, dest_dir=tmp_path)

        assert list(tmp_path.iterdir()) == []
