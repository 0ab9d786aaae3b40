"""Registration of font files that are not installed on the system.

Registered fonts are stored on disk (renderers such as Pillow need a file
path) and become resolvable by family, full or PostScript name. Register
every font before starting concurrent measurements: lookups take the same
lock, but a name registered mid-run changes what later lookups resolve to.
"""

from __future__ import annotations

import hashlib
import logging
import tempfile
import threading
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from font_bounds.exceptions import FontRegistrationError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_DIR = Path(tempfile.gettempdir()) / "font-bounds" / "fonts"


@dataclass(frozen=True)
class RegisteredFont:
    family: str
    style: str
    postscript_name: str
    path: Path
    face_index: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.family} {self.style}".strip()


class FontRegistry:
    """Process-local table of registered font files."""

    def __init__(self, storage_dir: Path | None = None) -> None:
        self.storage_dir = storage_dir or DEFAULT_REGISTRY_DIR
        self._fonts: dict[str, RegisteredFont] = {}
        self._lock = threading.Lock()

    def register(self, data: bytes, filename: str | None = None) -> RegisteredFont:
        """Store ``data`` and make its font resolvable by name.

        Raises:
            FontRegistrationError: If ``data`` is not a readable font.
        """
        try:
            font = TTFont(BytesIO(data), lazy=True)
            name_table = font["name"]
        except (TTLibError, KeyError, OSError, AssertionError) as e:
            raise FontRegistrationError(f"Not a usable font file: {e}") from e

        family = name_table.getBestFamilyName()
        if not family:
            raise FontRegistrationError("Font has no family name")
        style = name_table.getBestSubFamilyName() or "Regular"
        ps_name = name_table.getDebugName(6) or family.replace(" ", "")

        # Same filename, different bytes: the digest keeps both files
        digest = hashlib.sha1(data).hexdigest()[:12]
        given = Path(filename).name if filename else ""
        stem = Path(given).stem or ps_name
        suffix = Path(given).suffix or (".otf" if font.sfntVersion == "OTTO" else ".ttf")
        path = self.storage_dir / f"{stem}-{digest}{suffix}"

        with self._lock:
            try:
                self.storage_dir.mkdir(parents=True, exist_ok=True)
                if not path.exists() or path.read_bytes() != data:
                    path.write_bytes(data)
            except OSError as e:
                raise FontRegistrationError(f"Cannot store font at {path}: {e}") from e

            entry = RegisteredFont(family, style, ps_name, path)
            for key in (family, entry.full_name, ps_name):
                self._fonts[key.lower()] = entry

        logger.info("Registered font %r (%s) from %s", family, ps_name, path)
        return entry

    def register_file(self, path: Path) -> RegisteredFont:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FontRegistrationError(f"Cannot read {path}: {e}") from e
        return self.register(data, filename=path.name)

    def lookup(self, name: str) -> RegisteredFont | None:
        """Find a registered font; a ``-Regular`` suffix is optional."""
        key = name.strip().lower()
        with self._lock:
            entry = self._fonts.get(key)
            if entry is None and key.endswith("-regular"):
                entry = self._fonts.get(key[: -len("-regular")])
            return entry

    def families(self) -> list[str]:
        with self._lock:
            return sorted({entry.family for entry in self._fonts.values()})

    def __len__(self) -> int:
        with self._lock:
            return len({entry.path for entry in self._fonts.values()})
