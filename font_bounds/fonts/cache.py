"""System font index.

Maps font family / PostScript names to font files. The system index is
built from ``fc-list`` when fontconfig is available, otherwise by reading
the name tables of the files in the platform font directories, and is
persisted as JSON so later runs skip the scan.

Extra font directories given to a :class:`FontCache` are scanned per
instance and merged over the system index; they never enter the shared
or persisted index.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont, TTLibError

from font_bounds.exceptions import FontNotFoundError

logger = logging.getLogger(__name__)

FONT_SUFFIXES = (".ttf", ".otf", ".ttc", ".otc")

# (path, face index, families, styles, postscript name)
FontEntry = tuple[Path, int, list[str], list[str], str]


class FontCache:
    """Resolve font names to ``(path, face_index)`` pairs."""

    _fc_cache: list[FontEntry] | None = None
    _cache_version = 1

    def __init__(self, font_dirs: list[str] | None = None) -> None:
        self._extra_dirs = [Path(d) for d in font_dirs or []]
        self._extra_entries: list[FontEntry] | None = None
        self._cache_file: Path | None = None

    def _cache_path(self) -> Path:
        if self._cache_file is not None:
            return self._cache_file
        env_path = os.environ.get("FONT_BOUNDS_FONT_CACHE")
        if env_path:
            return Path(env_path)
        return Path.home() / ".cache" / "font-bounds" / "font_cache.json"

    def _font_dirs(self) -> list[Path]:
        home = Path.home()
        if sys.platform == "darwin":
            dirs = [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                home / "Library" / "Fonts",
            ]
        elif sys.platform.startswith("win"):
            windir = Path(os.environ.get("WINDIR", "C:/Windows"))
            dirs = [
                windir / "Fonts",
                home / "AppData" / "Local" / "Microsoft" / "Windows" / "Fonts",
            ]
        else:
            dirs = [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                home / ".fonts",
                home / ".local" / "share" / "fonts",
            ]
        return [d for d in dirs if d.exists()]

    def _load_persistent(self) -> list[FontEntry] | None:
        path = self._cache_path()
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable font cache %s: %s", path, e)
            return None
        entries: list[FontEntry] = []
        try:
            if payload.get("version") != self._cache_version:
                return None
            for item in payload.get("fonts", []):
                font_path = Path(item["path"])
                if not font_path.exists():
                    continue
                entries.append(
                    (font_path, item["font_index"], item["families"], item["styles"], item["ps"])
                )
        except (AttributeError, KeyError, TypeError) as e:
            logger.debug("Ignoring malformed font cache %s: %s", path, e)
            return None
        return entries

    def _save_persistent(self, entries: list[FontEntry]) -> None:
        path = self._cache_path()
        payload = {
            "version": self._cache_version,
            "fonts": [
                {
                    "path": str(p),
                    "font_index": idx,
                    "families": fams,
                    "styles": styles,
                    "ps": ps,
                }
                for p, idx, fams, styles, ps in entries
            ],
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write font cache %s: %s", path, e)

    def _query_fontconfig(self) -> list[FontEntry] | None:
        try:
            result = subprocess.run(
                ["fc-list", "--format=%{file}|%{index}|%{family}|%{style}|%{postscriptname}\\n"],
                capture_output=True,
                text=True,
                timeout=8,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return None
        if result.returncode != 0:
            return None

        entries: list[FontEntry] = []
        for line in result.stdout.splitlines():
            parts = line.split("|")
            if len(parts) < 4:
                continue
            path_str, idx_str, fam_str, style_str = parts[:4]
            ps_name = parts[4] if len(parts) > 4 else ""
            p = Path(path_str.strip())
            if p.suffix.lower() not in FONT_SUFFIXES or not p.exists():
                continue
            try:
                idx = int(idx_str)
            except ValueError:
                idx = 0
            fams = [f.strip() for f in fam_str.split(",") if f.strip()]
            styles = [s.strip() for s in style_str.split(",") if s.strip()]
            entries.append((p, idx, fams, styles, ps_name.strip()))
        return entries

    def _scan_directories(self, dirs: list[Path] | None = None) -> list[FontEntry]:
        entries: list[FontEntry] = []
        for font_dir in self._font_dirs() if dirs is None else dirs:
            for path in sorted(font_dir.rglob("*")):
                if path.suffix.lower() not in FONT_SUFFIXES:
                    continue
                entries.extend(read_font_entries(path))
        return entries

    def _load_fc_cache(self) -> None:
        """Populate the class-level system index once per process."""
        if FontCache._fc_cache is not None:
            return
        entries = self._load_persistent()
        if entries is None:
            entries = self._query_fontconfig()
            if entries is None:
                logger.debug("fc-list unavailable, scanning font directories")
                entries = self._scan_directories()
            self._save_persistent(entries)
        FontCache._fc_cache = entries

    def _load_extra(self) -> list[FontEntry]:
        if self._extra_entries is None:
            dirs = [d for d in self._extra_dirs if d.is_dir()]
            self._extra_entries = self._scan_directories(dirs)
            if dirs:
                logger.debug("Indexed %d faces from %s", len(self._extra_entries), dirs)
        return self._extra_entries

    def prewarm(self) -> int:
        """Build (or load) the index and return the number of faces."""
        return len(self.entries())

    def clear(self) -> None:
        """Forget the in-memory index and delete the persistent cache."""
        FontCache._fc_cache = None
        self._extra_entries = None
        path = self._cache_path()
        if path.exists():
            path.unlink()

    def entries(self) -> list[FontEntry]:
        """Faces from the extra directories first, then the system index."""
        self._load_fc_cache()
        merged: list[FontEntry] = []
        seen: set[tuple[Path, int]] = set()
        for entry in self._load_extra() + (FontCache._fc_cache or []):
            key = (entry[0], entry[1])
            if key in seen:
                continue
            seen.add(key)
            merged.append(entry)
        return merged

    def families(self) -> list[str]:
        names = {fams[0] for _p, _i, fams, _s, _ps in self.entries() if fams}
        return sorted(names)

    def get_font(self, name: str) -> tuple[Path, int]:
        """Find the face for a family, PostScript or full name.

        Among faces of a matching family the regular style wins.

        Raises:
            FontNotFoundError: If no face matches.
        """
        wanted = name.strip().lower()
        family_hits: list[tuple[Path, int, list[str]]] = []
        for path, idx, fams, styles, ps in self.entries():
            if ps and ps.lower() == wanted:
                return path, idx
            lowered = [f.lower() for f in fams]
            full_names = {f"{f} {s}".lower() for f in fams for s in styles}
            if wanted in full_names:
                return path, idx
            if wanted in lowered:
                family_hits.append((path, idx, styles))

        if not family_hits:
            raise FontNotFoundError(name)

        for path, idx, styles in family_hits:
            if any(s.lower() in ("regular", "normal", "roman", "book") for s in styles):
                return path, idx
        path, idx, _styles = family_hits[0]
        return path, idx


def read_font_entries(path: Path) -> list[FontEntry]:
    """Read the naming records of every face in a font file."""
    fonts: list[TTFont]
    try:
        if path.suffix.lower() in (".ttc", ".otc"):
            fonts = list(TTCollection(str(path), lazy=True).fonts)
        else:
            fonts = [TTFont(str(path), lazy=True)]
    except (TTLibError, OSError) as e:
        logger.debug("Skipping unreadable font %s: %s", path, e)
        return []

    entries: list[FontEntry] = []
    for idx, font in enumerate(fonts):
        if "name" not in font:
            continue
        name_table = font["name"]
        family = name_table.getBestFamilyName()
        style = name_table.getBestSubFamilyName()
        ps = name_table.getDebugName(6) or ""
        if not family:
            continue
        entries.append((path, idx, [family], [style] if style else [], ps))
    return entries
