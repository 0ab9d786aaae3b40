"""Unit tests for font_bounds.fonts.registry module."""

import re
import threading

import pytest

from font_bounds.exceptions import FontRegistrationError
from font_bounds.fonts import FontRegistry, RegisteredFont


@pytest.fixture
def registry(tmp_path):
    return FontRegistry(storage_dir=tmp_path / "registered")


class TestRegister:
    """Tests for FontRegistry.register()."""

    def test_returns_naming_information(self, registry, test_font_bytes):
        entry = registry.register(test_font_bytes)

        assert isinstance(entry, RegisteredFont)
        assert entry.family == "Bounds Test"
        assert entry.style == "Regular"
        assert entry.postscript_name == "BoundsTest-Regular"
        assert entry.full_name == "Bounds Test Regular"
        assert entry.face_index == 0

    def test_stores_bytes_on_disk(self, registry, test_font_bytes):
        entry = registry.register(test_font_bytes)

        assert entry.path.parent == registry.storage_dir
        assert entry.path.name.startswith("BoundsTest-Regular-")
        assert entry.path.suffix == ".ttf"
        assert entry.path.read_bytes() == test_font_bytes

    def test_keeps_given_filename_stem(self, registry, test_font_bytes):
        entry = registry.register(test_font_bytes, filename="../evil/Downloaded.otf")

        assert entry.path.parent == registry.storage_dir
        assert re.fullmatch(r"Downloaded-[0-9a-f]{12}\.otf", entry.path.name)

    def test_same_filename_different_fonts(self, registry, test_font_bytes, other_font_path):
        """Two fonts registered under one filename both stay resolvable."""
        first = registry.register(test_font_bytes, filename="font.ttf")
        second = registry.register(other_font_path.read_bytes(), filename="font.ttf")

        assert first.path != second.path
        assert len(registry) == 2
        assert registry.lookup("Bounds Test").path.read_bytes() == test_font_bytes
        assert registry.lookup("Other Face").path.read_bytes() == other_font_path.read_bytes()

    def test_register_twice_is_harmless(self, registry, test_font_bytes):
        first = registry.register(test_font_bytes)
        second = registry.register(test_font_bytes)

        assert first == second
        assert len(registry) == 1

    def test_register_file(self, registry, test_font_path):
        entry = registry.register_file(test_font_path)

        assert entry.path.name.startswith(f"{test_font_path.stem}-")
        assert entry.path.suffix == test_font_path.suffix

    def test_register_missing_file(self, registry, tmp_path):
        with pytest.raises(FontRegistrationError, match="Cannot read"):
            registry.register_file(tmp_path / "missing.ttf")

    @pytest.mark.parametrize("data", [b"", b"not a font at all, just bytes"])
    def test_rejects_invalid_data(self, registry, data):
        with pytest.raises(FontRegistrationError, match="Not a usable font file"):
            registry.register(data)
        assert len(registry) == 0


class TestLookup:
    """Tests for FontRegistry.lookup()."""

    @pytest.fixture(autouse=True)
    def registered(self, registry, test_font_bytes):
        return registry.register(test_font_bytes)

    @pytest.mark.parametrize(
        "name",
        ["Bounds Test", "bounds test", "Bounds Test Regular", "BoundsTest-Regular", "Bounds Test-Regular"],
    )
    def test_resolves_names(self, registry, registered, name):
        assert registry.lookup(name) == registered

    def test_unknown_name(self, registry):
        assert registry.lookup("Other Family") is None

    def test_families(self, registry):
        assert registry.families() == ["Bounds Test"]

    def test_concurrent_lookups(self, registry, registered):
        """Lookups from several threads see the same entry."""
        results = []

        def worker():
            for _ in range(50):
                results.append(registry.lookup("Bounds Test"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 200
        assert all(r == registered for r in results)
