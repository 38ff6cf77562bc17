"""Tests for the catalog."""

import logging
from pathlib import Path

import pytest
from copilot_registry.config import RegistryConfig
from copilot_registry.core.catalog import CatalogLoader, build_catalog, create_entry
from copilot_registry.core.collections import CollectionKey
from copilot_registry.core.identity import InvalidItemError
from copilot_registry.core.language import Language
from copilot_registry.core.types import Item


class TestCreateEntry:
    """Tests for create_entry()."""

    def test__loader_item__derives_fields(self) -> None:
        """Derive slug, file name, display path and language."""
        item = Item(
            id="python/style.instructions.md",
            file_path="registry/copilot-instructions/python/style.instructions.md",
            collection="copilot-instructions",
            data={"applyTo": "**"},
            body="Use black.",
        )

        entry = create_entry(item)

        assert entry.slug == "python-style"
        assert entry.file_name == "python/style.instructions.md"
        assert entry.display_path == "python/style.instructions.md"
        assert entry.extension == ".md"
        assert entry.language == Language.MARKDOWN
        assert entry.path == "/copilot-instructions/python-style"

    def test__title__from_metadata(self) -> None:
        """Use metadata title when present."""
        item = Item(id="a.json", collection="settings", data={"title": "Alpha"})

        assert create_entry(item).title == "Alpha"

    def test__title__falls_back_to_file_name(self) -> None:
        """Use the extension-stripped file name without a title."""
        item = Item(id="review/code-review.prompt.md", collection="copilot-prompts")

        assert create_entry(item).title == "code-review"

    def test__unknown_extension__sniffs_content(self) -> None:
        """Language falls back to content sniffing."""
        item = Item(id="mcp.jsonc", collection="settings-mcp", body='{"servers": {}}')

        entry = create_entry(item)

        assert entry.extension == ".jsonc"
        assert entry.language == Language.JSON

    def test__id_with_root_marker__stripped_from_slug(self) -> None:
        """Slug ignores a root marker carried by the id."""
        item = Item(id="registry/node/devcontainer.json", collection="devcontainers")

        assert create_entry(item).slug == "node-devcontainer"

    def test__custom_root_marker__used(self) -> None:
        """Pass the configured root marker to every derivation."""
        item = Item(
            id="content/base.json",
            file_path="content/settings/base.json",
            collection="settings",
        )

        entry = create_entry(item, root_marker="content/")

        assert entry.slug == "base"
        assert entry.display_path == "base.json"
        assert entry.file_name == "base.json"

    def test__to_dict__includes_content(self) -> None:
        """Full dictionary includes language, data and content."""
        item = Item(
            id="github.json",
            collection="settings-mcp",
            data={"name": "GitHub", "description": "GitHub MCP"},
            body="{}",
        )

        data = create_entry(item).to_dict()

        assert data == {
            "slug": "github",
            "title": "github",
            "description": "GitHub MCP",
            "path": "/settings-mcp/github",
            "fileName": "github.json",
            "displayPath": "github.json",
            "collection": "settings-mcp",
            "language": "json",
            "data": {"name": "GitHub", "description": "GitHub MCP"},
            "content": "{}",
        }

    def test__invalid_item__raises_error(self) -> None:
        """Propagate InvalidItemError for items without paths."""
        with pytest.raises(InvalidItemError):
            create_entry(Item(id="", collection="settings"))


class TestBuildCatalog:
    """Tests for build_catalog()."""

    def test__entries__indexed_by_collection_and_slug(self) -> None:
        """Look up entries by collection and slug."""
        catalog = build_catalog(
            [
                Item(id="python/settings.json", collection="settings"),
                Item(id="node/settings.json", collection="settings"),
                Item(id="settings.json", collection="extensions"),
            ]
        )

        assert catalog.get_entry("settings", "python-settings") is not None
        assert catalog.get_entry("settings", "node-settings") is not None
        assert catalog.get_entry("extensions", "settings") is not None
        assert catalog.get_entry("settings", "settings") is None
        assert catalog.count("settings") == 2

    def test__same_slug_in_different_collections__allowed(self) -> None:
        """Slugs only need to be unique within a collection."""
        catalog = build_catalog(
            [
                Item(id="readme.md", collection="settings"),
                Item(id="readme.md", collection="extensions"),
            ]
        )

        assert catalog.collisions == []
        assert catalog.get_entry("settings", "readme") is not None
        assert catalog.get_entry("extensions", "readme") is not None

    def test__collision__keeps_first_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        """Keep the first item, record and log the collision."""
        first = Item(id="a-b.json", collection="settings")
        second = Item(id="a/b.json", collection="settings")

        with caplog.at_level(logging.WARNING, logger="copilot_registry.core.catalog"):
            catalog = build_catalog([first, second])

        entry = catalog.get_entry("settings", "a-b")
        assert entry is not None
        assert entry.item is first
        assert len(catalog.collisions) == 1
        collision = catalog.collisions[0]
        assert collision.slug == "a-b"
        assert collision.kept == "a-b.json"
        assert collision.dropped == "a/b.json"
        assert "Slug collision in settings" in caplog.text

    def test__collections__include_empty(self) -> None:
        """Report every collection in table order."""
        catalog = build_catalog([])

        assert catalog.collections() == list(CollectionKey)
        assert catalog.get_entries("devcontainers") == []

    def test__unknown_collection__empty(self) -> None:
        """Return nothing for unknown collections."""
        catalog = build_catalog([])

        assert catalog.get_entries("themes") == []
        assert catalog.get_entry("themes", "x") is None
        assert catalog.count("themes") == 0

    def test__entries__keep_load_order(self) -> None:
        """List entries in the order items were given."""
        catalog = build_catalog(
            [
                Item(id="z.md", collection="copilot-prompts"),
                Item(id="a.md", collection="copilot-prompts"),
            ]
        )

        assert [entry.slug for entry in catalog.get_entries("copilot-prompts")] == ["z", "a"]


class TestCatalogLoader:
    """Tests for CatalogLoader."""

    def test__load__builds_from_registry(self, registry_dir: Path) -> None:
        """Build the catalog from the registry directory."""
        loader = CatalogLoader(RegistryConfig(root_dir=registry_dir))

        catalog = loader.load()

        entry = catalog.get_entry("settings", "python-settings")
        assert entry is not None
        assert entry.display_path == "python/settings.json"
        assert entry.file_name == "python/settings.json"
        assert entry.title == "settings"
        readme = catalog.get_entry("settings", "readme")
        assert readme is not None
        assert readme.file_name == "README.md"

    def test__load__cached_until_invalidated(self, registry_dir: Path) -> None:
        """Return the cached catalog until invalidate() is called."""
        loader = CatalogLoader(RegistryConfig(root_dir=registry_dir))
        first = loader.load()

        (registry_dir / "extensions" / "extra.json").write_text("{}")

        assert loader.load() is first
        assert first.get_entry("extensions", "extra") is None

        loader.invalidate()
        second = loader.load()

        assert second is not first
        assert second.get_entry("extensions", "extra") is not None

    def test__load__skips_broken_files(self, registry_dir: Path) -> None:
        """Skip unparsable files instead of failing the whole catalog."""
        (registry_dir / "extensions" / "broken.json").write_text("{broken")
        loader = CatalogLoader(RegistryConfig(root_dir=registry_dir))

        catalog = loader.load()

        assert catalog.get_entry("extensions", "broken") is None
        assert catalog.get_entry("extensions", "essentials") is not None

    def test__collection_dir_override__paths_relative_to_collection(
        self, tmp_path: Path
    ) -> None:
        """Display paths and file names ignore the on-disk directory name."""
        directory = tmp_path / "vscode"
        (directory / "python").mkdir(parents=True)
        (directory / "base.json").write_text("{}")
        (directory / "python" / "settings.json").write_text("{}")
        registry = RegistryConfig(
            root_dir=tmp_path,
            collection_dirs={CollectionKey.SETTINGS: Path("vscode")},
        )

        catalog = CatalogLoader(registry).load()

        assert [
            (entry.slug, entry.file_name, entry.display_path)
            for entry in catalog.get_entries("settings")
        ] == [
            ("base", "base.json", "base.json"),
            ("python-settings", "python/settings.json", "python/settings.json"),
        ]
