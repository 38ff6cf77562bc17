"""Shared test fixtures."""

from pathlib import Path

import pytest
from copilot_registry.config import Config, LiveReloadConfig, RegistryConfig, ServerConfig


@pytest.fixture
def registry_dir(tmp_path: Path) -> Path:
    """Create a registry with content in every collection.

    Layout mirrors a real registry: files directly in a collection directory
    and files nested one or more levels below it.
    """
    root = tmp_path / "registry"

    instructions = root / "copilot-instructions"
    (instructions / "python").mkdir(parents=True)
    (instructions / "general.instructions.md").write_text(
        "---\napplyTo: '**/*.py'\ndescription: General rules\n---\n# General\n"
    )
    (instructions / "python" / "style.instructions.md").write_text(
        "---\ntitle: Python Style\n---\nUse black.\n"
    )

    prompts = root / "copilot-prompts"
    (prompts / "review").mkdir(parents=True)
    (prompts / "review" / "code-review.prompt.md").write_text(
        "---\ndescription: Review code\ncategory: review\n---\nReview this code.\n"
    )

    settings = root / "settings"
    (settings / "python").mkdir(parents=True)
    (settings / "README.md").write_text("# Settings\n")
    (settings / "python" / "settings.json").write_text(
        '{"name": "Python", "description": "Python settings", "editor.tabSize": 4}'
    )

    extensions = root / "extensions"
    extensions.mkdir(parents=True)
    (extensions / "essentials.json").write_text(
        '{"name": "Essentials", "publisher": "ms-python"}'
    )

    devcontainers = root / "devcontainers"
    (devcontainers / "node").mkdir(parents=True)
    (devcontainers / "node" / "devcontainer.json").write_text(
        '{"name": "Node", "image": "mcr.microsoft.com/devcontainers/javascript-node"}'
    )

    mcp = root / "settings-mcp"
    mcp.mkdir(parents=True)
    (mcp / "github.json").write_text('{"name": "GitHub", "server": "github"}')

    return root


@pytest.fixture
def test_config(registry_dir: Path) -> Config:
    """Create a test configuration pointing at the sample registry."""
    return Config(
        server=ServerConfig(),
        registry=RegistryConfig(root_dir=registry_dir),
        live_reload=LiveReloadConfig(enabled=False),
    )
