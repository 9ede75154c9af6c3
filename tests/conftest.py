"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from brio.core.languages import LanguageRegistry, default_registry
from brio.domain.entities import CommentStyle, LanguageDescriptor

# ============================================================================
# Global Config Isolation
# ============================================================================
# The user's real ~/.config/brio/config.toml must never leak into tests.


@pytest.fixture(autouse=True)
def no_global_config(tmp_path_factory: pytest.TempPathFactory):
    """Point the global config path at a location that does not exist.

    Tests that need a global config write to the yielded path.
    """
    global_path = tmp_path_factory.mktemp("global_config") / "brio" / "config.toml"
    with patch(
        "brio.adapters.config.toml_config_provider.get_global_config_path",
        return_value=global_path,
    ):
        yield global_path


# ============================================================================
# Languages
# ============================================================================


@pytest.fixture
def registry() -> LanguageRegistry:
    """Fresh registry with the built-in languages."""
    return default_registry()


@pytest.fixture
def python_language(registry: LanguageRegistry) -> LanguageDescriptor:
    """Built-in Python descriptor."""
    language = registry.lookup(".py")
    assert language is not None
    return language


@pytest.fixture
def typescript_language(registry: LanguageRegistry) -> LanguageDescriptor:
    """Built-in TypeScript descriptor."""
    language = registry.lookup(".ts")
    assert language is not None
    return language


@pytest.fixture
def lua_language() -> LanguageDescriptor:
    """A language that is not built in."""
    return LanguageDescriptor(
        name="Lua",
        extensions=frozenset({".lua"}),
        comment_style=CommentStyle(single="--", block_start="--[[", block_end="]]"),
        markdown_label="lua",
    )


# ============================================================================
# Source Tree Helpers
# ============================================================================


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create files (and parent directories) under root.

    Args:
        root: Directory to create files in.
        files: Mapping of relative path to file content.

    Returns:
        The root directory.
    """
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture writing a source tree under tmp_path/"src"."""

    def _make(files: dict[str, str]) -> Path:
        return write_files(tmp_path / "src", files)

    return _make


SAMPLE_PYTHON = '''import os

# >: {"foundation": ["messages"], "model": ["messages"]}
class Message:
    pass
# <: {"foundation": ["messages"]}


# >: {"tests": ["alerts"]}
def test_alert():
    assert True
# <: {}
'''

SAMPLE_TYPESCRIPT = """export const a = 1;
/*
 * >: {"foundation": ["alerts"]}
 */
export function alert(): void {}
// <: {"foundation": ["alerts"]}
"""


@pytest.fixture
def sample_tree(make_tree: Callable[[dict[str, str]], Path]) -> Path:
    """Source tree with tagged Python and TypeScript files."""
    return make_tree(
        {
            "app/models.py": SAMPLE_PYTHON,
            "web/alert.ts": SAMPLE_TYPESCRIPT,
            "README.md": "# >: {\"docs\": []}\nnot scanned\n# <: {}\n",
        }
    )
