"""Presentation layer for CLI output formatting.

Components:
- SnippetPresenter: Orchestrator for snippet display (main entry point)
- MarkdownRenderer / PlainRenderer: Text renderers
- JsonSnippetFormatter: JSON serialization
"""

from brio.core.presentation.json_formatter import JsonSnippetFormatter
from brio.core.presentation.markdown_renderer import MarkdownRenderer, PlainRenderer
from brio.core.presentation.snippet_presenter import SnippetPresenter

__all__ = [
    "SnippetPresenter",
    "MarkdownRenderer",
    "PlainRenderer",
    "JsonSnippetFormatter",
]
