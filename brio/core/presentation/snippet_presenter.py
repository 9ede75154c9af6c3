"""Snippet presentation orchestrator.

Chooses a renderer for the requested output format and writes the result
with click. Terminal highlighting replaces Markdown fences with
Pygments-colored bodies.
"""

import click

from brio.core.presentation.colors import BrioColors, render_syntax_highlighted
from brio.core.presentation.json_formatter import JsonSnippetFormatter
from brio.core.presentation.markdown_renderer import (
    NO_SNIPPETS_MESSAGE,
    MarkdownRenderer,
    PlainRenderer,
)
from brio.core.query import format_categories
from brio.domain.config import DisplayConfig
from brio.domain.entities import Snippet


class SnippetPresenter:
    """Renders extracted snippets according to display settings.

    Args:
        display: Display configuration (format, highlighting, theme).
    """

    def __init__(self, display: DisplayConfig) -> None:
        self._display = display
        self._markdown = MarkdownRenderer()
        self._plain = PlainRenderer()
        self._json = JsonSnippetFormatter()

    def format(self, snippets: list[Snippet]) -> str:
        """Format snippets as text without writing them.

        Args:
            snippets: Snippets to render.

        Returns:
            Rendered output.
        """
        if self._display.format == "json":
            return self._json.format_output(snippets) + "\n"
        if self._display.format == "plain":
            return self._plain.render(snippets)
        if self._display.syntax_highlighting:
            return self._render_highlighted(snippets)
        return self._markdown.render(snippets)

    def present(self, snippets: list[Snippet]) -> None:
        """Write rendered snippets to stdout."""
        click.echo(self.format(snippets), nl=False)

    def _render_highlighted(self, snippets: list[Snippet]) -> str:
        if not snippets:
            return BrioColors.click_warning(NO_SNIPPETS_MESSAGE) + "\n"
        sections = []
        for snippet in snippets:
            header = (
                f"{BrioColors.click_path(str(snippet.file_path))} "
                f"{BrioColors.click_line_range(f'(lines {snippet.start_line}-{snippet.end_line})')}"
            )
            categories = BrioColors.click_category(format_categories(snippet.categories))
            # Body lines skip block comments, so file line numbers would drift
            body = render_syntax_highlighted(
                "\n".join(snippet.content),
                language=snippet.language.markdown_label,
                start_line=None,
                theme=self._display.theme,
            )
            sections.append(f"{header}\n{categories}\n{body}\n")
        return "\n".join(sections)
