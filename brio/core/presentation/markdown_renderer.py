"""Markdown and plain-text rendering of snippets.

Markdown output::

    ## File: src/app.py (lines 3-9)

    **Categories**: foundation -> [messages]

    ```python
    ...body...
    ```
"""

from brio.core.query import format_categories
from brio.domain.entities import Snippet

NO_SNIPPETS_MESSAGE = "No snippets found for the given categories."


def _header(snippet: Snippet) -> str:
    return f"File: {snippet.file_path} (lines {snippet.start_line}-{snippet.end_line})"


class MarkdownRenderer:
    """Renders snippets as Markdown sections with fenced code blocks."""

    def render_snippet(self, snippet: Snippet) -> str:
        """Render one snippet, ending with a newline."""
        parts = [
            f"## {_header(snippet)}\n\n",
            f"**Categories**: {format_categories(snippet.categories)}\n\n",
            f"```{snippet.language.markdown_label}\n",
        ]
        parts.extend(f"{line}\n" for line in snippet.content)
        parts.append("```\n")
        return "".join(parts)

    def render(self, snippets: list[Snippet]) -> str:
        """Render snippets separated by blank lines."""
        if not snippets:
            return NO_SNIPPETS_MESSAGE + "\n"
        return "\n".join(self.render_snippet(s) for s in snippets)


class PlainRenderer:
    """Renders snippets without Markdown, for pasting into other tools."""

    def render_snippet(self, snippet: Snippet) -> str:
        """Render one snippet, ending with a newline."""
        lines = [
            _header(snippet),
            f"Categories: {format_categories(snippet.categories)}",
            "",
            *snippet.content,
        ]
        return "\n".join(lines) + "\n"

    def render(self, snippets: list[Snippet]) -> str:
        """Render snippets separated by blank lines."""
        if not snippets:
            return NO_SNIPPETS_MESSAGE + "\n"
        return "\n".join(self.render_snippet(s) for s in snippets)
