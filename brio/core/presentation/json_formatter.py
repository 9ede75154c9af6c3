"""JSON serialization of extracted snippets."""

import json
from typing import Any

from brio.domain.entities import Snippet


class JsonSnippetFormatter:
    """Serializes snippets to JSON.

    Categories and their domains are emitted sorted so the output is
    stable across runs.
    """

    @staticmethod
    def serialize(snippets: list[Snippet]) -> list[dict[str, Any]]:
        """Convert snippets to JSON-compatible dictionaries.

        Args:
            snippets: Snippets to serialize.

        Returns:
            One dictionary per snippet.
        """
        return [
            {
                "path": str(snippet.file_path),
                "start_line": snippet.start_line,
                "end_line": snippet.end_line,
                "language": snippet.language.name,
                "markdown_label": snippet.language.markdown_label,
                "categories": {
                    category: sorted(snippet.categories[category])
                    for category in sorted(snippet.categories)
                },
                "content": list(snippet.content),
            }
            for snippet in snippets
        ]

    def format_output(self, snippets: list[Snippet]) -> str:
        """Format snippets as an indented JSON array."""
        return json.dumps(self.serialize(snippets), indent=2)
