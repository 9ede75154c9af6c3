"""Domain entities and value objects.

Core domain models representing the business concepts of Brio: language
descriptors, tagged snippets and parsed category queries.
These are pure Python dataclasses with no dependencies on infrastructure.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

# Category name -> set of domain names. An empty set means the category is
# present with an unconstrained domain.
TagMetadata = dict[str, frozenset[str]]


@dataclass(frozen=True)
class CommentStyle:
    """Comment syntax of a source language.

    Attributes:
        single: Single-line comment prefix (e.g., "#", "//").
        block_start: Token opening a multi-line comment (e.g., "/*").
            Empty when the language has no block comments.
        block_end: Token closing a multi-line comment (e.g., "*/").
    """

    single: str
    block_start: str = ""
    block_end: str = ""

    def __post_init__(self) -> None:
        """Validate comment style after initialization."""
        if not self.single:
            raise ValueError("single-line comment prefix cannot be empty")
        if bool(self.block_start) != bool(self.block_end):
            raise ValueError(
                "block_start and block_end must be given together, "
                f"got {self.block_start!r} and {self.block_end!r}"
            )

    @property
    def has_block_comments(self) -> bool:
        """Whether the language defines multi-line comments."""
        return bool(self.block_start)


@dataclass(frozen=True)
class LanguageDescriptor:
    """Comment-syntax and identity profile for one supported language.

    Attributes:
        name: Display name (e.g., "Python").
        extensions: File extensions claimed by this language, each with
            its leading dot (e.g., {".py"}).
        comment_style: How comments are written in this language.
        markdown_label: Fence label used for syntax highlighting hints.
    """

    name: str
    extensions: frozenset[str]
    comment_style: CommentStyle
    markdown_label: str = ""

    def __post_init__(self) -> None:
        """Validate descriptor after initialization."""
        if not self.name:
            raise ValueError("language name cannot be empty")
        # Accept any iterable of extensions but store a frozenset
        object.__setattr__(self, "extensions", frozenset(self.extensions))
        if not self.extensions:
            raise ValueError(f"language {self.name!r} must claim at least one extension")
        for ext in self.extensions:
            if len(ext) < 2 or not ext.startswith("."):
                raise ValueError(
                    f"extension {ext!r} of language {self.name!r} must start with '.'"
                )


@dataclass(frozen=True)
class Snippet:
    """A fully closed tagged region of a source file.

    Attributes:
        file_path: Path of the file the snippet came from.
        start_line: 1-based line number of the opening tag.
        end_line: 1-based line number of the closing tag.
        categories: Metadata of the opening tag only.
        content: Body lines strictly between the tags, without newlines.
        language: Descriptor used to scan the file.
    """

    file_path: Path
    start_line: int
    end_line: int
    categories: TagMetadata
    content: tuple[str, ...]
    language: LanguageDescriptor

    def __post_init__(self) -> None:
        """Validate line range after initialization."""
        if self.start_line < 1:
            raise ValueError(f"start_line must be >= 1, got {self.start_line}")
        if self.end_line <= self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must be greater than "
                f"start_line ({self.start_line})"
            )
        object.__setattr__(self, "content", tuple(self.content))

    @property
    def line_count(self) -> int:
        """Number of body lines in the snippet."""
        return len(self.content)


@dataclass(frozen=True)
class CategoryQuery:
    """Parsed user filter mapping categories to acceptable domains.

    An empty domain set means any domain of that category is accepted.
    A query without categories matches every snippet.
    """

    entries: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> CategoryQuery:
        """Build a query from a category -> iterable-of-domains mapping."""
        return cls(
            entries={
                category.strip(): frozenset(d.strip() for d in domains)
                for category, domains in mapping.items()
            }
        )

    @property
    def is_empty(self) -> bool:
        """Whether the query is the match-everything wildcard."""
        return not self.entries

    @property
    def categories(self) -> frozenset[str]:
        """Category names named by the query."""
        return frozenset(self.entries)

    def domains_for(self, category: str) -> frozenset[str] | None:
        """Return accepted domains for a category, or None if not queried."""
        return self.entries.get(category)

    def __contains__(self, category: object) -> bool:
        return category in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
