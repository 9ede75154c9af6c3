"""Language descriptor registry for all Brio components.

Single source of truth for extension -> comment syntax mappings used by:
- File selection (which files are candidates for scanning)
- Snippet scanning (how tag comments are written)
- Rendering (Markdown fence labels)

A registry is an explicit object built once by the entry point and passed to
the file selector and scanners. To add a built-in language, add a single
entry to BUILTIN_LANGUAGES.
"""

import logging
from collections.abc import Iterable
from typing import Final

from brio.domain.config import BrioConfig, LanguageConfig
from brio.domain.entities import CommentStyle, LanguageDescriptor
from brio.domain.exceptions import InvalidLanguageError

logger = logging.getLogger(__name__)

_C_STYLE = CommentStyle(single="//", block_start="/*", block_end="*/")

BUILTIN_LANGUAGES: Final[tuple[LanguageDescriptor, ...]] = (
    LanguageDescriptor(
        name="Python",
        extensions=frozenset({".py", ".pyc"}),
        comment_style=CommentStyle(single="#", block_start='"""', block_end='"""'),
        markdown_label="python",
    ),
    LanguageDescriptor(
        name="TypeScript",
        extensions=frozenset({".ts", ".tsx"}),
        comment_style=_C_STYLE,
        markdown_label="typescript",
    ),
    LanguageDescriptor(
        name="JavaScript",
        extensions=frozenset({".js", ".jsx", ".mjs", ".cjs"}),
        comment_style=_C_STYLE,
        markdown_label="javascript",
    ),
    LanguageDescriptor(
        name="Go",
        extensions=frozenset({".go"}),
        comment_style=_C_STYLE,
        markdown_label="go",
    ),
    LanguageDescriptor(
        name="Rust",
        extensions=frozenset({".rs"}),
        comment_style=_C_STYLE,
        markdown_label="rust",
    ),
    LanguageDescriptor(
        name="Java",
        extensions=frozenset({".java"}),
        comment_style=_C_STYLE,
        markdown_label="java",
    ),
    LanguageDescriptor(
        name="C",
        extensions=frozenset({".c", ".h"}),
        comment_style=_C_STYLE,
        markdown_label="c",
    ),
    LanguageDescriptor(
        name="C++",
        extensions=frozenset({".cpp", ".cc", ".cxx", ".hpp", ".hh", ".hxx"}),
        comment_style=_C_STYLE,
        markdown_label="cpp",
    ),
    LanguageDescriptor(
        name="C#",
        extensions=frozenset({".cs"}),
        comment_style=_C_STYLE,
        markdown_label="csharp",
    ),
    LanguageDescriptor(
        name="Ruby",
        extensions=frozenset({".rb"}),
        comment_style=CommentStyle(single="#", block_start="=begin", block_end="=end"),
        markdown_label="ruby",
    ),
    LanguageDescriptor(
        name="Shell",
        extensions=frozenset({".sh", ".bash", ".zsh"}),
        comment_style=CommentStyle(single="#"),
        markdown_label="bash",
    ),
    LanguageDescriptor(
        name="SQL",
        extensions=frozenset({".sql"}),
        comment_style=CommentStyle(single="--", block_start="/*", block_end="*/"),
        markdown_label="sql",
    ),
)


class LanguageRegistry:
    """Maps file extensions to language descriptors.

    Populated once at startup and read-only afterwards, so it can be shared
    between scanner threads without locking. Extensions are matched exactly,
    including the leading dot and case.
    """

    def __init__(self, descriptors: Iterable[LanguageDescriptor] = ()) -> None:
        self._by_extension: dict[str, LanguageDescriptor] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: LanguageDescriptor) -> None:
        """Register a descriptor for each of its extensions.

        A previously registered descriptor for the same extension is
        replaced (last writer wins).

        Args:
            descriptor: Language to register.
        """
        for ext in sorted(descriptor.extensions):
            previous = self._by_extension.get(ext)
            if previous is not None and previous is not descriptor:
                logger.debug(
                    "Extension %s reassigned from %s to %s",
                    ext,
                    previous.name,
                    descriptor.name,
                )
            self._by_extension[ext] = descriptor

    def lookup(self, extension: str) -> LanguageDescriptor | None:
        """Get the descriptor for a file extension.

        Args:
            extension: File extension with leading dot (e.g., ".py").

        Returns:
            The registered descriptor, or None if the extension is unknown.
        """
        return self._by_extension.get(extension)

    def list_extensions(self) -> tuple[str, ...]:
        """Get all registered extensions, sorted.

        Returns:
            Tuple of extensions (e.g., (".go", ".py", ...)).
        """
        return tuple(sorted(self._by_extension))

    def descriptors(self) -> list[LanguageDescriptor]:
        """Get unique descriptors that still own at least one extension.

        Returns:
            Descriptors in first-registration order.
        """
        seen: dict[int, LanguageDescriptor] = {}
        for descriptor in self._by_extension.values():
            seen.setdefault(id(descriptor), descriptor)
        return list(seen.values())

    def extensions_of(self, descriptor: LanguageDescriptor) -> tuple[str, ...]:
        """Get the extensions currently owned by a descriptor."""
        return tuple(
            sorted(ext for ext, d in self._by_extension.items() if d is descriptor)
        )

    def __contains__(self, extension: object) -> bool:
        return extension in self._by_extension

    def __len__(self) -> int:
        return len(self._by_extension)


def default_registry() -> LanguageRegistry:
    """Create a fresh registry holding the built-in languages."""
    return LanguageRegistry(BUILTIN_LANGUAGES)


def descriptor_from_config(language: LanguageConfig) -> LanguageDescriptor:
    """Convert a user language definition into a descriptor.

    Args:
        language: Language definition from configuration.

    Returns:
        The equivalent LanguageDescriptor.

    Raises:
        InvalidLanguageError: If the definition is inconsistent.
    """
    try:
        return LanguageDescriptor(
            name=language.name,
            extensions=frozenset(language.extensions),
            comment_style=CommentStyle(
                single=language.single,
                block_start=language.block_start,
                block_end=language.block_end,
            ),
            markdown_label=language.markdown or language.name.lower(),
        )
    except ValueError as e:
        raise InvalidLanguageError(
            f"Invalid language definition {language.name!r}: {e}",
            hint="Check the [[languages]] entries in your brio config",
        ) from e


def build_registry(config: BrioConfig) -> LanguageRegistry:
    """Create the registry for a run: built-ins plus configured languages.

    Configured languages are registered last, so they override built-in
    descriptors for shared extensions.

    Args:
        config: Effective configuration.

    Returns:
        Populated LanguageRegistry.

    Raises:
        InvalidLanguageError: If a configured language is invalid.
    """
    registry = default_registry()
    for language in config.languages:
        registry.register(descriptor_from_config(language))
    return registry
