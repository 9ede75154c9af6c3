"""File selection service for choosing scannable source files.

Filters files based on:
- Registered language extensions (whitelist approach via the registry)
- An optional glob matched against the file's base name
"""

import fnmatch
import logging
import os
from pathlib import Path

from brio.core.languages import LanguageRegistry
from brio.domain.exceptions import TraversalError

logger = logging.getLogger(__name__)

# Patterns meaning "do not filter by name"
MATCH_ALL_PATTERNS = frozenset({"", "*"})


class FileSelector:
    """Walks a directory tree and selects files with a registered language.

    Args:
        registry: Language registry deciding which extensions are scannable.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry

    def is_supported(self, file_path: Path) -> bool:
        """Check if a file's extension has a registered language.

        Args:
            file_path: Path to file.

        Returns:
            True if the extension is registered (exact, case-sensitive).
        """
        return file_path.suffix in self._registry

    @staticmethod
    def matches_pattern(file_path: Path, pattern: str) -> bool:
        """Check a file's base name against a glob pattern.

        Args:
            file_path: Path to file.
            pattern: Glob such as "*.py"; "" and "*" match everything.

        Returns:
            True if the file passes the name filter.
        """
        if pattern in MATCH_ALL_PATTERNS:
            return True
        return fnmatch.fnmatchcase(file_path.name, pattern)

    @staticmethod
    def validate_pattern(pattern: str) -> None:
        """Reject malformed globs instead of treating them as literals.

        A character class must be closed and hold at least one character,
        and a pattern may not end with an escaping backslash.

        Args:
            pattern: Glob to check.

        Raises:
            TraversalError: If the pattern is malformed.
        """
        i = 0
        while i < len(pattern):
            char = pattern[i]
            if char == "\\":
                if i + 1 == len(pattern):
                    raise _bad_pattern(pattern, "trailing backslash")
                i += 2
                continue
            if char == "[":
                start = i + 1
                if pattern[start : start + 1] in ("!", "^"):
                    start += 1
                end = pattern.find("]", start)
                if end < 0:
                    raise _bad_pattern(pattern, "unterminated character class")
                if end == start:
                    raise _bad_pattern(pattern, "empty character class")
                i = end + 1
                continue
            i += 1

    def select(self, root: Path, pattern: str = "*") -> list[Path]:
        """Select scannable files under root.

        Args:
            root: Directory to walk recursively.
            pattern: Glob matched against base names.

        Returns:
            Sorted list of matching file paths (rooted at root).

        Raises:
            TraversalError: If the pattern is malformed, root is not a
                directory or any part of the tree cannot be read. No partial
                list is returned.
        """
        self.validate_pattern(pattern)
        if not root.is_dir():
            raise TraversalError(
                f"Not a directory: {root}",
                hint="Pass an existing directory with --dir",
            )

        def _on_error(error: OSError) -> None:
            raise TraversalError(
                f"Cannot read {error.filename}: {error.strerror}",
                hint="Check directory permissions or choose another --dir",
            ) from error

        selected: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            # Sorting in place also fixes the descent order
            dirnames.sort()
            for filename in sorted(filenames):
                file_path = Path(dirpath) / filename
                if self.is_supported(file_path) and self.matches_pattern(file_path, pattern):
                    selected.append(file_path)

        logger.debug("Selected %d file(s) under %s", len(selected), root)
        return sorted(selected)


def _bad_pattern(pattern: str, reason: str) -> TraversalError:
    return TraversalError(
        f"Invalid file pattern {pattern!r}: {reason}",
        hint="Check the --files glob (e.g. '*.py', 'test_[a-z]*.ts')",
    )
