"""Snippet scanner: the per-file tag state machine.

Each physical line is handled in priority order:

1. A single-line opening tag starts a new snippet, silently discarding any
   snippet that is still open.
2. A single-line closing tag closes the active snippet (no-op otherwise).
3. Outside a block comment, a line containing the block start token begins
   buffering a block comment.
4. Inside a block comment, later lines are buffered until one holds the
   block end token. The start line is never checked for the end token, so
   a one-line block such as a short docstring stays open. The finished
   block is then searched for a tag, which takes effect at its first line.
5. Any other line is appended to the active snippet's body.

Lines owned by a block comment never become snippet body lines. Only the
opening tag's metadata is kept; closing-tag metadata is discarded.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from brio.core.scanning.tag_recognizer import TagKind, TagLineRecognizer, TagMatch
from brio.domain.entities import LanguageDescriptor, Snippet, TagMetadata

logger = logging.getLogger(__name__)


@dataclass
class _ActiveSnippet:
    """Snippet opened but not yet closed."""

    metadata: TagMetadata
    start_line: int
    lines: list[str] = field(default_factory=list)


class SnippetScanner:
    """Scans one file's lines and materializes closed snippets.

    A scanner holds state for a single file; create one per file.
    """

    def __init__(
        self,
        language: LanguageDescriptor,
        file_path: Path | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            language: Descriptor of the file's language.
            file_path: Path recorded on emitted snippets (default: "<input>").
        """
        self.language = language
        self.file_path = file_path if file_path is not None else Path("<input>")
        self._recognizer = TagLineRecognizer(language)
        self._active: _ActiveSnippet | None = None
        self._in_block = False
        self._block_lines: list[str] = []
        self._block_start_line = 0
        self._line_number = 0

    @property
    def in_block_comment(self) -> bool:
        """Whether a block comment is currently being buffered."""
        return self._in_block

    @property
    def has_active_snippet(self) -> bool:
        """Whether a snippet is open and collecting body lines."""
        return self._active is not None

    def feed(self, line: str) -> Snippet | None:
        """Process the next physical line.

        Args:
            line: Line content without its trailing newline.

        Returns:
            The snippet closed by this line, if any.
        """
        self._line_number += 1
        line_number = self._line_number

        tag = self._recognizer.classify(line)
        if tag is not None:
            return self._apply_tag(tag, line_number)

        if not self._in_block and self._recognizer.opens_block(line):
            self._in_block = True
            self._block_lines = [line]
            self._block_start_line = line_number
            return None

        if self._in_block:
            self._block_lines.append(line)
            if self._recognizer.closes_block(line):
                return self._resolve_block()
            return None

        if self._active is not None:
            self._active.lines.append(line)
        return None

    def finish(self) -> None:
        """Signal end of input, dropping anything left unterminated."""
        if self._active is not None:
            logger.debug(
                "Dropping unterminated snippet opened at %s:%d",
                self.file_path,
                self._active.start_line,
            )
        if self._in_block:
            logger.debug(
                "Unterminated block comment opened at %s:%d",
                self.file_path,
                self._block_start_line,
            )
        self._active = None
        self._in_block = False
        self._block_lines = []

    def scan_lines(self, lines: Iterable[str]) -> Iterator[Snippet]:
        """Scan lines and yield snippets in the order they close.

        Trailing newline characters are stripped from each line.

        Args:
            lines: Physical lines of the file, in order.

        Yields:
            Closed snippets.
        """
        for line in lines:
            snippet = self.feed(line.rstrip("\r\n"))
            if snippet is not None:
                yield snippet
        self.finish()

    def _resolve_block(self) -> Snippet | None:
        """Leave block mode and apply any tag found in the buffered block."""
        block_text = "\n".join(self._block_lines) + "\n"
        start_line = self._block_start_line
        self._in_block = False
        self._block_lines = []

        tag = self._recognizer.find_block_tag(block_text)
        if tag is None:
            return None
        return self._apply_tag(tag, start_line)

    def _apply_tag(self, tag: TagMatch, line_number: int) -> Snippet | None:
        """Open or close a snippet at the given tag line."""
        if tag.kind is TagKind.OPEN:
            if self._active is not None:
                logger.debug(
                    "Discarding unterminated snippet opened at %s:%d (new tag at line %d)",
                    self.file_path,
                    self._active.start_line,
                    line_number,
                )
            # Metadata is always present for opening tags
            self._active = _ActiveSnippet(metadata=tag.metadata or {}, start_line=line_number)
            return None

        active = self._active
        if active is None:
            return None
        self._active = None

        if line_number <= active.start_line:
            logger.debug(
                "Dropping snippet at %s:%d closed before it opened (line %d)",
                self.file_path,
                active.start_line,
                line_number,
            )
            return None

        return Snippet(
            file_path=self.file_path,
            start_line=active.start_line,
            end_line=line_number,
            categories=active.metadata,
            content=tuple(active.lines),
            language=self.language,
        )


def scan_file(path: Path, language: LanguageDescriptor) -> list[Snippet]:
    """Scan a file for snippets.

    The file is read as UTF-8 with undecodable bytes replaced and is closed
    on every exit path.

    Args:
        path: File to scan.
        language: Descriptor of the file's language.

    Returns:
        Snippets in the order they close in the file.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    scanner = SnippetScanner(language, path)
    with path.open(encoding="utf-8", errors="replace") as f:
        return list(scanner.scan_lines(f))
