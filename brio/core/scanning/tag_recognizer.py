"""Tag line recognition.

A tag is a comment carrying a JSON object of category -> domains. Opening tags
use ``>:`` and closing tags use ``<:`` right after the comment prefix::

    # >: {"foundation": ["messages"]}
    ... code ...
    # <: {"foundation": ["messages"]}

Tags may also sit anywhere inside a block comment; those are only resolved
once the whole block has been read (see find_block_tag).
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum

from brio.domain.entities import LanguageDescriptor, TagMetadata
from brio.domain.exceptions import TagParseError

logger = logging.getLogger(__name__)

# Patterns searched inside an accumulated block comment. "." stops at a
# newline, so each match is confined to the line holding its closing brace.
_BLOCK_OPEN_PATTERN = re.compile(r">:\s*\{.*\}")
_BLOCK_CLOSE_PATTERN = re.compile(r"<:\s*\{.*\}")


class TagKind(str, Enum):
    """Kind of tag found on a line."""

    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class TagMatch:
    """A recognized tag.

    Attributes:
        kind: Whether the tag opens or closes a snippet.
        metadata: Parsed tag metadata. None only for a closing tag whose
            JSON could not be parsed (closing tags are tolerated).
    """

    kind: TagKind
    metadata: TagMetadata | None


def parse_tag_json(text: str) -> TagMetadata:
    """Extract and decode the JSON object carried by a tag.

    The object spans from the first "{" to the last "}" of the text; braces
    are not balanced, so several JSON fragments on one line fail to decode.

    Args:
        text: Tag line (or block excerpt) containing the JSON object.

    Returns:
        Mapping of trimmed category names to trimmed domain sets.

    Raises:
        TagParseError: If no object is found, the JSON is invalid, or it is
            not an object of string -> array of strings.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise TagParseError(f"No JSON object found in tag: {text.strip()}")

    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError as e:
        raise TagParseError(f"Invalid tag JSON: {e}") from e

    if not isinstance(data, dict):
        raise TagParseError(f"Tag JSON must be an object, got {type(data).__name__}")

    metadata: TagMetadata = {}
    for category, domains in data.items():
        if domains is None:
            domains = []
        if not isinstance(domains, list) or not all(isinstance(d, str) for d in domains):
            raise TagParseError(
                f"Domains of category {category!r} must be an array of strings"
            )
        metadata[category.strip()] = frozenset(d.strip() for d in domains)
    return metadata


class TagLineRecognizer:
    """Classifies physical lines of one language as tags or ordinary lines.

    Single-line tags are matched case-insensitively against the language's
    comment prefix followed by ``>:`` or ``<:`` and an opening brace.
    """

    def __init__(self, language: LanguageDescriptor) -> None:
        """Compile the tag patterns for a language.

        Args:
            language: Descriptor whose comment style defines the tag syntax.
        """
        style = language.comment_style
        prefix = re.escape(style.single)
        self._open_pattern = re.compile(prefix + r"\s*>:\s*\{", re.IGNORECASE)
        self._close_pattern = re.compile(prefix + r"\s*<:\s*\{", re.IGNORECASE)
        self._block_start = style.block_start
        self._block_end = style.block_end

    def classify(self, line: str) -> TagMatch | None:
        """Recognize a single-line tag.

        An opening tag with malformed JSON is ignored (the line may still
        be recognized as a closing tag). A closing tag with malformed JSON
        is still reported, without metadata.

        Args:
            line: Physical line without its newline.

        Returns:
            The tag found on the line, or None for an ordinary line.
        """
        if self._open_pattern.search(line):
            try:
                return TagMatch(TagKind.OPEN, parse_tag_json(line))
            except TagParseError as e:
                logger.debug("Ignoring malformed opening tag: %s", e.message)

        if self._close_pattern.search(line):
            return TagMatch(TagKind.CLOSE, _parse_closing(line))

        return None

    def opens_block(self, line: str) -> bool:
        """Whether the line contains the block comment start token."""
        return bool(self._block_start) and self._block_start in line

    def closes_block(self, line: str) -> bool:
        """Whether the line contains the block comment end token."""
        return bool(self._block_end) and self._block_end in line

    def find_block_tag(self, block_text: str) -> TagMatch | None:
        """Search a complete block comment for a tag.

        Opening tags are preferred over closing tags when both are present.

        Args:
            block_text: Every buffered line of the block, newline-joined.

        Returns:
            The tag found in the block, or None.
        """
        open_match = _BLOCK_OPEN_PATTERN.search(block_text)
        if open_match:
            try:
                return TagMatch(TagKind.OPEN, parse_tag_json(open_match.group()))
            except TagParseError as e:
                logger.debug("Ignoring malformed opening tag in block: %s", e.message)

        close_match = _BLOCK_CLOSE_PATTERN.search(block_text)
        if close_match:
            return TagMatch(TagKind.CLOSE, _parse_closing(close_match.group()))

        return None


def _parse_closing(text: str) -> TagMetadata | None:
    """Parse closing-tag JSON, tolerating failures."""
    try:
        return parse_tag_json(text)
    except TagParseError as e:
        logger.debug("Tolerating malformed closing tag: %s", e.message)
        return None
