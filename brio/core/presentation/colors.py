"""Centralized color definitions for terminal output.

Provides the color scheme for highlighted snippet display and the Pygments
based syntax highlighter.
"""

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from pygments.lexer import Lexer
    from pygments.token import _TokenType


class AnsiCodes:
    """ANSI escape codes for terminal coloring.

    Uses the standard 16-color palette so output adapts to terminal themes.
    """

    RESET = "\x1b[0m"
    DIM = "\x1b[2m"

    # Foreground colors (90-97 are bright variants)
    DARK_GRAY = "\x1b[90m"
    GREEN = "\x1b[92m"
    BLUE = "\x1b[94m"
    MAGENTA = "\x1b[95m"
    CYAN = "\x1b[96m"
    WHITE = "\x1b[97m"


class BrioColors:
    """Color palette for snippet headers and status messages."""

    PATH_FG = "magenta"
    LINE_RANGE_FG = "white"
    CATEGORY_FG = "cyan"
    WARNING_FG = "yellow"

    @staticmethod
    def click_path(text: str, bold: bool = True) -> str:
        """Style file path text for click output."""
        return click.style(text, fg=BrioColors.PATH_FG, bold=bold)

    @staticmethod
    def click_line_range(text: str) -> str:
        """Style a line range with dim effect."""
        return click.style(text, fg=BrioColors.LINE_RANGE_FG, dim=True)

    @staticmethod
    def click_category(text: str) -> str:
        """Style category text for click output."""
        return click.style(text, fg=BrioColors.CATEGORY_FG)

    @staticmethod
    def click_warning(text: str) -> str:
        """Style warning text for click output."""
        return click.style(text, fg=BrioColors.WARNING_FG)


def _get_lexer(language: str | None) -> "Lexer":
    """Get the Pygments lexer for a Markdown language label.

    Args:
        language: Label such as "python" or "typescript".

    Returns:
        A Pygments lexer instance. Falls back to text lexer if unknown.
    """
    from pygments.lexers import get_lexer_by_name
    from pygments.util import ClassNotFound

    try:
        return get_lexer_by_name(language or "text")
    except ClassNotFound:
        return get_lexer_by_name("text")


def _get_token_color_map() -> dict["_TokenType", str]:
    """Get the mapping from Pygments token types to ANSI color codes."""
    from pygments.token import Token

    return {
        Token.Keyword: AnsiCodes.MAGENTA,
        Token.Name.Function: AnsiCodes.BLUE,
        Token.Name.Class: AnsiCodes.BLUE,
        Token.String: AnsiCodes.GREEN,
        Token.Comment: AnsiCodes.DARK_GRAY,
        Token.Number: AnsiCodes.CYAN,
        Token.Operator: AnsiCodes.WHITE,
    }


def _find_token_color(
    token_type: "_TokenType", color_map: dict["_TokenType", str]
) -> str | None:
    """Find the color for a token, checking parent token types.

    Pygments tokens form a hierarchy (e.g., Token.Keyword.Namespace), so the
    token and its parents are checked in turn.
    """
    for ttype in [token_type] + list(token_type.split()):
        if ttype in color_map:
            return color_map[ttype]
    return None


def _format_line_number(line_num: int | None) -> str:
    """Format a line number right-aligned to 4 chars, dimmed ("" for None)."""
    if line_num is None:
        return ""
    return f"{AnsiCodes.DIM}{line_num:>4} {AnsiCodes.RESET}"


def _highlight_with_style(code: str, lexer: "Lexer", theme: str) -> list[str]:
    """Highlight code with a named Pygments style using 256 colors."""
    from pygments import highlight
    from pygments.formatters import Terminal256Formatter
    from pygments.util import ClassNotFound

    try:
        formatter = Terminal256Formatter(style=theme)
    except ClassNotFound:
        formatter = Terminal256Formatter()
    return highlight(code, lexer, formatter).rstrip("\n").split("\n")


def render_syntax_highlighted(
    code: str,
    language: str | None = None,
    start_line: int | None = 1,
    theme: str = "ansi",
) -> str:
    """Render code with syntax highlighting and optional line numbers.

    With the default "ansi" theme, tokens are colored from the 16-color
    palette so the user's terminal scheme is respected. Any other value is
    used as a Pygments style name.

    Args:
        code: Code content to highlight.
        language: Markdown label of the language (e.g., "python").
        start_line: Number displayed for the first line, or None to omit
            line numbers.
        theme: "ansi" or a Pygments style name (e.g., "monokai").

    Returns:
        Syntax-highlighted code as a string ready for terminal output.
    """
    from pygments import lex

    lexer = _get_lexer(language)

    if theme != "ansi":
        lines = _highlight_with_style(code, lexer, theme)
        return "\n".join(
            f"{_format_line_number(None if start_line is None else start_line + i)}{line}"
            for i, line in enumerate(lines)
        )

    color_map = _get_token_color_map()
    result_lines: list[str] = []
    current_line: list[str] = []
    line_num = start_line

    for token_type, value in lex(code, lexer):
        color = _find_token_color(token_type, color_map)

        # Tokens may span several lines
        parts = value.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                result_lines.append(f"{_format_line_number(line_num)}{''.join(current_line)}")
                current_line = []
                if line_num is not None:
                    line_num += 1
            if part:
                current_line.append(f"{color}{part}{AnsiCodes.RESET}" if color else part)

    # Pygments appends a trailing newline, which leaves an empty final line
    if current_line or not result_lines:
        result_lines.append(f"{_format_line_number(line_num)}{''.join(current_line)}")

    return "\n".join(result_lines)
