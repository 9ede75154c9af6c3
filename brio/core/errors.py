"""CLI error handling with actionable hints.

Provides consistent error formatting for all brio CLI commands.
"""

import click


class BrioCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise BrioCliError(
            "Not a directory: src/",
            hint="Pass an existing directory with --dir",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def config_exists_error(path: str) -> BrioCliError:
    """Build the error raised when refusing to overwrite a config file."""
    return BrioCliError(
        f"Config file already exists: {path}",
        hint="Use --force to overwrite it",
    )
