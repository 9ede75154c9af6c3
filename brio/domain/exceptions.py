"""Domain exceptions for Brio business logic.

These exceptions represent business rule violations and domain-level errors.
They should be caught at the application boundary (CLI) and converted
to appropriate user-facing error messages.
"""


class BrioDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class TraversalError(BrioDomainError):
    """Raised when the directory walk or file-name pattern fails.

    Traversal errors abort the whole selection; no partial file list is
    returned to the caller.
    """

    pass


class TagParseError(BrioDomainError):
    """Raised when a tag line does not carry a usable JSON object."""

    pass


class InvalidLanguageError(BrioDomainError):
    """Raised when a language definition is incomplete or inconsistent."""

    pass
