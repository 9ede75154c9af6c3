"""Use case error handling utilities.

Use cases return error responses rather than raising, except for
KeyboardInterrupt/SystemExit which always propagate. Callers check
response.success instead of catching multiple exception types.
"""

import logging

from brio.domain.exceptions import BrioDomainError

logger = logging.getLogger(__name__)


def format_error_message(exception: Exception, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    - BrioDomainError: the error's message, as is
    - OSError: adds context about permissions and filesystem access
    - ValueError/RuntimeError: message prefixed with the operation
    - anything else: a generic "internal error" message

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation (e.g., "extraction").

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, BrioDomainError):
        return exception.message
    elif isinstance(exception, OSError):
        return f"I/O error: {exception}. Check file permissions and filesystem access."
    elif isinstance(exception, (ValueError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}. Check logs for details."


def log_use_case_error(exception: Exception, operation_name: str) -> None:
    """Log an exception from a use case with appropriate severity.

    Unexpected exception types are logged with their traceback.

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for log messages.
    """
    if isinstance(exception, BrioDomainError):
        logger.error(exception.message)
    elif isinstance(exception, (OSError, ValueError, RuntimeError)):
        logger.error("Error during %s: %s", operation_name, exception)
    else:
        logger.exception("Unexpected error during %s", operation_name)
