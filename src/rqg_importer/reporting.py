"""
Outcome reporting for import attempts.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger("rqg-character-importer")


class OutcomeReporter(ABC):
    """Surfaces import results to the user and to diagnostics.

    All methods are fire-and-forget; the pipeline never uses a return value.
    """

    @abstractmethod
    def notify_info(self, message: str) -> None:
        """Show an informational message to the user."""
        ...

    @abstractmethod
    def notify_error(self, message: str) -> None:
        """Show an error message to the user."""
        ...

    @abstractmethod
    def log_error(self, context: str, cause: BaseException) -> None:
        """Record a diagnostic entry with the underlying cause."""
        ...


class LoggingReporter(OutcomeReporter):
    """Writes notifications to the log and keeps them for the caller.

    ``notifications`` holds ``(level, message)`` pairs in emission order,
    so a tool can return what the user would have seen.
    """

    def __init__(self, module_id: str = "rqg-character-importer"):
        self.module_id = module_id
        self.notifications: list[tuple[str, str]] = []

    def notify_info(self, message: str) -> None:
        self.notifications.append(("info", message))
        logger.info(message)

    def notify_error(self, message: str) -> None:
        self.notifications.append(("error", message))
        logger.warning(message)

    def log_error(self, context: str, cause: BaseException) -> None:
        logger.error(f"{self.module_id} | {context}: {cause}", exc_info=cause)

    def format(self) -> str:
        """Format the collected notifications as one text block."""
        icons = {"info": "ℹ️", "error": "❌"}
        return "\n".join(f"{icons.get(level, '')} {message}".strip() for level, message in self.notifications)
