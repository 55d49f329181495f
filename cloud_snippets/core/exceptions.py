"""Unified snippet exception taxonomy.

Every domain exception raised by the samples inherits from
``SnippetError`` and carries structured context fields so the command
line runner can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``   — input or domain-rule violations.
- ``PermanentError``    — unrecoverable failures (bad setup).

No snippet error is retryable: the samples author no retries, and the
Google client libraries retry their own transient failures.  Errors
raised by the client libraries themselves
(``google.api_core.exceptions.GoogleAPICallError`` and friends) are not
wrapped; they propagate to the caller unchanged.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class SnippetError(Exception):
    """Base exception for all snippet-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Snippet or layer where the error occurred
            (e.g. ``"transaction"``, ``"config"``).
        code: Machine-readable error code (e.g. ``"POPULATION_TOO_BIG"``).
        retryable: Always ``False``; kept in the error payload so log
            consumers see a stable key set.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""
    retryable: bool = False

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(SnippetError):
    """Input or domain-rule validation failure."""


class PermanentError(SnippetError):
    """Unrecoverable failure."""
