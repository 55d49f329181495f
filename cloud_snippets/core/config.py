"""Snippet configuration loaded from environment variables.

All configuration values have defaults that let the samples run against
the ambient Google Cloud project (``gcloud auth application-default``).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration surfaces before the first
    request is sent.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from cloud_snippets.core.constants import (
    DEFAULT_DATABASE,
    DEFAULT_DELETE_BATCH_SIZE,
    DEFAULT_FACE_DETECTION_GCS_URI,
    DEFAULT_POPULATION_LIMIT,
    GCS_URI_SCHEME,
)
from cloud_snippets.core.exceptions import SnippetError


class ConfigValidationError(SnippetError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class SnippetConfig:
    """Immutable snippet configuration.

    Attributes:
        project_id: Google Cloud project (empty lets the client library
            resolve it from the environment).
        database: Firestore database id.
        delete_batch_size: Page size used by ``delete_collection``.
        population_limit: Upper bound enforced by the conditional transaction.
        face_detection_gcs_uri: Default ``gs://`` image for face detection.
        log_level: Root log level name for the command line runner.
    """

    project_id: str = ""
    database: str = DEFAULT_DATABASE
    delete_batch_size: int = DEFAULT_DELETE_BATCH_SIZE
    population_limit: int = DEFAULT_POPULATION_LIMIT
    face_detection_gcs_uri: str = DEFAULT_FACE_DETECTION_GCS_URI
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> SnippetConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a
                required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``DELETE_BATCH_SIZE=abc``).
        """
        config = cls(
            project_id=os.getenv("GOOGLE_CLOUD_PROJECT", ""),
            database=os.getenv("FIRESTORE_DATABASE", DEFAULT_DATABASE),
            delete_batch_size=int(
                os.getenv("DELETE_BATCH_SIZE", str(DEFAULT_DELETE_BATCH_SIZE))
            ),
            population_limit=int(os.getenv("POPULATION_LIMIT", str(DEFAULT_POPULATION_LIMIT))),
            face_detection_gcs_uri=os.getenv(
                "FACE_DETECTION_GCS_URI", DEFAULT_FACE_DETECTION_GCS_URI
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config


def _validate(config: SnippetConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.database:
        raise ConfigValidationError("FIRESTORE_DATABASE", config.database, "must not be empty")

    if config.delete_batch_size < 1:
        raise ConfigValidationError(
            "DELETE_BATCH_SIZE",
            config.delete_batch_size,
            "must be >= 1 (documents per page)",
        )

    if config.population_limit <= 0:
        raise ConfigValidationError(
            "POPULATION_LIMIT",
            config.population_limit,
            "must be > 0",
        )

    if not config.face_detection_gcs_uri.startswith(GCS_URI_SCHEME):
        raise ConfigValidationError(
            "FACE_DETECTION_GCS_URI",
            config.face_detection_gcs_uri,
            f"must start with {GCS_URI_SCHEME!r}",
        )

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigValidationError(
            "LOG_LEVEL",
            config.log_level,
            "must be a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        )
