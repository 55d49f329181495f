"""Client construction for the two Google Cloud services.

Centralises how the samples obtain their service handles so that
each snippet only receives an already-built client:

- **get_firestore_client** — builds a ``google.cloud.firestore.Client``
  for the configured project and database.
- **get_vision_client** — builds a ``google.cloud.vision.ImageAnnotatorClient``.
  Callers own the handle and should close it (``with`` block) when done.

Both fail fast with ``ClientConfigurationError`` when Application
Default Credentials cannot be resolved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cloud_snippets.core.config import SnippetConfig
from cloud_snippets.core.exceptions import PermanentError

if TYPE_CHECKING:
    from google.cloud import firestore, vision

logger = logging.getLogger("cloud_snippets.core.clients")


class ClientConfigurationError(PermanentError):
    """Raised when a service client cannot be constructed."""

    default_stage = "clients"
    default_code = "CLIENT_CONFIGURATION_FAILED"


def get_firestore_client(config: SnippetConfig | None = None) -> firestore.Client:
    """Create a Firestore client from configuration.

    Args:
        config: Optional ``SnippetConfig``. If ``None``, configuration is
            loaded from the environment.

    Returns:
        A ``google.cloud.firestore.Client`` instance.

    Raises:
        ClientConfigurationError: If credentials or the project cannot be
            resolved.
    """
    from google.auth.exceptions import DefaultCredentialsError
    from google.cloud import firestore

    config = config or SnippetConfig.from_env()
    try:
        client = firestore.Client(project=config.project_id or None, database=config.database)
    except DefaultCredentialsError as exc:
        msg = f"Cannot create Firestore client: {exc}"
        raise ClientConfigurationError(msg) from exc

    logger.info(
        "Firestore client created | project=%s | database=%s",
        client.project,
        config.database,
    )
    return client


def get_vision_client() -> vision.ImageAnnotatorClient:
    """Create an ``ImageAnnotatorClient``.

    Raises:
        ClientConfigurationError: If credentials cannot be resolved.
    """
    from google.auth.exceptions import DefaultCredentialsError
    from google.cloud import vision

    try:
        client = vision.ImageAnnotatorClient()
    except DefaultCredentialsError as exc:
        msg = f"Cannot create Vision client: {exc}"
        raise ClientConfigurationError(msg) from exc

    logger.debug("Vision client created")
    return client
