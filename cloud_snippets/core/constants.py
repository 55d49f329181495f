"""Shared snippet constants — single source of truth.

Centralises collection names, document ids, and sample defaults that
would otherwise be repeated across the Firestore and Vision samples.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Firestore collections
# ---------------------------------------------------------------------------

CITIES_COLLECTION: str = "cities"
"""Collection holding the ``City`` sample documents."""

DATA_COLLECTION: str = "data"
"""Collection for the mixed data-type sample."""

USERS_COLLECTION: str = "users"
"""Collection for the nested-field update sample."""

OBJECTS_COLLECTION: str = "objects"
"""Collection for the server-timestamp sample."""

DEFAULT_DATABASE: str = "(default)"
"""Firestore database id used when ``FIRESTORE_DATABASE`` is unset."""

# ---------------------------------------------------------------------------
# Sample limits
# ---------------------------------------------------------------------------

DEFAULT_DELETE_BATCH_SIZE: int = 10
"""Page size for ``delete_collection`` (documents held in memory at once)."""

DEFAULT_POPULATION_LIMIT: int = 1_000_000
"""Largest population the conditional transaction will write."""

SIMPLE_TRANSACTION_SEED_POPULATION: int = 860_000
"""Population ``run_simple_transaction`` seeds before incrementing."""

# ---------------------------------------------------------------------------
# Vision
# ---------------------------------------------------------------------------

GCS_URI_SCHEME: str = "gs://"

DEFAULT_FACE_DETECTION_GCS_URI: str = "gs://your-gcs-bucket/path/to/image/file.jpg"
"""Placeholder image; replace via ``FACE_DETECTION_GCS_URI`` before running."""
