"""Snippet registry — looks up a runnable sample by name.

The registry maps a kebab-case snippet name to a zero-argument loader
that returns a *runner*.  A runner takes the ``SnippetConfig`` and the
parsed command line options, builds whichever client it needs, and
calls the sample.  Loaders import lazily so that only the client
library of the selected sample is loaded.

Usage::

    from cloud_snippets.snippets.registry import get_snippet

    run = get_snippet("write-batch")
    run(config, options)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cloud_snippets.core.constants import GCS_URI_SCHEME
from cloud_snippets.core.exceptions import ValidationError

if TYPE_CHECKING:
    import argparse
    from collections.abc import Callable

    from cloud_snippets.core.config import SnippetConfig

    Runner = Callable[[SnippetConfig, argparse.Namespace], Any]

logger = logging.getLogger("cloud_snippets.snippets.registry")

# ---------------------------------------------------------------------------
# Snippet name constants
# ---------------------------------------------------------------------------

DETECT_FACES_GCS = "detect-faces-gcs"
DETECT_FACES = "detect-faces"
DELETE_COLLECTION = "delete-collection"
RETURN_INFO_FROM_TRANSACTION = "return-info-from-transaction"
RUN_SIMPLE_TRANSACTION = "run-simple-transaction"
WRITE_BATCH = "write-batch"

# Samples in ``manage_data`` that take only the Firestore client.
_MANAGE_DATA_SNIPPETS = (
    "add_simple_document_as_map",
    "add_document_with_different_data_types",
    "add_simple_document_as_entity",
    "add_document_data_with_auto_generated_id",
    "add_document_data_after_auto_generating_id",
    "update_simple_document",
    "update_using_map",
    "update_and_create_if_missing",
    "update_nested_fields",
    "update_server_timestamp",
    "update_document_array",
    "update_document_increment",
    "delete_fields",
    "delete_document",
)

SET_REQUIRES_ID = "set-requires-id"

_SNIPPET_REGISTRY: dict[str, Callable[[], Runner]] = {}


class UnknownSnippetError(LookupError):
    """Raised when a snippet name is not registered."""


class InvalidTargetError(ValidationError):
    """Raised when a snippet target is missing or malformed."""

    default_stage = "cli"
    default_code = "INVALID_TARGET"


def _register_builtin_snippets() -> None:
    """Register the built-in samples as lazy loaders."""

    def _detect_faces_gcs() -> Runner:
        from cloud_snippets.snippets.detect_faces import detect_faces_gcs

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            gcs_uri = options.target or config.face_detection_gcs_uri
            if not gcs_uri.startswith(GCS_URI_SCHEME):
                msg = f"{DETECT_FACES_GCS} requires a {GCS_URI_SCHEME} URI, got {gcs_uri!r}"
                raise InvalidTargetError(msg)
            return detect_faces_gcs(gcs_uri)

        return run

    def _detect_faces() -> Runner:
        from cloud_snippets.snippets.detect_faces import detect_faces

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            if not options.target:
                msg = f"{DETECT_FACES} requires a local image path"
                raise InvalidTargetError(msg)
            if not Path(options.target).is_file():
                msg = f"{DETECT_FACES} image not found: {options.target}"
                raise InvalidTargetError(msg)
            return detect_faces(options.target)

        return run

    def _delete_collection() -> Runner:
        from cloud_snippets.core.clients import get_firestore_client
        from cloud_snippets.core.constants import CITIES_COLLECTION
        from cloud_snippets.snippets.delete_collection import delete_collection

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            db = get_firestore_client(config)
            collection = db.collection(options.target or CITIES_COLLECTION)
            batch_size = (
                options.batch_size if options.batch_size is not None else config.delete_batch_size
            )
            return delete_collection(collection, batch_size)

        return run

    def _return_info_from_transaction() -> Runner:
        from cloud_snippets.core.clients import get_firestore_client
        from cloud_snippets.snippets.transactions import return_info_from_transaction

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            db = get_firestore_client(config)
            population = options.population if options.population is not None else 0
            return return_info_from_transaction(db, population, limit=config.population_limit)

        return run

    def _run_simple_transaction() -> Runner:
        from cloud_snippets.core.clients import get_firestore_client
        from cloud_snippets.snippets.transactions import run_simple_transaction

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            return run_simple_transaction(get_firestore_client(config))

        return run

    def _write_batch() -> Runner:
        from cloud_snippets.core.clients import get_firestore_client
        from cloud_snippets.snippets.write_batch import write_batch

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            return write_batch(get_firestore_client(config))

        return run

    def _set_requires_id() -> Runner:
        from cloud_snippets.core.clients import get_firestore_client
        from cloud_snippets.snippets.manage_data import set_requires_id

        def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
            data = {"name": options.target or "Frankfurt"}
            return set_requires_id(get_firestore_client(config), data)

        return run

    def _manage_data(func_name: str) -> Callable[[], Runner]:
        def loader() -> Runner:
            from cloud_snippets.core.clients import get_firestore_client
            from cloud_snippets.snippets import manage_data

            sample = getattr(manage_data, func_name)

            def run(config: SnippetConfig, options: argparse.Namespace) -> Any:
                return sample(get_firestore_client(config))

            return run

        return loader

    _SNIPPET_REGISTRY[DETECT_FACES_GCS] = _detect_faces_gcs
    _SNIPPET_REGISTRY[DETECT_FACES] = _detect_faces
    _SNIPPET_REGISTRY[DELETE_COLLECTION] = _delete_collection
    _SNIPPET_REGISTRY[RETURN_INFO_FROM_TRANSACTION] = _return_info_from_transaction
    _SNIPPET_REGISTRY[RUN_SIMPLE_TRANSACTION] = _run_simple_transaction
    _SNIPPET_REGISTRY[WRITE_BATCH] = _write_batch
    _SNIPPET_REGISTRY[SET_REQUIRES_ID] = _set_requires_id
    for func_name in _MANAGE_DATA_SNIPPETS:
        _SNIPPET_REGISTRY[func_name.replace("_", "-")] = _manage_data(func_name)


def _ensure_registry() -> None:
    """Initialise the snippet registry once (idempotent)."""
    if not _SNIPPET_REGISTRY:
        _register_builtin_snippets()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_snippet(name: str, loader: Callable[[], Runner]) -> None:
    """Register a custom snippet runner.

    Args:
        name: Snippet name used on the command line.
        loader: A zero-argument callable that returns the runner.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Snippet name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _SNIPPET_REGISTRY[name] = loader
    logger.debug("Registered snippet: %s", name)


def get_snippet(name: str) -> Runner:
    """Return the runner registered under *name*.

    Raises:
        UnknownSnippetError: If the name is not registered.
    """
    _ensure_registry()

    loader = _SNIPPET_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_SNIPPET_REGISTRY))
        msg = f"Unknown snippet: {name!r}. Available: {available}"
        raise UnknownSnippetError(msg)

    return loader()


def list_snippets() -> list[str]:
    """Return the names of all registered snippets."""
    _ensure_registry()
    return sorted(_SNIPPET_REGISTRY)
