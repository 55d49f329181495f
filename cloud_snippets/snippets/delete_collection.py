"""Batched collection deletion.

Firestore has no "drop collection" call; documents are deleted one by
one.  To avoid loading a large collection into memory, documents are
fetched in pages of ``batch_size`` and each page is consumed before the
next one is requested.  Tune ``batch_size`` to document size (at most
1 MiB each) and memory budget.

Known limitations:
    - A page shorter than ``batch_size`` ends the run, even if another
      writer added documents meanwhile.
    - Errors stop the run without retry.  The routine is not resumable;
      callers that need an empty collection re-invoke it until it
      returns 0.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud.firestore import CollectionReference

logger = logging.getLogger("cloud_snippets.snippets.delete_collection")


def delete_collection(collection: CollectionReference, batch_size: int) -> int:
    """Delete every document in *collection*, ``batch_size`` at a time.

    Args:
        collection: The collection to empty.
        batch_size: Maximum documents fetched per page.

    Returns:
        Number of documents deleted by this invocation.  On error the
        count deleted before the failure is returned.

    Raises:
        ValueError: If *batch_size* is less than 1.
    """
    if batch_size < 1:
        msg = f"batch_size must be >= 1, got {batch_size}"
        raise ValueError(msg)

    deleted = 0
    try:
        # Retrieve one bounded page of documents.
        for doc in collection.limit(batch_size).stream():
            doc.reference.delete()
            deleted += 1
    except Exception as exc:
        logger.exception(
            "delete_collection failed | collection=%s | deleted=%d | error=%s",
            collection.id,
            deleted,
            exc,
        )
        print(f"Error deleting collection : {exc}", file=sys.stderr)
        return deleted

    logger.info(
        "delete_collection page | collection=%s | deleted=%d | batch_size=%d",
        collection.id,
        deleted,
        batch_size,
    )

    if deleted >= batch_size:
        return deleted + delete_collection(collection, batch_size)
    return deleted
