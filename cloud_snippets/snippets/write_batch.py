"""Atomic batched write sample.

Stages a set, an update and a delete across three documents in one
``WriteBatch`` and commits it once.  Firestore applies all three writes
or none of them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cloud_snippets.core.constants import CITIES_COLLECTION
from cloud_snippets.models.city import City

if TYPE_CHECKING:
    from google.cloud import firestore
    from google.cloud.firestore_v1.types import WriteResult

logger = logging.getLogger("cloud_snippets.snippets.write_batch")


def write_batch(db: firestore.Client) -> list[WriteResult]:
    """Create ``NYC``, update ``SF`` and delete ``LA`` in one commit."""
    cities = db.collection(CITIES_COLLECTION)
    cities.document("SF").set(City().to_dict())
    cities.document("LA").set(City().to_dict())

    batch = db.batch()

    nyc_ref = cities.document("NYC")
    batch.set(nyc_ref, City().to_dict())

    sf_ref = cities.document("SF")
    batch.update(sf_ref, {"population": 1_000_000})

    la_ref = cities.document("LA")
    batch.delete(la_ref)

    results = batch.commit()
    for result in results:
        print(f"Update time : {result.update_time}")

    logger.info("Batch committed | writes=%d", len(results))
    return results
