"""Firestore transaction samples.

A transaction body reads a document, computes a new value, and writes
it back.  The client library runs the body inside
``@firestore.transactional``, which retries it on contention, so the
body must not have side effects outside its transaction reads and
writes.  Raising from the body rolls the transaction back with no
partial write.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from google.cloud import firestore

from cloud_snippets.core.constants import (
    CITIES_COLLECTION,
    DEFAULT_POPULATION_LIMIT,
    SIMPLE_TRANSACTION_SEED_POPULATION,
)
from cloud_snippets.core.exceptions import ValidationError
from cloud_snippets.models.city import City

if TYPE_CHECKING:
    from google.cloud.firestore import DocumentReference, Transaction

logger = logging.getLogger("cloud_snippets.snippets.transactions")


class PopulationTooBigError(ValidationError):
    """Raised inside a transaction body to abort an out-of-range write.

    Attributes:
        population: The population the transaction would have written.
        limit: The largest population allowed.
    """

    default_stage = "transaction"
    default_code = "POPULATION_TOO_BIG"

    def __init__(self, population: int, limit: int) -> None:
        self.population = population
        self.limit = limit
        super().__init__("Sorry! Population is too big.")


def run_simple_transaction(db: firestore.Client) -> int:
    """Seed ``cities/SF`` and increment its population by one.

    Returns:
        The population written by the transaction.
    """
    doc_ref = db.collection(CITIES_COLLECTION).document("SF")
    city = City(name="SF", country="USA", population=SIMPLE_TRANSACTION_SEED_POPULATION)
    doc_ref.set(city.to_dict())

    increment = firestore.transactional(_increment_population)
    new_population = increment(db.transaction(), doc_ref)

    logger.info("Simple transaction committed | population=%d", new_population)
    return new_population


def return_info_from_transaction(
    db: firestore.Client,
    population: int,
    *,
    limit: int = DEFAULT_POPULATION_LIMIT,
) -> str:
    """Increment ``cities/SF`` only while the result stays within *limit*.

    Args:
        db: Firestore client.
        population: Initial population seeded before the transaction runs.
        limit: Largest population the transaction may write.

    Returns:
        The message produced inside the transaction.

    Raises:
        PopulationTooBigError: If ``population + 1`` exceeds *limit*; the
            document keeps its seeded value.
    """
    db.collection(CITIES_COLLECTION).document("SF").set({"population": population})

    doc_ref = db.collection(CITIES_COLLECTION).document("SF")
    conditional_increment = firestore.transactional(_increment_population_within_limit)
    try:
        message = conditional_increment(db.transaction(), doc_ref, limit)
    except PopulationTooBigError as exc:
        logger.warning(
            "Transaction aborted | population=%d | limit=%d",
            exc.population,
            exc.limit,
        )
        raise

    print(message)
    return message


# ---------------------------------------------------------------------------
# Transaction bodies (re-run by the client library on contention)
# ---------------------------------------------------------------------------


def _increment_population(transaction: Transaction, doc_ref: DocumentReference) -> int:
    snapshot = doc_ref.get(transaction=transaction)
    new_population = snapshot.get("population") + 1
    transaction.update(doc_ref, {"population": new_population})
    return new_population


def _increment_population_within_limit(
    transaction: Transaction,
    doc_ref: DocumentReference,
    limit: int,
) -> str:
    snapshot = doc_ref.get(transaction=transaction)
    new_population = snapshot.get("population") + 1
    if new_population > limit:
        raise PopulationTooBigError(new_population, limit)
    transaction.update(doc_ref, {"population": new_population})
    return f"Population increased to {new_population}"
