"""Firestore document management samples.

Each function takes a ``google.cloud.firestore.Client`` and performs
one logical operation: set, add, merge-set, update, field-value
sentinels (server timestamp, array union/removal, increment, delete
field) and document deletion.  Every call blocks on the write and
prints its update time.

Samples that update an existing document seed it first, so each one
can run on an empty database.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from google.cloud import firestore

from cloud_snippets.core.constants import (
    CITIES_COLLECTION,
    DATA_COLLECTION,
    OBJECTS_COLLECTION,
    USERS_COLLECTION,
)
from cloud_snippets.models.city import City

if TYPE_CHECKING:
    from google.cloud.firestore_v1.types import WriteResult

logger = logging.getLogger("cloud_snippets.snippets.manage_data")


def _report(result: WriteResult) -> None:
    print(f"Update time : {result.update_time}")


# ---------------------------------------------------------------------------
# Add / set
# ---------------------------------------------------------------------------


def add_simple_document_as_map(db: firestore.Client) -> dict[str, Any]:
    """Set ``cities/LA`` from a plain dict and return the data written."""
    data = {
        "name": "Los Angeles",
        "state": "CA",
        "country": "USA",
        "regions": ["west_coast", "socal"],
    }
    result = db.collection(CITIES_COLLECTION).document("LA").set(data)
    _report(result)
    return data


def add_document_with_different_data_types(db: firestore.Client) -> dict[str, Any]:
    """Set ``data/one`` with one value of every basic Firestore type."""
    data = {
        "stringExample": "Hello, World",
        "booleanExample": False,
        "numberExample": 3.14159265,
        "nullExample": None,
        "arrayExample": [5, True, "hello"],
        "objectExample": {"a": 5, "b": True},
    }
    result = db.collection(DATA_COLLECTION).document("one").set(data)
    _report(result)
    return data


def add_simple_document_as_entity(db: firestore.Client) -> City:
    """Set ``cities/LA`` from a ``City`` model."""
    city = City(
        name="Los Angeles",
        state="CA",
        country="USA",
        capital=False,
        population=3_900_000,
        regions=["west_coast", "socal"],
    )
    result = db.collection(CITIES_COLLECTION).document("LA").set(city.to_dict())
    _report(result)
    return city


def set_requires_id(db: firestore.Client, data: dict[str, Any]) -> None:
    """``set()`` always needs an explicit document id."""
    db.collection(CITIES_COLLECTION).document("new-city-id").set(data)


def add_document_data_with_auto_generated_id(db: firestore.Client) -> str:
    """Add a document and let Firestore assign its id."""
    data = {"name": "Tokyo", "country": "Japan"}
    _, doc_ref = db.collection(CITIES_COLLECTION).add(data)
    print(f"Added document with ID: {doc_ref.id}")
    return doc_ref.id


def add_document_data_after_auto_generating_id(db: firestore.Client) -> str:
    """Reserve an auto id first, write the data later."""
    doc_ref = db.collection(CITIES_COLLECTION).document()
    print(f"Added document with ID: {doc_ref.id}")

    # later...
    result = doc_ref.set(City().to_dict())
    _report(result)
    return doc_ref.id


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------


def update_simple_document(db: firestore.Client) -> None:
    """Update one field of an existing document."""
    db.collection(CITIES_COLLECTION).document("DC").set(City(name="Washington D.C.").to_dict())

    doc_ref = db.collection(CITIES_COLLECTION).document("DC")
    result = doc_ref.update({"capital": True})
    print(f"Write result: {result}")


def update_using_map(db: firestore.Client) -> None:
    """Update several fields at once from a dict."""
    db.collection(CITIES_COLLECTION).document("DC").set(City(name="Washington D.C.").to_dict())

    doc_ref = db.collection(CITIES_COLLECTION).document("DC")
    result = doc_ref.update({"name": "Washington D.C.", "country": "USA", "capital": True})
    _report(result)


def update_and_create_if_missing(db: firestore.Client) -> None:
    """Merge-set: update ``cities/BJ``, creating it if it does not exist."""
    result = (
        db.collection(CITIES_COLLECTION).document("BJ").set({"capital": True}, merge=True)
    )
    _report(result)


def update_nested_fields(db: firestore.Client) -> None:
    """Update a top-level field and one key of a nested map."""
    frank_ref = db.collection(USERS_COLLECTION).document("frank")
    frank_ref.set(
        {
            "name": "Frank",
            "age": 12,
            "favorites": {"food": "Pizza", "color": "Blue", "subject": "Recess"},
        }
    )

    # Dotted paths address fields inside the nested map.
    result = frank_ref.update({"age": 13, "favorites.color": "Red"})
    _report(result)


def update_server_timestamp(db: firestore.Client) -> None:
    """Set ``timestamp`` to the server's commit time."""
    db.collection(OBJECTS_COLLECTION).document("some-id").set({})

    doc_ref = db.collection(OBJECTS_COLLECTION).document("some-id")
    result = doc_ref.update({"timestamp": firestore.SERVER_TIMESTAMP})
    _report(result)


def update_document_array(db: firestore.Client) -> None:
    """Atomically add to and remove from the ``regions`` array."""
    washington_ref = db.collection(CITIES_COLLECTION).document("DC")
    washington_ref.set(City(name="Washington D.C.", regions=["east_coast"]).to_dict())

    result = washington_ref.update({"regions": firestore.ArrayUnion(["greater_virginia"])})
    _report(result)

    result = washington_ref.update({"regions": firestore.ArrayRemove(["east_coast"])})
    _report(result)


def update_document_increment(db: firestore.Client) -> None:
    """Atomically increment ``population`` by 50."""
    db.collection(CITIES_COLLECTION).document("DC").set(City(population=100).to_dict())

    washington_ref = db.collection(CITIES_COLLECTION).document("DC")
    result = washington_ref.update({"population": firestore.Increment(50)})
    _report(result)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


def delete_fields(db: firestore.Client) -> None:
    """Remove the ``capital`` field, leaving the rest of the document intact."""
    db.collection(CITIES_COLLECTION).document("BJ").set(
        City(name="Beijing", capital=True).to_dict()
    )

    doc_ref = db.collection(CITIES_COLLECTION).document("BJ")
    result = doc_ref.update({"capital": firestore.DELETE_FIELD})
    _report(result)


def delete_document(db: firestore.Client) -> None:
    """Delete ``cities/DC``."""
    db.collection(CITIES_COLLECTION).document("DC").set(City(name="Washington, D.C.").to_dict())

    result = db.collection(CITIES_COLLECTION).document("DC").delete()
    logger.info("Document deleted | collection=%s | id=%s", CITIES_COLLECTION, "DC")
    print(f"Update time : {result}")
