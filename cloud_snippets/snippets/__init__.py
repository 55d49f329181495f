"""Standalone samples, one logical operation each.

Vision:
- detect_faces: Face detection on a ``gs://`` image or a local file

Firestore:
- manage_data: Set, add, update, field-value sentinels, deletes
- delete_collection: Paginated bulk delete of a collection
- transactions: Simple and conditional read-modify-write transactions
- write_batch: Atomic multi-document batch commit

The registry maps command line names to samples.
"""
