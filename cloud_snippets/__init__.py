"""Cloud Snippets.

Standalone samples showing how to call Google Cloud Vision (face
detection) and Google Cloud Firestore (document CRUD, batched writes,
transactions) through their Python client libraries.
"""

__version__ = "0.1.0"
