"""Data models shared by the samples.

- City: The sample entity written to the ``cities`` collection
- FaceDetection: One face flattened from a Vision response
- ImageAnnotationResult: Per-image outcome of a face detection request
"""

from cloud_snippets.models.city import City
from cloud_snippets.models.faces import (
    FaceDetection,
    ImageAnnotationResult,
    ModelValidationError,
)

__all__ = [
    "City",
    "FaceDetection",
    "ImageAnnotationResult",
    "ModelValidationError",
]
