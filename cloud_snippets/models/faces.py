"""Typed results for the face detection samples.

The Vision client returns protobuf messages; the samples flatten the
fields they print into these frozen dataclasses so callers and tests
can inspect results without touching protobuf types.

- ``FaceDetection``: likelihood names and bounding polygon of one face
- ``ImageAnnotationResult``: faces found in one image, or its error
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cloud_snippets.core.exceptions import SnippetError


class ModelValidationError(ValueError, SnippetError):
    """Raised when a model is constructed with invalid field values.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_stage = "model_validation"
    default_code = "MODEL_VALIDATION_FAILED"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        SnippetError.__init__(self, formatted)


@dataclass(frozen=True, slots=True)
class FaceDetection:
    """One detected face.

    Attributes:
        anger: Anger likelihood name (e.g. ``"VERY_UNLIKELY"``).
        joy: Joy likelihood name.
        surprise: Surprise likelihood name.
        bounding_poly: Polygon vertices as ``(x, y)`` pixel pairs.
    """

    anger: str
    joy: str
    surprise: str
    bounding_poly: tuple[tuple[int, int], ...] = ()

    def __post_init__(self) -> None:
        _check_non_empty("FaceDetection", "anger", self.anger)
        _check_non_empty("FaceDetection", "joy", self.joy)
        _check_non_empty("FaceDetection", "surprise", self.surprise)

    def describe(self) -> str:
        """Return the multi-line status block printed for this face."""
        position = ", ".join(f"({x}, {y})" for x, y in self.bounding_poly)
        return (
            f"anger: {self.anger}\n"
            f"joy: {self.joy}\n"
            f"surprise: {self.surprise}\n"
            f"position: [{position}]"
        )


@dataclass(frozen=True, slots=True)
class ImageAnnotationResult:
    """Outcome of face detection for a single image.

    Attributes:
        image: The ``gs://`` URI or local path that was annotated.
        faces: Faces detected in the image (empty on error).
        error: Per-image error message from the service; empty on success.
    """

    image: str
    faces: list[FaceDetection] = field(default_factory=list)
    error: str = ""

    def __post_init__(self) -> None:
        _check_non_empty("ImageAnnotationResult", "image", self.image)
        if self.error and self.faces:
            raise ModelValidationError(
                "ImageAnnotationResult",
                "faces",
                len(self.faces),
                "must be empty when error is set",
            )

    @property
    def ok(self) -> bool:
        """True when the service returned no error for this image."""
        return not self.error


def _check_non_empty(model: str, field_name: str, value: str) -> None:
    """Raise `ModelValidationError` if *value* is empty or blank."""
    if not value or not value.strip():
        raise ModelValidationError(model, field_name, value, "must not be empty")
