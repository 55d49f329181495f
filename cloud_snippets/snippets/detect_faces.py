"""Face detection samples — Google Cloud Vision.

Builds one ``AnnotateImageRequest`` per image with the
``FACE_DETECTION`` feature, submits them in a single synchronous
``batch_annotate_images`` call, and prints each detected face.

Error handling:
    A per-image error in the response is printed and recorded on that
    image's result; sibling images are still reported.  Call-level
    failures (network, auth, quota) raise from the client library and
    propagate unchanged.

Resources:
    The ``ImageAnnotatorClient`` is acquired at the start of the call
    and closed on exit, even if the request raises.  A client passed in
    by the caller is used as-is and left open.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from google.cloud import vision

from cloud_snippets.core.clients import get_vision_client
from cloud_snippets.core.constants import GCS_URI_SCHEME
from cloud_snippets.models.faces import FaceDetection, ImageAnnotationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("cloud_snippets.snippets.detect_faces")


def detect_faces_gcs(
    gcs_uri: str,
    *,
    client: vision.ImageAnnotatorClient | None = None,
) -> list[ImageAnnotationResult]:
    """Detect faces in a remote image on Google Cloud Storage.

    Args:
        gcs_uri: ``gs://bucket/path`` of the image.
        client: Optional annotator client; one is created and closed
            for this call when omitted.

    Raises:
        ValueError: If *gcs_uri* is not a ``gs://`` URI.
    """
    if not gcs_uri.startswith(GCS_URI_SCHEME):
        msg = f"Expected a {GCS_URI_SCHEME} URI, got {gcs_uri!r}"
        raise ValueError(msg)

    image = vision.Image(source=vision.ImageSource(gcs_image_uri=gcs_uri))
    return annotate_faces([(gcs_uri, image)], client=client)


def detect_faces(
    path: str | Path,
    *,
    client: vision.ImageAnnotatorClient | None = None,
) -> list[ImageAnnotationResult]:
    """Detect faces in a local image file, sent inline as bytes."""
    content = Path(path).read_bytes()
    image = vision.Image(content=content)
    return annotate_faces([(str(path), image)], client=client)


def annotate_faces(
    images: Sequence[tuple[str, vision.Image]],
    *,
    client: vision.ImageAnnotatorClient | None = None,
) -> list[ImageAnnotationResult]:
    """Run face detection over *images* in one batch request.

    Args:
        images: ``(label, image)`` pairs; the label is echoed on the result.
        client: Optional annotator client (see module docstring).

    Returns:
        One ``ImageAnnotationResult`` per requested image, in order.

    Raises:
        ValueError: If *images* is empty.
    """
    if not images:
        msg = "annotate_faces: at least one image is required"
        raise ValueError(msg)

    feature = vision.Feature(type_=vision.Feature.Type.FACE_DETECTION)
    requests = [
        vision.AnnotateImageRequest(image=image, features=[feature]) for _, image in images
    ]

    logger.info("Face detection started | images=%d", len(requests))

    scope = contextlib.nullcontext(client) if client is not None else get_vision_client()
    with scope as annotator:
        response = annotator.batch_annotate_images(requests=requests)

    results: list[ImageAnnotationResult] = []
    for (label, _), res in zip(images, response.responses, strict=True):
        if res.error.message:
            print(f"Error: {res.error.message}")
            logger.warning("Face detection failed | image=%s | error=%s", label, res.error.message)
            results.append(ImageAnnotationResult(image=label, error=res.error.message))
            continue

        # For the full list of annotations, see https://cloud.google.com/vision/docs
        faces = [_to_face(annotation) for annotation in res.face_annotations]
        for face in faces:
            print(face.describe())
        results.append(ImageAnnotationResult(image=label, faces=faces))

    logger.info(
        "Face detection completed | images=%d | faces=%d | errors=%d",
        len(results),
        sum(len(r.faces) for r in results),
        sum(1 for r in results if not r.ok),
    )
    return results


def _to_face(annotation: vision.FaceAnnotation) -> FaceDetection:
    return FaceDetection(
        anger=vision.Likelihood(annotation.anger_likelihood).name,
        joy=vision.Likelihood(annotation.joy_likelihood).name,
        surprise=vision.Likelihood(annotation.surprise_likelihood).name,
        bounding_poly=tuple((v.x, v.y) for v in annotation.bounding_poly.vertices),
    )
