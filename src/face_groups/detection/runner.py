"""Run the face detector over a batch of picked images.

Images are processed one at a time, in input order. Each detector call is
a suspension point of the generator below, so a caller that stops iterating
abandons the batch without leaving anything half-built behind.
"""

import logging
from collections.abc import Callable, Iterable, Iterator

from face_groups.detection.detector import FaceDetector
from face_groups.models import AnnotatedImage, FaceBounds, ImageAsset

logger = logging.getLogger(__name__)

ImageCallback = Callable[[ImageAsset, int], None]


def detect_faces(detector: FaceDetector, uri: str) -> list[FaceBounds]:
    """Detect faces in one image; a detector failure counts as zero faces."""
    logger.debug("Detecting faces in: %s", uri)
    try:
        faces = list(detector.detect(uri))
    except Exception as exc:
        logger.warning("Error detecting faces in %s: %s", uri, exc)
        return []
    logger.debug("Faces found: %d", len(faces))
    return faces


def iter_annotated_images(
    detector: FaceDetector,
    images: Iterable[ImageAsset],
    on_image: ImageCallback | None = None,
) -> Iterator[AnnotatedImage]:
    """Yield an AnnotatedImage for every image with at least one face.

    ``on_image`` is called after each image, including those without faces,
    with the number of faces found.
    """
    for image in images:
        faces = detect_faces(detector, image.uri)
        if on_image is not None:
            on_image(image, len(faces))
        if faces:
            yield AnnotatedImage.from_asset(image, faces)


def run_detection(
    detector: FaceDetector,
    images: Iterable[ImageAsset],
    on_image: ImageCallback | None = None,
) -> list[AnnotatedImage]:
    """Detect faces across the batch and drop images without faces."""
    annotated = list(iter_annotated_images(detector, images, on_image))
    logger.info("Total faces found: %d", sum(len(image.faces) for image in annotated))
    logger.info("Images with faces: %d", len(annotated))
    return annotated
