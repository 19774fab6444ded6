"""Chain the picker, the face detector and the clusterer into one run."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from face_groups.detection.detector import FaceDetector
from face_groups.detection.runner import ImageCallback, run_detection
from face_groups.errors import EmptyResultError, NothingPickedError
from face_groups.extraction.extractor import FaceExtractor
from face_groups.grouping.clusterer import cluster_faces
from face_groups.models import AnnotatedImage, ImageAsset, PersonGroup
from face_groups.picker import ImagePicker, pick_images

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    images: list[ImageAsset]
    annotated: list[AnnotatedImage]
    groups: list[PersonGroup]


def process_images(
    detector: FaceDetector,
    images: list[ImageAsset],
    on_image: ImageCallback | None = None,
) -> list[AnnotatedImage]:
    """Detect faces in picked images.

    Raises:
        NothingPickedError: ``images`` is empty.
        EmptyResultError: No image contained a face.
    """
    if not images:
        raise NothingPickedError()
    logger.info("Processing %d images", len(images))
    annotated = run_detection(detector, images, on_image)
    if not annotated:
        raise EmptyResultError()
    return annotated


def run_pipeline(
    sources: Iterable[str | Path],
    picker: ImagePicker,
    detector: FaceDetector,
    extractor: FaceExtractor,
    on_image: ImageCallback | None = None,
) -> PipelineResult:
    """Pick, detect and group in one go.

    Raises:
        PermissionDeniedError: The picker was refused access.
        NothingPickedError: No readable image was picked.
        EmptyResultError: No image contained a face.
    """
    images = pick_images(picker, sources)
    annotated = process_images(detector, images, on_image)
    groups = cluster_faces(annotated, extractor)
    return PipelineResult(images=images, annotated=annotated, groups=groups)
