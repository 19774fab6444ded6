"""Screen state for the photo selection, results, groups and person screens.

A screen object is created on each navigation and dropped when the user
leaves. It receives its input as a payload dict and owns everything it
derives from it, including its own SelectionStore, so two screens never
see each other's selection.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from face_groups.detection.detector import FaceDetector
from face_groups.detection.runner import ImageCallback
from face_groups.errors import FaceGroupsError, PermissionDeniedError
from face_groups.extraction.extractor import FaceExtractor
from face_groups.grouping.clusterer import cluster_faces
from face_groups.models import (
    AnnotatedImage,
    FaceCrop,
    ImageAsset,
    PersonGroup,
    face_groups_payload,
    parse_face_groups_payload,
    parse_person_photos_payload,
    person_photos_payload,
)
from face_groups.picker import ImagePicker, pick_images
from face_groups.pipeline.runner import process_images
from face_groups.sharing.coordinator import ExportCoordinator, ShareMode, ShareOutcome
from face_groups.sharing.selection import SelectionStore

logger = logging.getLogger(__name__)

PICK_ERROR = "Error selecting images. Please try again."
PROCESS_ERROR = "Error processing images. Please try again."
GROUPING_ERROR = "Error processing faces. Please try again."
NO_GROUPS_MESSAGE = "No faces detected in photos"


class HomeScreen:
    """Pick photos and run face detection on them."""

    def __init__(self, picker: ImagePicker, detector: FaceDetector) -> None:
        self.picker = picker
        self.detector = detector
        self.images: list[ImageAsset] = []
        self.error: str | None = None

    def pick(self, sources: Iterable[str | Path]) -> list[ImageAsset]:
        """Replace the current pick; on failure keep it and set ``error``."""
        try:
            images = pick_images(self.picker, sources)
        except PermissionDeniedError as exc:
            self.error = exc.message
            return self.images
        except Exception as exc:
            logger.error("Error picking images: %s", exc)
            self.error = PICK_ERROR
            return self.images
        self.images = images
        self.error = None
        return self.images

    def process(self, on_image: ImageCallback | None = None) -> dict[str, Any] | None:
        """Return the groups screen payload, or None with ``error`` set."""
        self.error = None
        try:
            annotated = process_images(self.detector, self.images, on_image)
        except FaceGroupsError as exc:
            self.error = exc.message
            return None
        except Exception as exc:
            logger.error("Error processing images: %s", exc)
            self.error = PROCESS_ERROR
            return None
        return face_groups_payload(annotated)


class ResultsScreen:
    """All images with faces, selectable for export.

    The share target here takes a single file, so only the first selected
    image (in display order) is shared.
    """

    SHARE_MODE = ShareMode.SINGLE

    def __init__(self, payload: dict[str, Any]) -> None:
        self.images: list[AnnotatedImage] = parse_face_groups_payload(payload)
        self.total_images: int = payload.get("totalImages", len(self.images))
        self.selection = SelectionStore()

    @property
    def title(self) -> str:
        return f"{self.total_images} Photos Selected"

    def toggle(self, uri: str) -> bool:
        return self.selection.toggle(uri)

    def selected_uris(self) -> list[str]:
        return [image.uri for image in self.selection.selected_subset(self.images, lambda i: i.uri)]

    def share(self, coordinator: ExportCoordinator) -> ShareOutcome:
        return coordinator.share(self.selected_uris(), "selected photos", self.SHARE_MODE)


class FaceGroupsScreen:
    """People found in the processed images."""

    def __init__(self, payload: dict[str, Any], extractor: FaceExtractor) -> None:
        self.images: list[AnnotatedImage] = parse_face_groups_payload(payload)
        self.extractor = extractor
        self.groups: list[PersonGroup] = []
        self.error: str | None = None
        self.loading = True

    @property
    def title(self) -> str:
        return f"Found {len(self.groups)} People"

    def load(self) -> list[PersonGroup]:
        """Group the faces; on failure leave no groups and set ``error``."""
        try:
            self.groups = cluster_faces(self.images, self.extractor)
            self.error = None
        except Exception as exc:
            logger.error("Error in processing faces: %s", exc)
            self.groups = []
            self.error = GROUPING_ERROR
        finally:
            self.loading = False
        return self.groups

    def group(self, group_id: int) -> PersonGroup:
        for group in self.groups:
            if group.id == group_id:
                return group
        raise KeyError(f"No person group with id {group_id}")

    def open_person(self, group_id: int) -> dict[str, Any]:
        """Return the payload for the person's photo screen."""
        return person_photos_payload(self.group(group_id))


class PersonPhotosScreen:
    """One person's photos, selectable for export.

    Selection is keyed by the source photo URI, since the source photo is
    what gets shared. The whole selection is shared at once.
    """

    SHARE_MODE = ShareMode.MULTI

    def __init__(self, payload: dict[str, Any]) -> None:
        self.person_name, self.photos = parse_person_photos_payload(payload)
        self.selection = SelectionStore()

    @property
    def subtitle(self) -> str:
        count = len(self.photos)
        return f"{count} Photo{'s' if count != 1 else ''}"

    def toggle(self, uri: str) -> bool:
        return self.selection.toggle(uri)

    def is_selected(self, photo: FaceCrop) -> bool:
        return self.selection.is_selected(photo.source_uri)

    def selected_photos(self) -> list[FaceCrop]:
        return self.selection.selected_subset(self.photos, lambda p: p.source_uri)

    def selected_uris(self) -> list[str]:
        # Several crops can come from one photo; share that photo once.
        return list(dict.fromkeys(photo.source_uri for photo in self.selected_photos()))

    def share(self, coordinator: ExportCoordinator) -> ShareOutcome:
        return coordinator.share(self.selected_uris(), self.person_name, self.SHARE_MODE)
