"""Data models for images, detected faces and person groups.

Screens hand results to each other as plain JSON-compatible payloads; the
``*_payload`` helpers at the bottom of this module build and parse them.
Parsing a payload built here gives back equal objects.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class FaceBounds:
    """Axis-aligned face rectangle in its source image's coordinate space."""

    origin: Point
    size: Size

    @classmethod
    def from_xyxy(cls, x1: float, y1: float, x2: float, y2: float) -> "FaceBounds":
        """Build bounds from a corner box as returned by most detectors."""
        return cls(
            origin=Point(float(x1), float(y1)),
            size=Size(float(x2) - float(x1), float(y2) - float(y1)),
        )


@dataclass(frozen=True)
class CropRect:
    """Rectangle handed to the cropper, in source image pixels."""

    origin_x: float
    origin_y: float
    width: float
    height: float


@dataclass(frozen=True)
class ImageAsset:
    """A picked image."""

    uri: str
    width: int
    height: int


@dataclass(frozen=True)
class AnnotatedImage:
    """A picked image together with the faces found in it."""

    uri: str
    width: int
    height: int
    faces: tuple[FaceBounds, ...]

    @classmethod
    def from_asset(cls, asset: ImageAsset, faces: list[FaceBounds]) -> "AnnotatedImage":
        return cls(uri=asset.uri, width=asset.width, height=asset.height, faces=tuple(faces))


@dataclass(frozen=True)
class FaceCrop:
    """A single face instance tied to its originating image."""

    source_uri: str
    face_uri: str
    bounds: FaceBounds


@dataclass(frozen=True)
class PersonGroup:
    """Face crops assumed to depict the same person."""

    id: int
    name: str
    source_image: str
    thumbnail: str
    photos: tuple[FaceCrop, ...]


# ── Handoff payloads ─────────────────────────────────────────────────


def bounds_to_payload(bounds: FaceBounds) -> dict[str, Any]:
    return {
        "origin": {"x": bounds.origin.x, "y": bounds.origin.y},
        "size": {"width": bounds.size.width, "height": bounds.size.height},
    }


def bounds_from_payload(data: dict[str, Any]) -> FaceBounds:
    return FaceBounds(
        origin=Point(data["origin"]["x"], data["origin"]["y"]),
        size=Size(data["size"]["width"], data["size"]["height"]),
    )


def annotated_image_to_payload(image: AnnotatedImage) -> dict[str, Any]:
    return {
        "uri": image.uri,
        "width": image.width,
        "height": image.height,
        "faces": [{"bounds": bounds_to_payload(face)} for face in image.faces],
    }


def annotated_image_from_payload(data: dict[str, Any]) -> AnnotatedImage:
    return AnnotatedImage(
        uri=data["uri"],
        width=data["width"],
        height=data["height"],
        faces=tuple(bounds_from_payload(face["bounds"]) for face in data["faces"]),
    )


def face_crop_to_payload(crop: FaceCrop) -> dict[str, Any]:
    return {
        "uri": crop.source_uri,
        "faceUri": crop.face_uri,
        "bounds": bounds_to_payload(crop.bounds),
    }


def face_crop_from_payload(data: dict[str, Any]) -> FaceCrop:
    return FaceCrop(
        source_uri=data["uri"],
        face_uri=data["faceUri"],
        bounds=bounds_from_payload(data["bounds"]),
    )


def face_groups_payload(images: list[AnnotatedImage]) -> dict[str, Any]:
    """Payload sent from the photo selection screen to the groups screen."""
    return {
        "processedImages": [annotated_image_to_payload(image) for image in images],
        "totalImages": len(images),
    }


def parse_face_groups_payload(payload: dict[str, Any]) -> list[AnnotatedImage]:
    return [annotated_image_from_payload(item) for item in payload["processedImages"]]


def person_photos_payload(group: PersonGroup) -> dict[str, Any]:
    """Payload sent from the groups screen to a person's photo screen.

    The photo list is serialized into fresh dicts, so the receiver owns a copy.
    """
    return {
        "personName": group.name,
        "photos": [face_crop_to_payload(crop) for crop in group.photos],
    }


def parse_person_photos_payload(payload: dict[str, Any]) -> tuple[str, list[FaceCrop]]:
    return payload["personName"], [face_crop_from_payload(p) for p in payload["photos"]]
