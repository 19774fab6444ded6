"""Group face crops into person groups.

The grouping key is the source image: every face cropped from the same photo
joins that photo's group, and every photo starts a group of its own. This
stands in for similarity-based identity clustering, so two people in one
photo share a group and one person across two photos gets two groups.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from face_groups.extraction.extractor import FaceExtractor
from face_groups.models import AnnotatedImage, FaceCrop, PersonGroup

logger = logging.getLogger(__name__)


@dataclass
class _GroupBuilder:
    """Mutable group under construction, local to one clustering pass."""

    id: int
    source_image: str
    thumbnail: str
    photos: list[FaceCrop] = field(default_factory=list)

    def matches(self, crop: FaceCrop) -> bool:
        return self.source_image == crop.source_uri

    def build(self) -> PersonGroup:
        return PersonGroup(
            id=self.id,
            name=f"Person {self.id}",
            source_image=self.source_image,
            thumbnail=self.thumbnail,
            photos=tuple(self.photos),
        )


def iter_face_crops(
    images: Iterable[AnnotatedImage], extractor: FaceExtractor
) -> Iterator[FaceCrop]:
    """Crop every face in order, skipping faces whose extraction failed."""
    for image in images:
        logger.debug("Processing image: %s", image.uri)
        for bounds in image.faces:
            face_uri = extractor.extract(image.uri, bounds)
            if face_uri is None:
                continue
            yield FaceCrop(source_uri=image.uri, face_uri=face_uri, bounds=bounds)


def group_face_crops(crops: Iterable[FaceCrop]) -> list[PersonGroup]:
    """Assign crops to groups in arrival order; ids start at 1."""
    builders: list[_GroupBuilder] = []
    next_id = 1
    for crop in crops:
        for builder in builders:
            if builder.matches(crop):
                builder.photos.append(crop)
                break
        else:
            builders.append(
                _GroupBuilder(
                    id=next_id,
                    source_image=crop.source_uri,
                    thumbnail=crop.face_uri,
                    photos=[crop],
                )
            )
            next_id += 1

    logger.info("Created groups: %d", len(builders))
    return [builder.build() for builder in builders]


def cluster_faces(images: Iterable[AnnotatedImage], extractor: FaceExtractor) -> list[PersonGroup]:
    """Extract faces from annotated images and group them into people."""
    return group_face_crops(iter_face_crops(images, extractor))
