"""Turn a detected face into a padded face crop."""

import logging

from face_groups.config import CROP_COMPRESS, CROP_FORMAT, FACE_PADDING_RATIO
from face_groups.extraction.cropper import Cropper
from face_groups.models import CropRect, FaceBounds

logger = logging.getLogger(__name__)


def compute_crop_rect(bounds: FaceBounds, padding_ratio: float = FACE_PADDING_RATIO) -> CropRect:
    """Pad ``bounds`` on every side by a share of its shorter edge.

    The origin is clamped at zero. Width and height are not clamped against
    the image; the cropper does that with the real image size.
    """
    padding = padding_ratio * min(bounds.size.width, bounds.size.height)
    return CropRect(
        origin_x=max(0.0, bounds.origin.x - padding),
        origin_y=max(0.0, bounds.origin.y - padding),
        width=max(0.0, bounds.size.width + 2 * padding),
        height=max(0.0, bounds.size.height + 2 * padding),
    )


class FaceExtractor:
    """Produce face crops through a cropper, skipping the ones that fail."""

    def __init__(
        self,
        cropper: Cropper,
        padding_ratio: float = FACE_PADDING_RATIO,
        compress: float = CROP_COMPRESS,
        image_format: str = CROP_FORMAT,
    ) -> None:
        if padding_ratio < 0:
            raise ValueError("padding_ratio must not be negative")
        self.cropper = cropper
        self.padding_ratio = padding_ratio
        self.compress = compress
        self.image_format = image_format

    def extract(self, image_uri: str, bounds: FaceBounds) -> str | None:
        """Return the URI of the face crop, or None when cropping failed."""
        rect = compute_crop_rect(bounds, self.padding_ratio)
        try:
            return self.cropper.crop(
                image_uri, rect, compress=self.compress, image_format=self.image_format
            )
        except Exception as exc:
            logger.warning("Error extracting face from %s: %s", image_uri, exc)
            return None
