"""Face detector contract and detection options."""

from dataclasses import dataclass
from typing import Literal, Protocol

from face_groups.models import FaceBounds


@dataclass(frozen=True)
class DetectorOptions:
    """How the detector is asked to run.

    The defaults describe a batch over still photos: fast mode, bounding boxes
    only, no landmarks, no attribute classification and no tracking.
    """

    mode: Literal["fast", "accurate"] = "fast"
    landmarks: Literal["none", "all"] = "none"
    classifications: Literal["none", "all"] = "none"
    min_interval: int = 0
    tracking: bool = False


class FaceDetector(Protocol):
    """Anything that turns an image URI into face bounds."""

    options: DetectorOptions

    def detect(self, uri: str) -> list[FaceBounds]:
        """Return the faces found in the image at ``uri``, possibly none."""
        ...
