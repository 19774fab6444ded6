"""Pillow-backed image cropper producing compressed face crops."""

import math
import shutil
import uuid
from pathlib import Path
from typing import Protocol

from PIL import Image, ImageOps

from face_groups.config import CROP_COMPRESS, CROP_DIR, CROP_FORMAT
from face_groups.errors import ExtractionError
from face_groups.models import CropRect

_FORMATS: dict[str, tuple[str, str]] = {
    "jpeg": ("JPEG", ".jpg"),
    "png": ("PNG", ".png"),
}


class Cropper(Protocol):
    """Anything that crops an image region into a new image."""

    def crop(
        self,
        uri: str,
        rect: CropRect,
        *,
        compress: float = CROP_COMPRESS,
        image_format: str = CROP_FORMAT,
    ) -> str:
        """Crop ``rect`` out of the image at ``uri`` and return the new URI."""
        ...


class PillowCropper:
    """Write crops as new files under ``output_dir``."""

    def __init__(self, output_dir: str | Path | None = None) -> None:
        self.output_dir = Path(output_dir or CROP_DIR)

    @classmethod
    def for_run(cls, base_dir: str | Path | None = None) -> "PillowCropper":
        """Cropper writing into a fresh run folder under ``base_dir``."""
        return cls(Path(base_dir or CROP_DIR) / uuid.uuid4().hex)

    def discard(self) -> None:
        """Delete ``output_dir`` together with every crop written to it."""
        shutil.rmtree(self.output_dir, ignore_errors=True)

    def crop(
        self,
        uri: str,
        rect: CropRect,
        *,
        compress: float = CROP_COMPRESS,
        image_format: str = CROP_FORMAT,
    ) -> str:
        """Crop, compress and save a region of an image.

        The image is read upright (EXIF orientation applied), the same way
        the detector sees it. The rectangle is clamped against that size
        here; callers only guarantee a non-negative origin.

        Raises:
            ExtractionError: The image cannot be read or written, or the
                clamped rectangle is empty.
        """
        if image_format not in _FORMATS:
            raise ExtractionError(f"Unsupported crop format: {image_format}")
        pil_format, suffix = _FORMATS[image_format]

        try:
            with Image.open(uri) as raw:
                img = ImageOps.exif_transpose(raw)
                box = _clamp_box(rect, img.width, img.height)
                if box is None:
                    raise ExtractionError(f"Empty crop rectangle for {uri}: {rect}")
                cropped = img.crop(box)
                if pil_format == "JPEG":
                    cropped = cropped.convert("RGB")

                self.output_dir.mkdir(parents=True, exist_ok=True)
                out_path = self.output_dir / f"{uuid.uuid4().hex}{suffix}"
                cropped.save(out_path, format=pil_format, quality=round(compress * 100))
        except OSError as exc:
            raise ExtractionError(f"Error cropping {uri}: {exc}") from exc

        return str(out_path)


def _clamp_box(rect: CropRect, width: int, height: int) -> tuple[int, int, int, int] | None:
    left = max(0, math.floor(rect.origin_x))
    top = max(0, math.floor(rect.origin_y))
    right = min(width, math.ceil(rect.origin_x + rect.width))
    bottom = min(height, math.ceil(rect.origin_y + rect.height))
    if right <= left or bottom <= top:
        return None
    return left, top, right, bottom
