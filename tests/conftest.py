"""Shared test fixtures."""

from pathlib import Path

import pytest
from PIL import Image

from face_groups.detection.detector import DetectorOptions
from face_groups.errors import ExtractionError
from face_groups.models import AnnotatedImage, CropRect, FaceBounds, Point, Size
from face_groups.sharing.service import ShareAction


def make_bounds(x: float, y: float, width: float, height: float) -> FaceBounds:
    """Helper to create FaceBounds from origin and size."""
    return FaceBounds(origin=Point(x, y), size=Size(width, height))


def make_annotated(uri: str, face_count: int = 1) -> AnnotatedImage:
    """Helper to create an AnnotatedImage with evenly spaced faces."""
    faces = tuple(make_bounds(10 + 60 * i, 20, 50, 50) for i in range(face_count))
    return AnnotatedImage(uri=uri, width=640, height=480, faces=faces)


def save_rotated_jpeg(path: Path, size: tuple[int, int] = (200, 100)) -> Path:
    """Save a JPEG stored sideways with EXIF orientation 6 (display rotated 90° CW).

    The stored left half is red and the right half blue, so upright the top
    half is red and the bottom half blue.
    """
    width, height = size
    img = Image.new("RGB", size, color=(255, 0, 0))
    img.paste((0, 0, 255), (width // 2, 0, width, height))
    exif = Image.Exif()
    exif[0x0112] = 6
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path, format="JPEG", exif=exif)
    return path


class FakeDetector:
    """Detector returning canned faces per URI; an Exception value is raised."""

    def __init__(self, faces_by_uri: dict[str, list[FaceBounds] | Exception]) -> None:
        self.faces_by_uri = faces_by_uri
        self.options = DetectorOptions()
        self.calls: list[str] = []

    def detect(self, uri: str) -> list[FaceBounds]:
        self.calls.append(uri)
        result = self.faces_by_uri.get(uri, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


class FakeCropper:
    """Cropper returning a deterministic URI per (image, rect)."""

    def __init__(self, failing_uris: set[str] | None = None, fail_every: int = 0) -> None:
        self.failing_uris = failing_uris or set()
        self.fail_every = fail_every
        self.calls: list[tuple[str, CropRect, float, str]] = []

    def crop(self, uri: str, rect: CropRect, *, compress: float = 0.8, image_format: str = "jpeg") -> str:
        self.calls.append((uri, rect, compress, image_format))
        if uri in self.failing_uris:
            raise ExtractionError(f"cannot crop {uri}")
        if self.fail_every and len(self.calls) % self.fail_every == 0:
            raise OSError("disk full")
        return f"crop://{uri}/{rect.origin_x:g},{rect.origin_y:g},{rect.width:g},{rect.height:g}"


class RecordingShareService:
    """Share service that records calls and can fail or be dismissed."""

    def __init__(self, error: Exception | None = None, action: ShareAction = ShareAction.SHARED) -> None:
        self.error = error
        self.action = action
        self.shared: list[tuple[str, list[str]]] = []
        self.shared_single: list[str] = []

    def share(self, message: str, urls: list[str]) -> ShareAction:
        if self.error is not None:
            raise self.error
        self.shared.append((message, list(urls)))
        return self.action

    def share_single(self, uri: str) -> None:
        if self.error is not None:
            raise self.error
        self.shared_single.append(uri)


@pytest.fixture
def make_image(tmp_path: Path):
    """Factory writing a solid-color image file under tmp_path."""

    def _make(name: str = "photo.jpg", size: tuple[int, int] = (200, 100)) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color=(200, 120, 40)).save(path)
        return path

    return _make


@pytest.fixture
def fake_cropper() -> FakeCropper:
    return FakeCropper()


@pytest.fixture
def share_service() -> RecordingShareService:
    return RecordingShareService()
