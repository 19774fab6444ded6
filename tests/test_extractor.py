"""Tests for face crop geometry and the face extractor."""

import pytest
from conftest import FakeCropper, make_bounds

from face_groups.extraction.extractor import FaceExtractor, compute_crop_rect
from face_groups.models import CropRect


def test_compute_crop_rect_pads_by_shorter_side():
    rect = compute_crop_rect(make_bounds(100, 200, 50, 80))
    # padding = 0.2 * 50 = 10
    assert rect == CropRect(origin_x=90, origin_y=190, width=70, height=100)


def test_compute_crop_rect_clamps_origin_at_zero():
    rect = compute_crop_rect(make_bounds(3, 0, 100, 100))
    assert rect.origin_x == 0
    assert rect.origin_y == 0
    # Size is padded on both sides even when the origin was clamped
    assert rect.width == pytest.approx(140)
    assert rect.height == pytest.approx(140)


def test_compute_crop_rect_does_not_clamp_right_edge():
    rect = compute_crop_rect(make_bounds(600, 400, 100, 100))
    assert rect.origin_x + rect.width == pytest.approx(720)


@pytest.mark.parametrize(
    "bounds",
    [make_bounds(0, 0, 10, 10), make_bounds(-5, -7, 20, 30), make_bounds(1, 2, 0, 0)],
)
def test_compute_crop_rect_never_negative(bounds):
    rect = compute_crop_rect(bounds)
    assert rect.origin_x >= 0
    assert rect.origin_y >= 0
    assert rect.width >= 0
    assert rect.height >= 0


def test_extract_passes_rect_and_compression_to_cropper():
    cropper = FakeCropper()
    extractor = FaceExtractor(cropper)

    face_uri = extractor.extract("a.jpg", make_bounds(100, 200, 50, 80))

    assert face_uri == "crop://a.jpg/90,190,70,100"
    uri, rect, compress, image_format = cropper.calls[0]
    assert uri == "a.jpg"
    assert rect == CropRect(90, 190, 70, 100)
    assert compress == 0.8
    assert image_format == "jpeg"


def test_extract_returns_none_on_cropper_error():
    extractor = FaceExtractor(FakeCropper(failing_uris={"broken.jpg"}))
    assert extractor.extract("broken.jpg", make_bounds(0, 0, 10, 10)) is None


def test_extract_returns_none_on_unexpected_error():
    extractor = FaceExtractor(FakeCropper(fail_every=1))
    assert extractor.extract("a.jpg", make_bounds(0, 0, 10, 10)) is None


def test_negative_padding_rejected():
    with pytest.raises(ValueError):
        FaceExtractor(FakeCropper(), padding_ratio=-0.1)
