"""Tests for pipeline orchestration."""

import pytest
from conftest import FakeCropper, FakeDetector, make_bounds

from face_groups.errors import EmptyResultError, NothingPickedError, PermissionDeniedError
from face_groups.extraction.extractor import FaceExtractor
from face_groups.models import ImageAsset
from face_groups.picker import ImagePicker
from face_groups.pipeline.runner import process_images, run_pipeline


def test_process_images_without_images():
    with pytest.raises(NothingPickedError):
        process_images(FakeDetector({}), [])


def test_process_images_no_faces_found():
    with pytest.raises(EmptyResultError) as exc_info:
        process_images(FakeDetector({}), [ImageAsset("a.jpg", 10, 10)])
    assert "No faces found" in exc_info.value.message


def test_process_images_returns_annotated():
    detector = FakeDetector({"a.jpg": [make_bounds(0, 0, 5, 5)]})
    annotated = process_images(detector, [ImageAsset("a.jpg", 10, 10), ImageAsset("b.jpg", 10, 10)])
    assert [image.uri for image in annotated] == ["a.jpg"]


def test_run_pipeline_end_to_end(make_image, tmp_path):
    a = str(make_image("A.jpg"))
    b = str(make_image("B.jpg"))
    c = str(make_image("C.jpg"))
    detector = FakeDetector(
        {
            a: [make_bounds(10, 10, 20, 20), make_bounds(50, 10, 20, 20)],
            b: [],
            c: [make_bounds(5, 5, 30, 30)],
        }
    )

    result = run_pipeline(
        [a, b, c],
        ImagePicker(download_dir=tmp_path / "dl"),
        detector,
        FaceExtractor(FakeCropper()),
    )

    assert [image.uri for image in result.images] == [a, b, c]
    assert [image.uri for image in result.annotated] == [a, c]
    assert [(g.id, g.source_image, len(g.photos)) for g in result.groups] == [(1, a, 2), (2, c, 1)]


def test_run_pipeline_permission_denied(tmp_path):
    with pytest.raises(PermissionDeniedError):
        run_pipeline(
            ["a.jpg"],
            ImagePicker(root=tmp_path / "missing"),
            FakeDetector({}),
            FaceExtractor(FakeCropper()),
        )


def test_run_pipeline_single_image_without_faces_stops_before_grouping(make_image, tmp_path):
    a = str(make_image("A.jpg"))
    cropper = FakeCropper()
    with pytest.raises(EmptyResultError):
        run_pipeline([a], ImagePicker(download_dir=tmp_path / "dl"), FakeDetector({}), FaceExtractor(cropper))
    assert cropper.calls == []
