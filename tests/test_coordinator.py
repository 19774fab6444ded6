"""Tests for the export coordinator."""

from conftest import RecordingShareService

from face_groups.errors import ShareError
from face_groups.sharing.coordinator import ExportCoordinator, ShareMode
from face_groups.sharing.service import ShareAction


def test_empty_selection_is_rejected_without_sharing(share_service):
    outcome = ExportCoordinator(share_service).share([], "Person 1", ShareMode.MULTI)

    assert not outcome.success
    assert outcome.message == "Please select photos to share"
    assert share_service.shared == []
    assert share_service.shared_single == []


def test_multi_shares_every_uri(share_service):
    outcome = ExportCoordinator(share_service).share(["a.jpg", "b.jpg"], "Person 1", ShareMode.MULTI)

    assert outcome.success
    assert outcome.shared == ("a.jpg", "b.jpg")
    assert outcome.message == "Shared 2 photos"
    assert share_service.shared == [("Photos of Person 1", ["a.jpg", "b.jpg"])]


def test_single_shares_first_uri_only(share_service):
    outcome = ExportCoordinator(share_service).share(["a.jpg", "b.jpg"], "results", ShareMode.SINGLE)

    assert outcome.success
    assert outcome.shared == ("a.jpg",)
    assert outcome.message == "Shared 1 photo"
    assert share_service.shared_single == ["a.jpg"]
    assert share_service.shared == []


def test_share_error_is_reported_not_raised():
    service = RecordingShareService(error=ShareError("Photo not found: a.jpg"))
    outcome = ExportCoordinator(service).share(["a.jpg"], "Person 1", ShareMode.MULTI)

    assert not outcome.success
    assert outcome.message == "Error sharing photos"


def test_platform_error_is_reported_not_raised():
    service = RecordingShareService(error=RuntimeError("share sheet crashed"))
    outcome = ExportCoordinator(service).share(["a.jpg"], "x", ShareMode.SINGLE)

    assert not outcome.success
    assert outcome.message == "Error sharing photos"


def test_dismissed_share_is_a_failure():
    service = RecordingShareService(action=ShareAction.DISMISSED)
    outcome = ExportCoordinator(service).share(["a.jpg"], "Person 1", ShareMode.MULTI)

    assert not outcome.success
    assert outcome.message == "Sharing cancelled"


def test_share_does_not_mutate_input(share_service):
    selected = ["a.jpg", "b.jpg"]
    ExportCoordinator(share_service).share(selected, "Person 1", ShareMode.MULTI)
    assert selected == ["a.jpg", "b.jpg"]
