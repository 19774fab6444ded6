"""Error taxonomy for the face grouping pipeline.

Every collaborator adapter raises one of these. The pipeline stages catch
them where they call the collaborator and either skip the item or surface
``message`` to the user; none of them ends the process.
"""


class FaceGroupsError(Exception):
    """Base class for all pipeline errors."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class PermissionDeniedError(FaceGroupsError):
    """The image picker was not allowed to read the photo library."""

    default_message = "Permission to access camera roll is required!"


class DetectionError(FaceGroupsError):
    """The face detector failed on a single image."""

    default_message = "Error detecting faces."


class ExtractionError(FaceGroupsError):
    """The cropper failed to produce a face crop."""

    default_message = "Error extracting face."


class EmptyResultError(FaceGroupsError):
    """No face was found in any image of the batch."""

    default_message = "No faces found in selected images. Please try different photos."


class NothingSelectedError(FaceGroupsError):
    """Export was requested with an empty selection."""

    default_message = "Please select photos to share"


class ShareError(FaceGroupsError):
    """The share service failed or was cancelled."""

    default_message = "Error sharing photos"


class ShareCancelledError(ShareError):
    """The user dismissed the share target without sharing."""

    default_message = "Sharing cancelled"


class NothingPickedError(FaceGroupsError):
    """Processing was requested before any image was picked."""

    default_message = "Please select some images first"
