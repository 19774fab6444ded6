"""InsightFace wrapper for one-shot face detection."""

import cv2
from insightface.app import FaceAnalysis

from face_groups.config import DETECTION_SIZES, DETECTOR_DEVICE, INSIGHTFACE_MODEL_NAME
from face_groups.detection.detector import DetectorOptions
from face_groups.errors import DetectionError
from face_groups.models import FaceBounds


class InsightFaceDetector:
    """Detect faces using the InsightFace detection model only."""

    def __init__(
        self,
        model_name: str = INSIGHTFACE_MODEL_NAME,
        device: str = DETECTOR_DEVICE,
        options: DetectorOptions | None = None,
    ) -> None:
        self.options = options or DetectorOptions()
        if self.options.tracking:
            raise ValueError("Tracking is not supported for still images.")
        if self.options.mode not in DETECTION_SIZES:
            raise ValueError(f"Unknown detector mode: {self.options.mode}")

        providers = (
            ["CUDAExecutionProvider", "CPUExecutionProvider"]
            if device == "cuda"
            else ["CPUExecutionProvider"]
        )
        # Without landmarks or classifications only the detection model is
        # loaded; the landmark, age/gender and recognition heads never run.
        bare = self.options.landmarks == "none" and self.options.classifications == "none"
        self.app = FaceAnalysis(
            name=model_name,
            providers=providers,
            allowed_modules=["detection"] if bare else None,
        )
        self.app.prepare(
            ctx_id=0 if device == "cuda" else -1,
            det_size=DETECTION_SIZES[self.options.mode],
        )
        self.model_name = model_name

    def detect(self, uri: str) -> list[FaceBounds]:
        """Detect faces in an image.

        Args:
            uri: Local path of the image file.

        Returns:
            List of FaceBounds, one per detected face, in detector order.

        Raises:
            DetectionError: The image could not be decoded.
        """
        img = cv2.imread(str(uri))
        if img is None:
            raise DetectionError(f"Could not read image: {uri}")

        bounds = []
        for face in self.app.get(img):
            x1, y1, x2, y2 = (float(v) for v in face.bbox[:4])
            bounds.append(FaceBounds.from_xyxy(x1, y1, x2, y2))
        return bounds
