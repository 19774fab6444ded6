"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("FACE_GROUPS_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

DATA_DIR = Path(os.environ.get("FACE_GROUPS_DATA_DIR", PROJECT_ROOT / "data"))
CROP_DIR = DATA_DIR / "crops"
DOWNLOAD_DIR = DATA_DIR / "downloads"
EXPORT_DIR = DATA_DIR / "exports"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".webp")

# Face detection – InsightFace
INSIGHTFACE_MODEL_NAME = os.environ.get("FACE_GROUPS_INSIGHTFACE_MODEL", "buffalo_l")
DETECTOR_DEVICE = os.environ.get("FACE_GROUPS_DEVICE", "cuda")

# Input resolution per detector mode
DETECTION_SIZES: dict[str, tuple[int, int]] = {
    "fast": (320, 320),
    "accurate": (640, 640),
}

# Face crops
FACE_PADDING_RATIO = 0.2
CROP_COMPRESS = 0.8
CROP_FORMAT = "jpeg"

# Remote images
HTTP_TIMEOUT = 120

LOG_LEVEL = os.environ.get("FACE_GROUPS_LOG_LEVEL", "INFO")
