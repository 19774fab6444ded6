"""Share targets for exported photos."""

import logging
import shutil
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from face_groups.config import EXPORT_DIR
from face_groups.errors import ShareError

logger = logging.getLogger(__name__)


class ShareAction(StrEnum):
    SHARED = "sharedAction"
    DISMISSED = "dismissedAction"


class ShareService(Protocol):
    """A platform share surface."""

    def share(self, message: str, urls: list[str]) -> ShareAction:
        """Share several URIs at once, with an accompanying message."""
        ...

    def share_single(self, uri: str) -> None:
        """Share exactly one URI, for surfaces that only take one."""
        ...


class FolderShareService:
    """Share by copying photos into a folder under ``target_dir``."""

    def __init__(self, target_dir: str | Path | None = None) -> None:
        self.target_dir = Path(target_dir or EXPORT_DIR)

    def share(self, message: str, urls: list[str]) -> ShareAction:
        """Copy ``urls`` into a folder named after ``message``."""
        if not urls:
            return ShareAction.DISMISSED
        dest_dir = self.target_dir / (_sanitize_dirname(message) or "shared")
        dest_dir.mkdir(parents=True, exist_ok=True)
        for url in urls:
            _copy_into(Path(url), dest_dir)
        (dest_dir / "message.txt").write_text(message + "\n", encoding="utf-8")
        logger.info("Shared %d photos to %s", len(urls), dest_dir)
        return ShareAction.SHARED

    def share_single(self, uri: str) -> None:
        self.target_dir.mkdir(parents=True, exist_ok=True)
        dest = _copy_into(Path(uri), self.target_dir)
        logger.info("Shared %s", dest)


def _copy_into(src: Path, dest_dir: Path) -> Path:
    if not src.is_file():
        raise ShareError(f"Photo not found: {src}")
    dest = dest_dir / src.name
    counter = 1
    while dest.exists():
        dest = dest_dir / f"{src.stem}_{counter}{src.suffix}"
        counter += 1
    try:
        shutil.copy2(src, dest)
    except OSError as exc:
        raise ShareError(f"Error copying {src}: {exc}") from exc
    return dest


def _sanitize_dirname(name: str) -> str:
    """Convert a share label to a safe directory name."""
    safe = "".join(c if c.isalnum() or c in "-_ " else "" for c in name)
    return safe.strip().replace(" ", "_").lower()
