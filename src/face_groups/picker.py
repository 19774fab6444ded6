"""Pick images from local files, folders or remote URLs."""

import logging
import os
import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import httpx
from PIL import Image, ImageOps
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from face_groups.config import CROP_DIR, DOWNLOAD_DIR, HTTP_TIMEOUT, IMAGE_EXTENSIONS
from face_groups.errors import PermissionDeniedError
from face_groups.models import ImageAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionResult:
    granted: bool


class ImagePicker:
    """Resolve user-chosen sources into an ordered list of image assets.

    Relative local sources are resolved against ``root``, and local sources
    that end up outside ``root`` and ``allow`` are skipped. Remote sources are
    downloaded once into ``download_dir`` and then treated as local files.
    Folder walks leave out ``exclude`` (the face crop folder by default).
    """

    def __init__(
        self,
        root: str | Path | None = None,
        download_dir: str | Path | None = None,
        timeout: int = HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
        exclude: Iterable[str | Path] = (CROP_DIR,),
        allow: Iterable[str | Path] = (),
    ) -> None:
        self.root = Path(root) if root is not None else None
        self.download_dir = Path(download_dir or DOWNLOAD_DIR)
        self.exclude = tuple(exclude)
        self.allow = tuple(Path(p) for p in allow)
        self.timeout = timeout
        self.transport = transport

    def request_permission(self) -> PermissionResult:
        """Check that the library root can be listed and read."""
        if self.root is None:
            return PermissionResult(granted=True)
        granted = self.root.is_dir() and os.access(self.root, os.R_OK | os.X_OK)
        return PermissionResult(granted=granted)

    def launch(self, sources: Iterable[str | Path]) -> list[ImageAsset]:
        """Return assets for every readable image in ``sources``, in order."""
        assets: list[ImageAsset] = []
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            for path in self._iter_paths(sources, client):
                asset = _read_asset(path)
                if asset is not None:
                    assets.append(asset)
        logger.info("Selected images: %d", len(assets))
        return assets

    def _iter_paths(self, sources: Iterable[str | Path], client: httpx.Client) -> Iterator[Path]:
        for source in sources:
            text = str(source)
            if text.startswith(("http://", "https://")):
                path = self._fetch(client, text)
                if path is not None:
                    yield path
                continue

            path = Path(source)
            if self.root is not None:
                if not path.is_absolute():
                    path = self.root / path
                if not self._is_permitted(path):
                    logger.warning("Skipping source outside %s: %s", self.root, path)
                    continue
            if path.is_dir():
                yield from iter_image_paths(path, exclude=self.exclude)
            elif path.is_file():
                yield path
            else:
                logger.warning("Skipping missing source: %s", path)

    def _is_permitted(self, path: Path) -> bool:
        resolved = path.resolve()
        return any(resolved.is_relative_to(folder.resolve()) for folder in (self.root, *self.allow))

    def _fetch(self, client: httpx.Client, url: str) -> Path | None:
        suffix = Path(httpx.URL(url).path).suffix.lower()
        if suffix not in IMAGE_EXTENSIONS:
            suffix = ".jpg"
        local_path = self.download_dir / f"{uuid.uuid5(uuid.NAMESPACE_URL, url).hex}{suffix}"
        if local_path.exists():
            return local_path

        try:
            content = _download(client, url)
        except httpx.HTTPError as exc:
            logger.warning("Error downloading %s: %s", url, exc)
            return None

        self.download_dir.mkdir(parents=True, exist_ok=True)
        local_path.write_bytes(content)
        return local_path


def pick_images(picker: ImagePicker, sources: Iterable[str | Path]) -> list[ImageAsset]:
    """Ask for permission, then launch the picker.

    Raises:
        PermissionDeniedError: The picker root is not readable.
    """
    if not picker.request_permission().granted:
        raise PermissionDeniedError()
    return picker.launch(sources)


def iter_image_paths(root: Path, exclude: Iterable[str | Path] = ()) -> Iterator[Path]:
    """Yield image files under ``root`` in a stable, sorted order.

    Files inside any of the ``exclude`` folders are left out.
    """
    excluded = [Path(p).resolve() for p in exclude]
    for path in sorted(root.rglob("*")):
        if not path.is_file() or path.suffix.lower() not in IMAGE_EXTENSIONS:
            continue
        resolved = path.resolve()
        if any(resolved.is_relative_to(folder) for folder in excluded):
            continue
        yield path


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, max=10),
    retry=retry_if_exception_type(httpx.TimeoutException),
    reraise=True,
)
def _download(client: httpx.Client, url: str) -> bytes:
    resp = client.get(url)
    resp.raise_for_status()
    return resp.content


def _read_asset(path: Path) -> ImageAsset | None:
    try:
        with Image.open(path) as raw:
            width, height = ImageOps.exif_transpose(raw).size
    except OSError:
        logger.warning("Skipping unreadable image: %s", path)
        return None
    return ImageAsset(uri=str(path), width=width, height=height)
