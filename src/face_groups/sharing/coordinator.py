"""Hand the current selection to a share service.

Call sites choose a ShareMode explicitly. ``MULTI`` shares the whole
selection. ``SINGLE`` shares only the first selected URI and exists for
share surfaces that accept one item at a time; it is never a silent
fallback.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from face_groups.errors import NothingSelectedError, ShareCancelledError, ShareError
from face_groups.sharing.service import ShareAction, ShareService

logger = logging.getLogger(__name__)


class ShareMode(Enum):
    MULTI = "multi"
    SINGLE = "single"


@dataclass(frozen=True)
class ShareOutcome:
    """Result of one share attempt, ready to show to the user."""

    success: bool
    message: str
    shared: tuple[str, ...] = ()


class ExportCoordinator:
    def __init__(self, service: ShareService) -> None:
        self.service = service

    def share(self, selected_uris: Sequence[str], label: str, mode: ShareMode) -> ShareOutcome:
        """Share ``selected_uris``; never raises and never touches the selection."""
        if not selected_uris:
            return ShareOutcome(success=False, message=NothingSelectedError().message)

        try:
            if mode is ShareMode.SINGLE:
                uri = selected_uris[0]
                self.service.share_single(uri)
                shared: tuple[str, ...] = (uri,)
            else:
                urls = list(selected_uris)
                action = self.service.share(message=f"Photos of {label}", urls=urls)
                if action == ShareAction.DISMISSED:
                    raise ShareCancelledError()
                shared = tuple(urls)
        except ShareCancelledError as exc:
            logger.info("Sharing cancelled for %s", label)
            return ShareOutcome(success=False, message=exc.message)
        except Exception as exc:
            logger.error("Error sharing photos: %s", exc)
            return ShareOutcome(success=False, message=ShareError().message)

        logger.info("Shared successfully: %d photos", len(shared))
        noun = "photo" if len(shared) == 1 else "photos"
        return ShareOutcome(success=True, message=f"Shared {len(shared)} {noun}", shared=shared)
