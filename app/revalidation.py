# app/revalidation.py
"""Path revalidation signal.

Mutations report success by marking a logical path stale and, for form
submissions, asking the client to navigate there.
"""

import logging
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class PathRevalidator(Protocol):
    def revalidate(self, path: str, navigate: bool = False) -> None: ...


class ResponseRevalidator:
    """Collects the signals raised while handling one request.

    The router turns ``redirect_to`` into a 303 and ``stale_paths`` into the
    ``X-Revalidated-Paths`` header.
    """

    def __init__(self) -> None:
        self.stale_paths: List[str] = []
        self.redirect_to: Optional[str] = None

    def revalidate(self, path: str, navigate: bool = False) -> None:
        if path not in self.stale_paths:
            self.stale_paths.append(path)
        if navigate:
            self.redirect_to = path
        logger.debug("Revalidated %s (navigate=%s)", path, navigate)

    def header_value(self) -> Optional[str]:
        return ",".join(self.stale_paths) if self.stale_paths else None


__all__ = ["PathRevalidator", "ResponseRevalidator"]
