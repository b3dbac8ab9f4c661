"""
Maison Catalog API: Abstract Image Host Interface
===================================================

What:  Contract for the boundary component that sends image bytes to a remote
       hosting service and returns the public URL.
Why:   Services depend on this interface, never on the Cloudinary SDK, so the
       app factory can inject the real adapter and tests can inject a fake.
How:   Concrete hosts implement `upload`, `destroy` and `health_check`; the
       concurrent batch helpers are shared here.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """
    What the host returned for one stored image.

    url:        Public HTTPS URL persisted on the record
    public_id:  Host-side identifier, needed to delete the image later
    metadata:   Remaining host response (format, dimensions, bytes, ...)
    """
    url: str
    public_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class ImageHost(ABC):
    """
    Abstract interface for remote image storage.

    Contract:
        - upload() forwards raw bytes without local validation
        - Any rejection or transport failure surfaces as UploadError
        - destroy() is best effort and never raises
    """

    @abstractmethod
    async def upload(self, buffer: bytes, folder: str) -> UploadResult:
        """
        Store one image in `folder`.

        Raises:
            UploadError: The host rejected the payload or the transfer failed
        """
        ...

    @abstractmethod
    async def destroy(self, public_id: str) -> bool:
        """Delete one hosted image. Returns False instead of raising on failure."""
        ...

    @abstractmethod
    async def health_check(self) -> str:
        """Returns 'available', 'unavailable' or 'unconfigured'."""
        ...

    async def upload_many(self, buffers: Sequence[bytes], folder: str) -> List[UploadResult]:
        """
        Upload every buffer concurrently.

        Results are in submission order, not completion order. The first
        failure propagates immediately; there is no partial-success result.
        """
        results = await asyncio.gather(*(self.upload(buffer, folder) for buffer in buffers))
        logger.info("Uploaded %d image(s) to folder '%s'", len(results), folder)
        return list(results)

    async def destroy_many(self, public_ids: Sequence[str]) -> int:
        """
        Compensating cleanup for images that no record will reference.

        Returns the number of images actually deleted.
        """
        if not public_ids:
            return 0
        outcomes = await asyncio.gather(*(self.destroy(pid) for pid in public_ids))
        deleted = sum(1 for ok in outcomes if ok)
        if deleted < len(public_ids):
            logger.warning(
                "Cleanup removed %d of %d orphaned image(s)", deleted, len(public_ids)
            )
        return deleted
