"""
Maison Catalog API: Cloudinary Image Host
===========================================

What:  Concrete ImageHost backed by the Cloudinary upload API.
How:   The SDK is synchronous, so each call runs in a worker thread via
       asyncio.to_thread; concurrent uploads in one request therefore
       overlap on the network instead of queuing on the event loop.
Who:   Created once by the app factory and injected into the routes.

Upload policy:
    No retries and no timeout override on upload; a failed transfer fails
    the request. Deletes (compensating cleanup only) are retried with
    exponential backoff because nobody is waiting on them.

Credentials:
    Passed on every call instead of through cloudinary.config(), so the
    credential set lives on this instance rather than in SDK module state.
"""

import asyncio
import io
import logging
from typing import Any, Dict

import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from maison.config import Settings, settings
from maison.exceptions import UploadError
from maison.services.image_host_base import ImageHost, UploadResult

logger = logging.getLogger(__name__)


class CloudinaryImageHost(ImageHost):
    """Uploads product and hero images to Cloudinary."""

    def __init__(self, config: Settings = settings):
        self.configured = config.cloudinary_configured
        self._credentials: Dict[str, Any] = {
            "cloud_name": config.cloudinary_cloud_name,
            "api_key": config.cloudinary_api_key,
            "api_secret": config.cloudinary_api_secret,
            "secure": True,
        }
        logger.info(
            "CloudinaryImageHost initialized (cloud=%s, configured=%s)",
            config.cloudinary_cloud_name or "<unset>",
            self.configured,
        )

    async def upload(self, buffer: bytes, folder: str) -> UploadResult:
        """
        Stream `buffer` to Cloudinary under `folder`.

        Returns:
            UploadResult whose url is the response's `secure_url`

        Raises:
            UploadError: Cloudinary rejected the file, credentials are wrong,
                         or the connection failed
        """
        try:
            response = await asyncio.to_thread(
                cloudinary.uploader.upload,
                io.BytesIO(buffer),
                folder=folder,
                **self._credentials,
            )
        except CloudinaryError as e:
            logger.error("Cloudinary rejected upload to '%s': %s", folder, str(e))
            raise UploadError(
                context={"folder": folder, "size": len(buffer), "error": str(e)},
            )
        except Exception as e:
            logger.error(
                "Upload to '%s' failed: %s", folder, str(e), exc_info=True,
            )
            raise UploadError(
                context={"folder": folder, "size": len(buffer), "error_type": type(e).__name__},
            )

        url = response.get("secure_url")
        if not url:
            raise UploadError(
                message="Image host returned no URL for the uploaded image.",
                context={"folder": folder, "response_keys": sorted(response)},
            )

        metadata = {k: v for k, v in response.items() if k not in ("secure_url", "public_id")}
        logger.info(
            "Uploaded %d bytes to %s (%s)", len(buffer), response.get("public_id"), folder,
        )
        return UploadResult(url=url, public_id=response.get("public_id", ""), metadata=metadata)

    async def destroy(self, public_id: str) -> bool:
        try:
            await self._destroy_with_retry(public_id)
            logger.info("Deleted orphaned image %s", public_id)
            return True
        except Exception as e:
            logger.warning("Failed to delete orphaned image %s: %s", public_id, str(e))
            return False

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(settings.cleanup_max_attempts),
        wait=wait_exponential(multiplier=settings.cleanup_min_wait, max=settings.cleanup_max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _destroy_with_retry(self, public_id: str) -> None:
        response = await asyncio.to_thread(
            cloudinary.uploader.destroy, public_id, **self._credentials,
        )
        result = response.get("result")
        # "not found" means there is nothing left to clean up
        if result not in ("ok", "not found"):
            raise CloudinaryError(f"Unexpected destroy result: {result!r}")

    async def health_check(self) -> str:
        """Pings the Admin API; skipped when credentials are missing."""
        if not self.configured:
            return "unconfigured"
        try:
            await asyncio.to_thread(cloudinary.api.ping, **self._credentials)
            return "available"
        except Exception as e:
            logger.warning("Cloudinary health check failed: %s", str(e))
            return "unavailable"
