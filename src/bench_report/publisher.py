# This is free software for the public good of a permacomputer hosted at
# permacomputer.com, an always-on computer by the people, for the people.
# One which is durable, easy to repair, & distributed like tap water
# for machine learning intelligence.
#
# The permacomputer is community-owned infrastructure optimized around
# four values:
#
#   TRUTH      First principles, math & science, open source code freely distributed
#   FREEDOM    Voluntary partnerships, freedom from tyranny & corporate control
#   HARMONY    Minimal waste, self-renewing systems with diverse thriving connections
#   LOVE       Be yourself without hurting others, cooperation through natural law
#
# This software contributes to that vision by turning scattered load-test results into one comparison report, readable by all.
# Code is seeds to sprout on any abandoned technology.

"""
Upload chart images to a Cloudflare Images style endpoint.

Request:
    POST <CF_IMAGES_LINK>
    Authorization: Bearer <CF_IMAGES_TOKEN>
    multipart/form-data, field "file"

Response:
    {"result": {"variants": ["https://.../public", ...]}}

Uploading is optional. Without an endpoint and token every publish call
returns "" and the report shows a placeholder instead.
"""

import asyncio
import mimetypes
from pathlib import Path
from typing import Any, Dict

import aiohttp

from . import console
from .config import ReportConfig
from .errors import UploadError
from .loader import ScenarioImages, ScenarioRun

UPLOAD_TIMEOUT = 120  # seconds

OVERVIEW_IMAGE = "overview.png"
HTTP_IMAGE = "http.png"
CONTAINERS_IMAGE = "containers.png"


class ImagePublisher:
    """Publishes local image files and returns their public URLs."""

    def __init__(self, config: ReportConfig):
        self.endpoint = config.images_link
        self.token = config.images_token
        self.run_id = config.run_id
        self.enabled = config.upload_enabled

    def upload_filename(self, label: str, path: Path) -> str:
        return f"{self.run_id}-{label}{Path(path).suffix}"

    async def publish(self, label: str, path: Path) -> str:
        """
        Upload one image.

        Args:
            label: Distinguishes this image within the run (e.g. "gw-a-http")
            path: Local image file

        Returns:
            First variant URL, or "" when uploads are disabled or the file is absent

        Raises:
            UploadError: Endpoint answered with a non-success status or an
                unusable body (status is None in that case)
            aiohttp.ClientError: Network errors
        """
        if not self.enabled:
            return ""

        path = Path(path)
        if not path.exists():
            console.warn(f"Could not find image {path}! Skipping upload...")
            return ""

        filename = self.upload_filename(label, path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        console.info(f"Uploading {filename} to image store")
        body = await self._post_image(filename, path.read_bytes(), content_type)

        try:
            return body["result"]["variants"][0]
        except (KeyError, IndexError, TypeError) as e:
            raise UploadError(filename, None, f"unexpected response body: {e}") from e

    async def _post_image(self, filename: str, payload: bytes, content_type: str) -> Dict[str, Any]:
        form = aiohttp.FormData()
        form.add_field("file", payload, filename=filename, content_type=content_type)
        headers = {"Authorization": f"Bearer {self.token}"}

        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.endpoint,
                data=form,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=UPLOAD_TIMEOUT),
            ) as resp:
                console.info(f"Got a response from image store (status={resp.status})")
                if not 200 <= resp.status < 300:
                    raise UploadError(filename, resp.status, resp.reason)
                return await resp.json()

    async def publish_scenario_images(self, run: ScenarioRun) -> ScenarioImages:
        """Upload the overview, http and containers charts of one scenario concurrently."""
        if not self.enabled:
            console.warn("Could not find CF_IMAGES_LINK or CF_IMAGES_TOKEN in env! Skipping...")
            return ScenarioImages()

        overview_url, http_url, containers_url = await asyncio.gather(
            self.publish(f"{run.name}-overview", run.source_path / OVERVIEW_IMAGE),
            self.publish(f"{run.name}-http", run.source_path / HTTP_IMAGE),
            self.publish(f"{run.name}-containers", run.source_path / CONTAINERS_IMAGE),
        )
        return ScenarioImages(
            overview_url=overview_url,
            http_url=http_url,
            containers_url=containers_url,
        )
