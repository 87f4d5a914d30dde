"""tikwm.com API client for resolving TikTok links into media URLs.

Issues a single form-encoded lookup per link requesting the HD,
watermark-free variant and normalizes the response into a tagged
``ResolveResult``. Failures never raise: malformed or unreachable
responses are reported as ``MALFORMED`` so the caller can skip the link.
"""

import asyncio
import json
import logging
from typing import Any
from urllib.parse import urljoin

import aiohttp

from ..config import ResolverConfig, config
from ..models import MediaDescriptor, ResolveResult, SizeClass

logger = logging.getLogger(__name__)


class TikwmResolver:
    """Simple tikwm API client."""

    def __init__(self, resolver_config: ResolverConfig | None = None):
        """Initialize resolver with configuration."""
        self.config = resolver_config or config.resolver

    async def resolve(self, link: str) -> ResolveResult:
        """Resolve a TikTok link into downloadable media.

        Args:
            link: TikTok short link or video page URL.

        Returns:
            ResolveResult: ``OK`` with a descriptor, ``TOO_LARGE`` when no
            variant fits the upload ceiling, ``MALFORMED`` otherwise.
        """
        form = {"url": link, "web": "1", "hd": "1", "count": "0"}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.config.api_url, data=form) as response:
                    body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"tikwm request failed for {link}: {e}")
            return ResolveResult.malformed()

        try:
            payload = json.loads(body)
        except ValueError as e:
            logger.error(f"Failed to parse tikwm response for {link}: {e}")
            logger.info(body)
            return ResolveResult.malformed(body)

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict) or not data.get("hdplay"):
            logger.warning(f"tikwm returned no playable media for {link}: {body}")
            return ResolveResult.malformed(body)

        return self.parse_media(data)

    def parse_media(self, data: dict[str, Any]) -> ResolveResult:
        """Build a result from the ``data`` object of a tikwm response.

        The HD stream is preferred; the SD stream is the fallback when the HD
        file exceeds the size ceiling. Missing sizes count as within the limit.
        """
        images = [self._absolute(url) for url in data.get("images") or [] if url]
        title = data.get("title") or None

        video_url = None
        if self._fits(data.get("hd_size")):
            video_url = self._absolute(data["hdplay"])
        elif data.get("play") and self._fits(data.get("size")):
            video_url = self._absolute(data["play"])

        if video_url is None:
            logger.info(
                f"Video exceeds {self.config.max_video_size_mb} MB "
                f"(hd_size={data.get('hd_size')}, size={data.get('size')})"
            )
            return ResolveResult.too_large(
                MediaDescriptor(image_urls=images, title=title, size_class=SizeClass.TOO_LARGE)
            )

        return ResolveResult.ok(
            MediaDescriptor(video_url=video_url, image_urls=images, title=title)
        )

    def _fits(self, size: Any) -> bool:
        if size is None:
            return True
        try:
            return int(size) <= self.config.max_video_size_bytes
        except (TypeError, ValueError):
            return True

    def _absolute(self, url: str) -> str:
        # web=1 responses carry paths relative to the tikwm origin
        return urljoin(self.config.origin + "/", url)


tikwm_resolver = TikwmResolver()
