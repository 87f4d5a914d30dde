"""TikTok link detection in free-form message text."""

from __future__ import annotations

import logging
import re
from typing import Final

logger = logging.getLogger(__name__)


class LinkExtractor:
    """Finds TikTok video links (short links and canonical video pages)."""

    LINK_PATTERN: Final[re.Pattern[str]] = re.compile(
        r"https?://(?:(?:vt|vm|www)\.)?tiktok\.com/"
        r"(?:@[a-zA-Z0-9_.-]+/video/\d{17,}|[a-zA-Z0-9_-]{8,10})"
    )

    def extract_links(self, text: str | None) -> list[str]:
        """Extract TikTok links in order of appearance.

        Repeated links are returned once per occurrence.
        """
        if not text:
            return []

        links = [match.group(0) for match in self.LINK_PATTERN.finditer(text)]
        logger.debug(f"Extracted {len(links)} TikTok links from text")
        return links


link_extractor = LinkExtractor()
