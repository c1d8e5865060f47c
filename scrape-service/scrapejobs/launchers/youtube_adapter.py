from __future__ import annotations

from typing import Any, Dict

from scrapejobs.config import settings
from scrapejobs.launchers.base import BaseLauncher
from scrapejobs.models import Platform


class YoutubeAdapter(BaseLauncher):
    platform = Platform.YOUTUBE

    def build_input(self, handle: str) -> Dict[str, Any]:
        return {
            "startUrls": [{"url": f"https://www.youtube.com/@{handle}"}],
            "maxResults": settings.apify_results_limit,
        }
