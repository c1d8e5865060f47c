from __future__ import annotations

from typing import Any, Dict

from scrapejobs.config import settings
from scrapejobs.launchers.base import BaseLauncher
from scrapejobs.models import Platform


class TwitterAdapter(BaseLauncher):
    platform = Platform.TWITTER

    def build_input(self, handle: str) -> Dict[str, Any]:
        return {"twitterHandles": [handle], "maxItems": settings.apify_results_limit}
