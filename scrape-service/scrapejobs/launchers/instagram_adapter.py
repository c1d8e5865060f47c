from __future__ import annotations

from typing import Any, Dict

from scrapejobs.config import settings
from scrapejobs.launchers.base import BaseLauncher
from scrapejobs.models import Platform


class InstagramAdapter(BaseLauncher):
    platform = Platform.INSTAGRAM

    def build_input(self, handle: str) -> Dict[str, Any]:
        return {"usernames": [handle], "resultsLimit": settings.apify_results_limit}
