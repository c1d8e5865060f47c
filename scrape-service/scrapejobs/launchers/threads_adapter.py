from __future__ import annotations

from typing import Any, Dict

from scrapejobs.launchers.base import BaseLauncher
from scrapejobs.models import Platform


class ThreadsAdapter(BaseLauncher):
    platform = Platform.THREADS

    def build_input(self, handle: str) -> Dict[str, Any]:
        return {"usernames": [handle]}
