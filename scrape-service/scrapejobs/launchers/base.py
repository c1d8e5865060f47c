from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from scrapejobs.clients import ActorPlatformClient
from scrapejobs.models import Platform, RunHandle
from scrapejobs.validator import ScrapeRunValidator, normalize_handle, run_validator


logger = logging.getLogger("scrape-launcher")


class BaseLauncher(ABC):
    platform: Platform

    def __init__(
        self,
        client: ActorPlatformClient,
        actor_id: str,
        validator: ScrapeRunValidator = run_validator,
    ) -> None:
        self.client = client
        self.actor_id = actor_id
        self.validator = validator

    @abstractmethod
    def build_input(self, handle: str) -> Dict[str, Any]:
        raise NotImplementedError

    async def start(self, handle: str) -> Optional[RunHandle]:
        username = normalize_handle(handle)
        run_input = self.build_input(username)
        logger.info("Starting %s scrape for %s via %s", self.platform.value, username, self.actor_id)
        descriptor = await self.client.start_run(self.actor_id, run_input)
        return self.validator.accept(descriptor, platform=self.platform.value)
