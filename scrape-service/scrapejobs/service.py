from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional

from scrapejobs.clients import ActorPlatformClient
from scrapejobs.errors import InvalidHandleError, JobSubmissionError, PlatformRequestError
from scrapejobs.launchers import BaseLauncher, build_launchers
from scrapejobs.models import (
    CompleteStatus,
    LaunchOutcome,
    Platform,
    ProfileScrapeRequest,
    ProfileScrapeResult,
    RunHandle,
    RunStatus,
    ScrapeTarget,
)
from scrapejobs.platforms import resolve_platform, username_from_profile_url
from scrapejobs.sink import JobResultSink
from scrapejobs.status import ActorRunStatusResolver, poll_with_retry


logger = logging.getLogger("scrape-service")

AMBIGUOUS_ERROR = "Failed to start scrape"


class ScrapeService:
    def __init__(self, client: ActorPlatformClient, launchers: Optional[Dict[Platform, BaseLauncher]] = None) -> None:
        self.client = client
        self.launchers = launchers if launchers is not None else build_launchers(client)
        self.resolver = ActorRunStatusResolver(client)

    def target_for(self, profile_url: Optional[str], username: Optional[str] = None) -> ScrapeTarget:
        platform = resolve_platform(profile_url)
        handle = username or username_from_profile_url(profile_url)
        return ScrapeTarget(platform=platform, handle=handle)

    async def scrape_profile(self, profile_url: Optional[str], username: Optional[str] = None) -> ProfileScrapeResult:
        """Resolve, submit and classify one profile scrape. Never raises."""
        target = self.target_for(profile_url, username)
        launcher = self.launchers.get(target.platform)
        if launcher is None:
            return ProfileScrapeResult(
                platform=target.platform,
                outcome=LaunchOutcome.UNSUPPORTED,
                error=f"unsupported_platform:{target.platform.value}",
                supported=False,
            )
        try:
            handle = await launcher.start(target.handle)
        except InvalidHandleError as exc:
            return ProfileScrapeResult(platform=target.platform, outcome=LaunchOutcome.INVALID, error=str(exc))
        except JobSubmissionError as exc:
            return ProfileScrapeResult(platform=target.platform, outcome=LaunchOutcome.REJECTED, error=str(exc))
        except PlatformRequestError as exc:
            logger.error("Scrape submission for %s failed: %s", profile_url, exc)
            return ProfileScrapeResult(platform=target.platform, outcome=LaunchOutcome.ERROR, error=str(exc))
        except Exception as exc:  # noqa: BLE001
            # every batch item gets a result, even one that crashes
            logger.exception("Unexpected error scraping %s", profile_url)
            return ProfileScrapeResult(platform=target.platform, outcome=LaunchOutcome.ERROR, error=str(exc) or type(exc).__name__)
        if handle is None:
            return ProfileScrapeResult(platform=target.platform, outcome=LaunchOutcome.AMBIGUOUS, error=AMBIGUOUS_ERROR)
        return ProfileScrapeResult(
            platform=target.platform,
            run_id=handle.run_id,
            dataset_id=handle.dataset_id,
            outcome=LaunchOutcome.STARTED,
        )

    async def scrape_batch(self, profiles: Iterable[ProfileScrapeRequest]) -> list[ProfileScrapeResult]:
        tasks = [self.scrape_profile(item.profile_url, item.username) for item in profiles]
        return list(await asyncio.gather(*tasks))

    async def poll(self, handle: RunHandle) -> RunStatus:
        return await poll_with_retry(lambda: self.resolver.poll(handle))

    async def collect_results(
        self,
        sink: JobResultSink,
        platform: Platform,
        social_id: str,
        handle: RunHandle,
    ) -> RunStatus:
        status = await self.poll(handle)
        if isinstance(status, CompleteStatus):
            await sink.store(platform, social_id, status.data)
        return status
