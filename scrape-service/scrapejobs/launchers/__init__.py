from __future__ import annotations

from typing import Dict

from scrapejobs.clients import ActorPlatformClient
from scrapejobs.config import settings
from scrapejobs.launchers.base import BaseLauncher
from scrapejobs.launchers.facebook_adapter import FacebookAdapter
from scrapejobs.launchers.instagram_adapter import InstagramAdapter
from scrapejobs.launchers.threads_adapter import ThreadsAdapter
from scrapejobs.launchers.tiktok_adapter import TikTokAdapter
from scrapejobs.launchers.twitter_adapter import TwitterAdapter
from scrapejobs.launchers.youtube_adapter import YoutubeAdapter
from scrapejobs.models import Platform


def build_launchers(client: ActorPlatformClient) -> Dict[Platform, BaseLauncher]:
    return {
        Platform.INSTAGRAM: InstagramAdapter(client, settings.apify_instagram_actor),
        Platform.FACEBOOK: FacebookAdapter(client, settings.apify_facebook_actor),
        Platform.THREADS: ThreadsAdapter(client, settings.apify_threads_actor),
        Platform.TIKTOK: TikTokAdapter(client, settings.apify_tiktok_actor),
        Platform.TWITTER: TwitterAdapter(client, settings.apify_twitter_actor),
        Platform.YOUTUBE: YoutubeAdapter(client, settings.apify_youtube_actor),
    }


__all__ = [
    "BaseLauncher",
    "FacebookAdapter",
    "InstagramAdapter",
    "ThreadsAdapter",
    "TikTokAdapter",
    "TwitterAdapter",
    "YoutubeAdapter",
    "build_launchers",
]
