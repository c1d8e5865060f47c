from __future__ import annotations

from typing import Optional, Sequence, Tuple
from urllib.parse import urlparse

from scrapejobs.models import Platform


# Checked against the link's host, first match wins.
PLATFORM_FRAGMENTS: Sequence[Tuple[Platform, Tuple[str, ...]]] = (
    (Platform.TIKTOK, ("tiktok.com",)),
    (Platform.INSTAGRAM, ("instagram.com",)),
    (Platform.TWITTER, ("x.com", "twitter.com")),
    (Platform.THREADS, ("threads.net", "threads.com")),
    (Platform.YOUTUBE, ("youtube.com", "youtu.be")),
    (Platform.FACEBOOK, ("facebook.com",)),
    (Platform.SPOTIFY, ("spotify.com",)),
    (Platform.APPLE, ("apple.com",)),
)


def _host(value: str) -> str:
    if "://" not in value:
        value = f"https://{value}"
    try:
        return urlparse(value).hostname or ""
    except ValueError:
        return ""


def resolve_platform(link: Optional[str]) -> Platform:
    value = str(link or "").strip().lower()
    host = _host(value) if value else ""
    if not host:
        return Platform.NONE
    for platform, domains in PLATFORM_FRAGMENTS:
        if any(host == domain or host.endswith(f".{domain}") for domain in domains):
            return platform
    return Platform.NONE


def username_from_profile_url(profile_url: Optional[str]) -> str:
    raw = str(profile_url or "").strip()
    if not raw:
        return ""
    if "://" not in raw:
        raw = f"https://{raw}"
    try:
        path = urlparse(raw).path
    except ValueError:
        return ""
    segments = [item for item in path.split("/") if item.strip()]
    if not segments:
        return ""
    return segments[-1].strip().lstrip("@")
