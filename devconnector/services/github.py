"""Public repository listing for a profile's GitHub account."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from devconnector.config import settings

logger = logging.getLogger(__name__)


class GithubProfileNotFound(Exception):
    """GitHub answered with anything other than 200 for the user."""


async def fetch_user_repos(username: str, limit: int = 5) -> List[Dict[str, Any]]:
    """
    Return the oldest-first repositories of ``username``.

    Raises:
        GithubProfileNotFound: GitHub did not return the listing.
        httpx.HTTPError: the request itself failed.
    """
    params: Dict[str, Any] = {"per_page": limit, "sort": "created:asc"}
    auth: Optional[tuple] = None
    if settings.GITHUB_CLIENT_ID and settings.GITHUB_CLIENT_SECRET:
        auth = (settings.GITHUB_CLIENT_ID, settings.GITHUB_CLIENT_SECRET)

    url = f"{settings.GITHUB_API_URL.rstrip('/')}/users/{username}/repos"
    async with httpx.AsyncClient(timeout=settings.GITHUB_TIMEOUT) as client:
        response = await client.get(
            url,
            params=params,
            auth=auth,
            headers={"Accept": "application/vnd.github+json", "User-Agent": settings.APP_NAME},
        )

    if response.status_code != 200:
        logger.info("GitHub returned %s for %s", response.status_code, username)
        raise GithubProfileNotFound(username)
    return response.json()
