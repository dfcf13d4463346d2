"""Sources for the host user's profile."""

import logging
from typing import Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from ..exceptions import ProfileUnavailable
from ..models.profile import UserProfile

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 5.0


@runtime_checkable
class ProfileSource(Protocol):
    """Anything that can hand the widget the signed-in user's profile."""

    async def get_user_information(self) -> UserProfile: ...


class StaticProfileSource:
    """Profile source for hosts that already know the user's location."""

    def __init__(self, location: str | None = None):
        self.location = location

    async def get_user_information(self) -> UserProfile:
        if self.location is None:
            raise ProfileUnavailable("No profile location configured")
        return UserProfile(location=self.location)


class HttpProfileSource:
    """Fetches the user object as JSON from a host endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = HTTP_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._client = client

    async def get_user_information(self) -> UserProfile:
        """Fetch the profile.

        Raises:
            ProfileUnavailable: On transport failure, error status or bad body
        """
        try:
            if self._client is not None:
                response = await self._client.get(self.url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url)
            response.raise_for_status()
            return UserProfile.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Profile request failed: HTTP {status}")
            raise ProfileUnavailable(f"HTTP {status}", details={"url": self.url}) from e

        except httpx.TransportError as e:
            logger.warning(f"Profile request failed: {e}")
            raise ProfileUnavailable(f"Connection error: {e}", details={"url": self.url}) from e

        except (ValueError, ValidationError) as e:
            logger.warning(f"Invalid profile response: {e}")
            raise ProfileUnavailable("Invalid profile response", details={"url": self.url}) from e
