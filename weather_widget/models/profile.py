"""Host user profile model."""

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """User object returned by the host.

    Only ``location`` matters to the widget; any other fields the host
    sends are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    location: str | None = None

    @property
    def city(self) -> str | None:
        """City part of the location ('Austin, TX' -> 'Austin')."""
        if not self.location:
            return None
        city = self.location.split(",")[0].strip()
        return city or None
