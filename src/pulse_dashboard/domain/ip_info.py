"""IP geolocation models."""

from pydantic import BaseModel, ConfigDict

_REGIONAL_INDICATOR_OFFSET = 127397


class IpInfo(BaseModel):
    """Public IP address with geolocation details."""

    model_config = ConfigDict(frozen=True)

    ip: str
    ASN: int | None = None
    ISP: str | None = None
    publicIP: str | None = None
    country: str = ""
    city: str = ""
    region: str = ""
    latitude: str | None = None
    longitude: str | None = None
    postalCode: str | None = None
    timezone: str | None = None

    @property
    def flag(self) -> str:
        """Emoji flag for the country code."""
        return country_flag(self.country)


def country_flag(country_code: str) -> str:
    """Convert an ISO alpha-2 country code to a regional indicator flag."""
    return "".join(
        chr(_REGIONAL_INDICATOR_OFFSET + ord(char)) for char in country_code.upper()
    )
