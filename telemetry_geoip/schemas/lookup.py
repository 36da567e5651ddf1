from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import GEOIP_DB_PATH


class LookupRule(BaseModel):
    field: str = Field("", description="Field holding the IP address to look up")
    dest_country: str = Field("", description="Destination field for the country ISO code")
    dest_city: str = Field("", description="Destination field for the English city name")
    dest_lat: str = Field("", description="Destination field for the latitude")
    dest_lon: str = Field("", description="Destination field for the longitude")

    model_config = ConfigDict(extra="forbid")

    @field_validator("field", "dest_country", "dest_city", "dest_lat", "dest_lon", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Optional[str]) -> str:
        # YAML "dest_city:" with no value loads as None
        return "" if value is None else value

    @property
    def enabled(self) -> bool:
        return bool(self.field)


class GeoIPConfig(BaseModel):
    db_path: str = Field(GEOIP_DB_PATH, description="Path to a MaxMind GeoIP2/GeoLite2 City database")
    lookups: List[LookupRule] = Field(default_factory=list, alias="lookup",
                                      description="Lookup rules, applied in order")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("lookups", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value):
        return [] if value is None else value
