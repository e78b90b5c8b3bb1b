"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field


class CityConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1)
    country: str = ""
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://www.7timer.info/bin/api.pl"
    product: str = "civillight"
    output: str = "json"
    timeout_seconds: float = Field(default=5.0, gt=0.0)


class GeoConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = "https://ipapi.co/json/"
    timeout_seconds: float = Field(default=5.0, gt=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    days: int = Field(default=7, ge=1, le=16)
    icon_prefix: str = "images"
    images_dir: str | None = None


class RecentConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_entries: int = Field(default=5, ge=1)
    storage_key: str = "recentCities"


class StatusConfig(BaseModel):
    model_config = {"extra": "forbid"}

    fade_after_seconds: float = Field(default=2.0, ge=0.0)
    faded_opacity: float = Field(default=0.7, ge=0.0, le=1.0)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    geo: GeoConfig = GeoConfig()
    forecast: ForecastConfig = ForecastConfig()
    recent: RecentConfig = RecentConfig()
    status: StatusConfig = StatusConfig()
    cities: list[CityConfig] = []
