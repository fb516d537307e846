from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NWSPointsProperties(BaseModel):
    forecast: Optional[str] = None


class NWSPointsResponse(BaseModel):
    """Grid point metadata returned by ``/points/{lat},{lon}``."""

    properties: Optional[NWSPointsProperties] = None


class NWSPeriod(BaseModel):
    """Single forecast period as published by the NWS (camelCase on the wire)."""

    name: Optional[str] = None
    start_time: Optional[str] = Field(default=None, alias="startTime")
    temperature: Optional[int] = None
    temperature_unit: Optional[str] = Field(default=None, alias="temperatureUnit")
    wind_speed: Optional[str] = Field(default=None, alias="windSpeed")
    wind_direction: Optional[str] = Field(default=None, alias="windDirection")
    short_forecast: Optional[str] = Field(default=None, alias="shortForecast")
    detailed_forecast: Optional[str] = Field(default=None, alias="detailedForecast")
    is_daytime: Optional[bool] = Field(default=None, alias="isDaytime")

    model_config = ConfigDict(populate_by_name=True)


class NWSForecastProperties(BaseModel):
    periods: Optional[List[NWSPeriod]] = None


class NWSForecastResponse(BaseModel):
    """Forecast document returned by the grid point's forecast URL."""

    properties: Optional[NWSForecastProperties] = None
