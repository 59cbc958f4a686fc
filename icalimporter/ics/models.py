"""Data models for imported calendar events and venues."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer


class CalendarSource(BaseModel):
    """Configuration for a third-party calendar feed."""

    name: str = Field(..., description="Human-readable name for this calendar source")
    url: str = Field(..., description="ICS calendar URL (http, https or webcal)")


class DomainVenue(BaseModel):
    """Venue record built from a VVENUE block or a bare LOCATION value."""

    title: Optional[str] = Field(default=None, description="Venue name")
    street_address: Optional[str] = Field(default=None, description="Street address")
    locality: Optional[str] = Field(default=None, description="City or town")
    region: Optional[str] = Field(default=None, description="State, province or region")
    postal_code: Optional[str] = Field(default=None, description="Postal code")
    country: Optional[str] = Field(default=None, description="Country")
    latitude: Optional[float] = Field(default=None, description="Latitude in decimal degrees")
    longitude: Optional[float] = Field(default=None, description="Longitude in decimal degrees")

    @property
    def has_coordinates(self) -> bool:
        """Check if both coordinates are known."""
        return self.latitude is not None and self.longitude is not None


class DomainEvent(BaseModel):
    """Event record produced by an import run.

    Equality is field-wise, so two events only compare equal when every
    field, including the resolved venue and the source, matches.
    """

    title: Optional[str] = Field(default=None, description="Event summary")
    description: Optional[str] = Field(default=None, description="Event description")
    url: Optional[str] = Field(default=None, description="Event URL")
    start_time: datetime = Field(..., description="Zoned start time")
    end_time: datetime = Field(..., description="Zoned end time")
    venue: Optional[DomainVenue] = Field(default=None, description="Event venue")
    source: Optional[CalendarSource] = Field(
        default=None, description="Calendar source the event was imported from"
    )

    @property
    def duration_seconds(self) -> float:
        """Length of the event in seconds."""
        return (self.end_time - self.start_time).total_seconds()

    @field_serializer("start_time", "end_time")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime fields to ISO format."""
        return dt.isoformat()
