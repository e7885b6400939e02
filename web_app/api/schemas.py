"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from shortlinks.database.models import Link


class CamelModel(BaseModel):
    """Serialized with camelCase keys; accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkCreateRequest(BaseModel):
    """Request to create a link.

    Both fields are optional here so a missing URL is reported by the
    service as a 400 with the usual error body.
    """

    url: Optional[str] = Field(None, description="The URL to shorten")
    code: Optional[str] = Field(None, description="Optional custom code, 6-8 letters or digits")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "code": "myrepo1"},
            ]
        }
    }


class LinkResponse(CamelModel):
    """A link with its click telemetry."""

    code: str
    url: str
    clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_link(cls, link: Link) -> "LinkResponse":
        return cls(
            code=link.code,
            url=link.url,
            clicks=link.clicks,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
            updated_at=link.updated_at,
        )


class StatisticsResponse(CamelModel):
    """Totals over all links."""

    total_links: int
    total_clicks: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
