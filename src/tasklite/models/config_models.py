"""Configuration models for TaskLite."""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

DEFAULT_ENDPOINTS = {
    "development": "http://localhost:3000",
    "production": "https://task-manager-be-6vuq.onrender.com",
}

SortKey = Literal["name", "updated_at", "created_at"]
SortDir = Literal["asc", "desc"]


class APIConfig(BaseModel):
    """API configuration."""

    mode: Literal["development", "production"] = Field(default="production")
    endpoint: str | None = Field(
        default=None, description="Explicit base URL; overrides the mode default"
    )
    timeout: float = Field(default=30)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Blank endpoints fall back to the mode default."""
        if v is None or not v.strip():
            return None
        v = v.strip().rstrip("/")
        if urlsplit(v).scheme not in ("http", "https"):
            raise ValueError("endpoint must be an http(s) URL")
        return v

    @property
    def base_url(self) -> str:
        """Resolved base URL for API calls."""
        return self.endpoint or DEFAULT_ENDPOINTS[self.mode]

    @property
    def origin(self) -> str:
        """``scheme://host[:port]`` of the base URL."""
        parts = urlsplit(self.base_url)
        return f"{parts.scheme}://{parts.netloc}"


class UIConfig(BaseModel):
    """UI configuration."""

    toast_duration_ms: int = Field(default=3000, gt=0)
    default_sort_key: SortKey = Field(default="updated_at")
    default_sort_dir: SortDir = Field(default="desc")


class AppConfig(BaseModel):
    """Main TaskLite configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
