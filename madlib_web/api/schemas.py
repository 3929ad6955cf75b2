"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Literal, Optional
from datetime import datetime

from madlib_links.models import LINK_MODES


class ShortenRequest(BaseModel):
    """Request to store a madlib under a short code."""

    mode: str = Field(..., description="Link mode: play, edit or story")
    data: Dict[str, Any] = Field(..., description="Madlib record")

    @field_validator('mode')
    @classmethod
    def validate_mode(cls, v: str) -> str:
        if v not in LINK_MODES:
            raise ValueError(f"mode must be one of {', '.join(LINK_MODES)}")
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "mode": "play",
                    "data": {
                        "title": "The Zoo",
                        "placeholders": [{"id": "word01", "label": "noun"}],
                        "story": "A {word01} walked.",
                    },
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after storing a madlib."""

    shortCode: str = Field(..., description="The generated short code")
    url: str = Field(..., description="URL that expands the short code")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shortCode": "aB3xY9",
                    "url": "https://links.example.com/aB3xY9",
                }
            ]
        }
    }


class ExpandResponse(BaseModel):
    """Record stored under a short code."""

    mode: Literal["play", "edit", "story"]
    data: Dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Short-link store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Machine-readable error")
    message: Optional[str] = Field(None, description="Detailed error information")
