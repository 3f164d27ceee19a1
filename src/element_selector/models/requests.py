"""Request/response models for the internal HTTP API."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class FilterRequest(BaseModel):
    url: str = Field(..., min_length=1)
    baseUrl: str = ""
    html: str = ""
    text: Optional[str] = None

    @field_validator("url", "baseUrl")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()


class FilterResponse(BaseModel):
    url: str
    mode: str
    text: str
    targetField: Optional[str] = None
    matchedNodes: int = 0
    metadata: Dict[str, str] = Field(default_factory=dict)
    indexFields: Dict[str, List[str]] = Field(default_factory=dict)


class SelectorConfigResponse(BaseModel):
    blacklist: List[str] = Field(default_factory=list)
    whitelist: List[str] = Field(default_factory=list)
    storageField: Optional[str] = None
    protectedUrls: int = 0
