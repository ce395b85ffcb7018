"""
Pydantic Schemas

Request/Response models for the API.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .pipeline.prompts import DEFAULT_BODY_TYPE, DEFAULT_STYLE


# ============================================================================
# Reference Photo Schemas
# ============================================================================

class ReferencePhotoResponse(BaseModel):
    """Reference photo details response."""
    id: int
    file_url: str
    original_filename: str | None
    mime_type: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PreviewRequest(BaseModel):
    """Request to preview a single sticker."""
    emotion: str = Field(min_length=1, max_length=100)
    style: str = DEFAULT_STYLE
    body_type: str = DEFAULT_BODY_TYPE

    @field_validator("emotion")
    @classmethod
    def emotion_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Emotion must not be blank")
        return v


class PreviewResponse(BaseModel):
    """Temporary preview image."""
    url: str
    emotion: str


# ============================================================================
# Pack Schemas
# ============================================================================

class PackCreate(BaseModel):
    """Request to generate a new sticker pack."""
    pack_name: str = Field(min_length=1, max_length=255)
    reference_photo_id: int
    emotions: list[str] = Field(
        min_length=1,
        description="Preset emotion ids or free-text labels",
        examples=[["happy", "sad", "waving hello"]],
    )
    style: str = DEFAULT_STYLE
    body_type: str = DEFAULT_BODY_TYPE

    @field_validator("pack_name")
    @classmethod
    def pack_name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Pack name must not be blank")
        return v

    @field_validator("emotions")
    @classmethod
    def emotions_not_blank(cls, v: list[str]) -> list[str]:
        emotions = [e.strip() for e in v]
        if any(not e or len(e) > 100 for e in emotions):
            raise ValueError("Emotions must be 1-100 characters")
        return emotions


class PackResponse(BaseModel):
    """Pack details response."""
    id: int
    name: str
    description: str | None
    reference_photo_id: int | None
    style: str
    body_type: str
    status: str
    created_at: datetime
    updated_at: datetime
    sticker_count: int = 0

    model_config = {"from_attributes": True}


class PackListResponse(BaseModel):
    """List of packs response."""
    packs: list[PackResponse]
    total: int


class StickerResponse(BaseModel):
    """Sticker details response."""
    id: int
    pack_id: int
    file_url: str
    emotion: str
    prompt: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class FailedEmotion(BaseModel):
    """An emotion that could not be generated."""
    emotion: str
    reason: str


class PackGenerateResponse(BaseModel):
    """Response after generating a pack."""
    pack: PackResponse
    stickers: list[StickerResponse]
    failed: list[FailedEmotion] = []


class PackDetailResponse(BaseModel):
    """Pack with its stickers."""
    pack: PackResponse
    stickers: list[StickerResponse]
    failed: list[FailedEmotion] = []


class DownloadResponse(BaseModel):
    """Link to an exported pack archive."""
    download_url: str


class SuccessResponse(BaseModel):
    """Generic acknowledgement."""
    success: bool = True


# ============================================================================
# Preset Schemas
# ============================================================================

class Preset(BaseModel):
    """Preset information."""
    id: str
    name: str
    description: str


class PresetListResponse(BaseModel):
    """Available emotions, styles and body types."""
    emotions: list[Preset]
    styles: list[Preset]
    body_types: list[Preset]


# ============================================================================
# Health/Status Schemas
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    services: dict[str, str] = {}
