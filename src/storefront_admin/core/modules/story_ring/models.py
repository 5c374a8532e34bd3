"""Story rings shown above the storefront gallery."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from storefront_admin.core.db import MongoModel
from storefront_admin.utils import now

DEFAULT_RING_COLOR = "linear-gradient(45deg, #9b87f5, #7066ff)"


class StoryShape(StrEnum):
    SQUARE = "square"
    CIRCLE = "circle"


class MoveDirection(StrEnum):
    UP = "up"
    DOWN = "down"


class StoryRing(MongoModel):
    """Story bubble with bilingual title and content."""

    title: str
    title_tr: str | None = None
    title_en: str | None = None
    content: str | None = None
    content_tr: str | None = None
    content_en: str | None = None
    image_url: str
    images: list[str] = Field(default_factory=list)
    ring_color: str = DEFAULT_RING_COLOR
    shape: StoryShape = StoryShape.SQUARE
    jersey_type_id: UUID | None = None
    is_active: bool = True
    display_order: int = 0  # Position in the ring strip, 0-based
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class StoryRingForm(BaseModel):
    """Fields submitted when adding a story."""

    title_tr: str | None = None
    title_en: str | None = None
    content_tr: str | None = None
    content_en: str | None = None
    image_url: str = ""
    images: list[str] = Field(default_factory=list)
    ring_color: str = DEFAULT_RING_COLOR
    shape: StoryShape = StoryShape.SQUARE
    jersey_type_id: UUID | None = None

    @property
    def title(self) -> str:
        return self.title_tr or self.title_en or "Story"


class StoryRingUpdate(BaseModel):
    """Partial update; only fields that are set are written."""

    title: str | None = None
    title_tr: str | None = None
    title_en: str | None = None
    content: str | None = None
    content_tr: str | None = None
    content_en: str | None = None
    image_url: str | None = None
    images: list[str] | None = None
    ring_color: str | None = None
    shape: StoryShape | None = None
    jersey_type_id: UUID | None = None
    is_active: bool | None = None
