"""Product catalogue models."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from storefront_admin.core.db import MongoModel
from storefront_admin.utils import now


class Product(MongoModel):
    """Jersey product. `id` is the opaque key, `display_id` the number shown to people."""

    display_id: int | None = None  # Sequential, used in URLs: /product/{display_id}/{slug}
    name: str
    price: float  # In TRY
    stock: int = 0
    description: str | None = None
    image_url: str | None = None
    additional_images: list[str] = Field(default_factory=list)
    min_order: int = 10
    colors: int = 1
    selected_colors: list[str] = Field(default_factory=list)
    is_new: bool = False
    is_popular: bool = False
    is_featured: bool = False
    display_order: int = 999
    jersey_type: str | None = None  # References jersey_types
    slug: str | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime | None = None


class ProductForm(BaseModel):
    """Editable product fields as submitted from the admin form."""

    name: str = Field(..., min_length=2, description="Product name, at least 2 characters")
    price: float = Field(0, ge=0, description="Price in TRY")
    stock: int = Field(0, ge=0)
    description: str | None = None
    min_order: int = Field(10, ge=0)
    colors: int = Field(1, ge=0)
    is_new: bool = False
    is_popular: bool = False
    is_featured: bool = False
    display_order: int = 999
    jersey_type: str | None = None
    images: list[str] = Field(default_factory=list, description="Image URLs; the first one is the main image")

    @field_validator("jersey_type")
    @classmethod
    def _null_jersey_type(cls, value: str | None) -> str | None:
        # The type selector submits the literal string "null" for "no type"
        if value in (None, "", "null"):
            return None
        return value

    @property
    def image_url(self) -> str | None:
        return self.images[0] if self.images else None

    @property
    def additional_images(self) -> list[str]:
        return self.images[1:]
