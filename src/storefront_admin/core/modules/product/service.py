from typing import Any
from uuid import UUID, uuid4

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from storefront_admin.core.core import Service
from storefront_admin.core.modules.product.models import Product, ProductForm
from storefront_admin.core.modules.records.models import Table
from storefront_admin.core.modules.sequence.allocator import SequenceAllocator
from storefront_admin.errors import DuplicateRecordError, NotFoundError
from storefront_admin.utils import now, slugify

logger = structlog.get_logger(__name__)

# Largest integer BSON can store
MAX_DISPLAY_ID = 2**63 - 1


def parse_display_id(ref: str) -> int | None:
    """Return `ref` as a display id, or None if it cannot be one."""
    if not (ref.isascii() and ref.isdigit()) or len(ref) > len(str(MAX_DISPLAY_ID)):
        return None
    value = int(ref)
    return value if value <= MAX_DISPLAY_ID else None


class ProductService(Service):
    """Manages products and their sequential display ids."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._display_ids: SequenceAllocator | None = None

    @property
    def display_ids(self) -> SequenceAllocator:
        if self._display_ids is None:
            self._display_ids = SequenceAllocator(self.core.services.records, Table.PRODUCTS, "display_id", start=1)
        return self._display_ids

    async def on_start(self) -> None:
        """Create indexes; display_id is unique among products that have one."""
        records = self.core.services.records
        await records.ensure_index(
            Table.PRODUCTS, [("display_id", 1)], unique=True, partial_filter={"display_id": {"$type": "number"}}
        )
        await records.ensure_index(Table.PRODUCTS, [("display_order", 1)])

    async def list_products(self) -> list[Product]:
        """Get all products by display order and rescan the display id sequence."""
        docs = await self.core.services.records.select(Table.PRODUCTS, sort=[("display_order", 1)])
        await self.display_ids.initialize()
        return Product.list_documents(docs)

    async def next_display_id(self) -> int:
        """Display id the next created product will receive."""
        if not self.display_ids.is_initialized:
            await self.display_ids.initialize()
        return self.display_ids.allocate()

    async def get_product(self, product_id: UUID) -> Product:
        """Get product by ID."""
        doc = await self.core.services.records.select_one(Table.PRODUCTS, {"_id": product_id})
        if doc is None:
            raise NotFoundError(f"Product not found: {product_id}")
        return Product.model_validate(doc)

    async def get_product_by_display_id(self, display_id: int) -> Product:
        """Get product by its sequential display id."""
        doc = await self.core.services.records.select_one(Table.PRODUCTS, {"display_id": display_id})
        if doc is None:
            raise NotFoundError(f"Product not found: display_id={display_id}")
        return Product.model_validate(doc)

    async def resolve_product(self, ref: str) -> Product:
        """Find a product by display id, falling back to its UUID.

        Product URLs carry the display id, older links the UUID.
        """
        display_id = parse_display_id(ref)
        if display_id is not None:
            try:
                return await self.get_product_by_display_id(display_id)
            except NotFoundError:
                logger.debug("product_display_id_miss", ref=ref)
        try:
            product_id = UUID(ref)
        except ValueError:
            raise NotFoundError(f"Product not found: {ref}") from None
        return await self.get_product(product_id)

    async def create_product(self, form: ProductForm) -> Product:
        """Create product with a new UUID and the next display id."""
        try:
            async with self.display_ids.reserve() as display_id:
                product = Product(
                    id=uuid4(),
                    display_id=display_id,
                    slug=slugify(form.name),
                    image_url=form.image_url,
                    additional_images=form.additional_images,
                    **form.model_dump(exclude={"images"}),
                )
                await self.core.services.records.insert(Table.PRODUCTS, product.to_mongo())
        except DuplicateRecordError:
            # Another admin took this display id; rescan before the next attempt
            self.display_ids.invalidate()
            raise
        logger.info("product_created", product_id=product.id, display_id=display_id)
        return product

    async def update_product(self, product_id: UUID, form: ProductForm) -> Product:
        """Update editable fields. The display id never changes."""
        existing = await self.get_product(product_id)
        patch = form.model_dump(exclude={"images"})
        patch["slug"] = slugify(form.name)
        patch["image_url"] = form.image_url or existing.image_url
        patch["additional_images"] = form.additional_images
        patch["updated_at"] = now()
        await self.core.services.records.update(Table.PRODUCTS, {"_id": product_id}, patch)
        return await self.get_product(product_id)

    async def delete_product(self, product_id: UUID) -> None:
        """Delete product. Its display id is not reused."""
        deleted = await self.core.services.records.delete(Table.PRODUCTS, {"_id": product_id})
        if not deleted:
            raise NotFoundError(f"Product not found: {product_id}")
        logger.info("product_deleted", product_id=product_id)
