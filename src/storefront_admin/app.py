from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version
from uuid import UUID

from storefront_admin.config import Config
from storefront_admin.core.core import Core
from storefront_admin.core.modules.product.models import Product, ProductForm
from storefront_admin.core.modules.story_ring.models import MoveDirection, StoryRing, StoryRingForm, StoryRingUpdate


class App:
    """Facade for all admin operations; the web layer only talks to this."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Products ===
    async def get_products(self) -> list[Product]:
        """List products; also rescans the display id sequence."""
        return await self._core.services.product.list_products()

    async def get_next_product_display_id(self) -> int:
        return await self._core.services.product.next_display_id()

    async def get_product(self, ref: str) -> Product:
        """Get product by display id or UUID."""
        return await self._core.services.product.resolve_product(ref)

    async def create_product(self, form: ProductForm) -> Product:
        return await self._core.services.product.create_product(form)

    async def update_product(self, product_id: UUID, form: ProductForm) -> Product:
        return await self._core.services.product.update_product(product_id, form)

    async def delete_product(self, product_id: UUID) -> None:
        await self._core.services.product.delete_product(product_id)

    # === Story rings ===
    async def get_story_rings(self) -> list[StoryRing]:
        return await self._core.services.story_ring.list_story_rings()

    async def create_story_ring(self, form: StoryRingForm) -> StoryRing:
        return await self._core.services.story_ring.create_story_ring(form)

    async def update_story_ring(self, story_id: UUID, update: StoryRingUpdate) -> StoryRing:
        return await self._core.services.story_ring.update_story_ring(story_id, update)

    async def delete_story_ring(self, story_id: UUID) -> None:
        await self._core.services.story_ring.delete_story_ring(story_id)

    async def move_story_ring(self, story_id: UUID, direction: MoveDirection) -> list[StoryRing]:
        return await self._core.services.story_ring.move_story_ring(story_id, direction)

    # === Metadata ===
    def get_version(self) -> dict[str, str]:
        """Package version plus build metadata from config."""
        try:
            package_version = version("storefront-admin")
        except PackageNotFoundError:
            package_version = "unknown"
        config = self._core.config
        return {
            "version": package_version,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }
