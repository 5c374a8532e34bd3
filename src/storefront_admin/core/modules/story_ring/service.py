from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from storefront_admin.core.core import Service
from storefront_admin.core.modules.records.models import Table
from storefront_admin.core.modules.sequence.allocator import SequenceAllocator
from storefront_admin.core.modules.story_ring.models import MoveDirection, StoryRing, StoryRingForm, StoryRingUpdate
from storefront_admin.errors import NotFoundError, ValidationError
from storefront_admin.utils import now

logger = structlog.get_logger(__name__)


class StoryRingService(Service):
    """Manages story rings and their display order."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._positions: SequenceAllocator | None = None

    @property
    def positions(self) -> SequenceAllocator:
        if self._positions is None:
            self._positions = SequenceAllocator(self.core.services.records, Table.STORY_RINGS, "display_order", start=0)
        return self._positions

    async def on_start(self) -> None:
        await self.core.services.records.ensure_index(Table.STORY_RINGS, [("display_order", 1)])

    async def list_story_rings(self) -> list[StoryRing]:
        """Get all story rings by display order and rescan the order sequence."""
        docs = await self.core.services.records.select(Table.STORY_RINGS, sort=[("display_order", 1)])
        await self.positions.initialize()
        return StoryRing.list_documents(docs)

    async def get_story_ring(self, story_id: UUID) -> StoryRing:
        doc = await self.core.services.records.select_one(Table.STORY_RINGS, {"_id": story_id})
        if doc is None:
            raise NotFoundError(f"Story ring not found: {story_id}")
        return StoryRing.model_validate(doc)

    async def create_story_ring(self, form: StoryRingForm) -> StoryRing:
        """Append a story ring after the last one."""
        if not form.image_url:
            raise ValidationError("Image is required")

        async with self.positions.reserve() as position:
            story = StoryRing(
                title=form.title,
                display_order=position,
                is_active=True,
                **form.model_dump(),
            )
            await self.core.services.records.insert(Table.STORY_RINGS, story.to_mongo())
        logger.info("story_ring_created", story_id=story.id, display_order=position)
        return story

    async def update_story_ring(self, story_id: UUID, update: StoryRingUpdate) -> StoryRing:
        """Write the fields that were explicitly set."""
        patch = update.model_dump(exclude_unset=True)
        if "image_url" in patch and not patch["image_url"]:
            raise ValidationError("Image is required")
        patch["updated_at"] = now()
        matched = await self.core.services.records.update(Table.STORY_RINGS, {"_id": story_id}, patch)
        if not matched:
            raise NotFoundError(f"Story ring not found: {story_id}")
        return await self.get_story_ring(story_id)

    async def delete_story_ring(self, story_id: UUID) -> None:
        deleted = await self.core.services.records.delete(Table.STORY_RINGS, {"_id": story_id})
        if not deleted:
            raise NotFoundError(f"Story ring not found: {story_id}")

    async def move_story_ring(self, story_id: UUID, direction: MoveDirection) -> list[StoryRing]:
        """Swap display order with the neighbouring story. No-op at either end."""
        docs = await self.core.services.records.select(Table.STORY_RINGS, sort=[("display_order", 1)])
        stories = StoryRing.list_documents(docs)
        index = next((i for i, story in enumerate(stories) if story.id == story_id), None)
        if index is None:
            raise NotFoundError(f"Story ring not found: {story_id}")

        target_index = index - 1 if direction == MoveDirection.UP else index + 1
        if target_index < 0 or target_index >= len(stories):
            return stories

        current, target = stories[index], stories[target_index]
        records = self.core.services.records
        await records.update(Table.STORY_RINGS, {"_id": current.id}, {"display_order": target.display_order})
        await records.update(Table.STORY_RINGS, {"_id": target.id}, {"display_order": current.display_order})
        current.display_order, target.display_order = target.display_order, current.display_order
        stories[index], stories[target_index] = target, current
        logger.debug("story_ring_moved", story_id=story_id, direction=direction)
        return stories
