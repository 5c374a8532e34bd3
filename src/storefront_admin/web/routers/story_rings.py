from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from storefront_admin.core.modules.story_ring.models import MoveDirection, StoryRing, StoryRingForm, StoryRingUpdate
from storefront_admin.web.deps import AppDep
from storefront_admin.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["story-rings"])


class MoveStoryRingRequest(BaseModel):
    direction: MoveDirection = Field(..., description="Swap with the story above (`up`) or below (`down`)")


@router.get(
    "/story-rings",
    summary="List story rings",
    description="Get all story rings ordered by display order.",
    operation_id="listStoryRings",
)
async def list_story_rings(app: AppDep) -> list[StoryRing]:
    return await app.get_story_rings()


@router.post(
    "/story-rings",
    summary="Add story ring",
    description="Append a story ring after the last one. An image is required.",
    operation_id="createStoryRing",
    status_code=201,
    responses={
        201: {"description": "Story ring created"},
        400: {"model": ErrorResponse, "description": "Image missing"},
    },
)
async def create_story_ring(form: StoryRingForm, app: AppDep) -> StoryRing:
    return await app.create_story_ring(form)


@router.patch(
    "/story-rings/{story_id}",
    summary="Update story ring",
    description="Partially update a story ring. Only provided fields are written.",
    operation_id="updateStoryRing",
    responses={
        200: {"description": "Story ring updated"},
        404: {"model": ErrorResponse, "description": "Story ring not found"},
    },
)
async def update_story_ring(story_id: UUID, update: StoryRingUpdate, app: AppDep) -> StoryRing:
    return await app.update_story_ring(story_id, update)


@router.delete(
    "/story-rings/{story_id}",
    summary="Delete story ring",
    operation_id="deleteStoryRing",
    status_code=204,
    responses={404: {"model": ErrorResponse, "description": "Story ring not found"}},
)
async def delete_story_ring(story_id: UUID, app: AppDep) -> None:
    await app.delete_story_ring(story_id)


@router.post(
    "/story-rings/{story_id}/move",
    summary="Reorder story ring",
    description="Swap display order with the neighbouring story. Moving past either end is a no-op.",
    operation_id="moveStoryRing",
    responses={
        200: {"description": "Story rings in their new order"},
        404: {"model": ErrorResponse, "description": "Story ring not found"},
    },
)
async def move_story_ring(story_id: UUID, request: MoveStoryRingRequest, app: AppDep) -> list[StoryRing]:
    return await app.move_story_ring(story_id, request.direction)
