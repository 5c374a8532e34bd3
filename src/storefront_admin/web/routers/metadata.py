"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from storefront_admin.web.deps import AppDep

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns package version, git commit hash, commit date, and build time.",
    operation_id="getVersion",
)
async def get_version(app: AppDep) -> dict[str, str]:
    return app.get_version()
