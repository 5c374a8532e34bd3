from storefront_admin.web.routers.metadata import router as metadata_router
from storefront_admin.web.routers.products import router as products_router
from storefront_admin.web.routers.story_rings import router as story_rings_router

__all__ = [
    "metadata_router",
    "products_router",
    "story_rings_router",
]
