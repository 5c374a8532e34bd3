from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from storefront_admin.core.modules.product.models import Product, ProductForm
from storefront_admin.web.deps import AppDep
from storefront_admin.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["products"])


class NextDisplayIdResponse(BaseModel):
    """Display id that the next created product will get."""

    display_id: int = Field(..., description="Next sequential display id", ge=1)


@router.get(
    "/products",
    summary="List products",
    description=(
        "Get all products ordered by display order. "
        "Also rescans existing display ids so the next created product continues the sequence."
    ),
    operation_id="listProducts",
    responses={
        200: {"description": "List of products"},
        502: {"model": ErrorResponse, "description": "Database read failed"},
    },
)
async def list_products(app: AppDep) -> list[Product]:
    return await app.get_products()


@router.get(
    "/products/next-display-id",
    summary="Preview next display id",
    description="Return the display id the next created product will receive, without reserving it.",
    operation_id="getNextProductDisplayId",
    responses={
        200: {"description": "Next display id"},
        502: {"model": ErrorResponse, "description": "Database read failed"},
    },
)
async def get_next_display_id(app: AppDep) -> NextDisplayIdResponse:
    return NextDisplayIdResponse(display_id=await app.get_next_product_display_id())


@router.get(
    "/products/{ref}",
    summary="Get product",
    description="Get a product by its numeric display id or, failing that, by its UUID.",
    operation_id="getProduct",
    responses={
        200: {"description": "Product details"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def get_product(ref: str, app: AppDep) -> Product:
    return await app.get_product(ref)


@router.post(
    "/products",
    summary="Create product",
    description="Create a product. A new UUID and the next sequential display id are assigned.",
    operation_id="createProduct",
    status_code=201,
    responses={
        201: {"description": "Product created successfully"},
        409: {"model": ErrorResponse, "description": "Display id already taken; retry to rescan"},
        502: {"model": ErrorResponse, "description": "Database write failed"},
    },
)
async def create_product(form: ProductForm, app: AppDep) -> Product:
    return await app.create_product(form)


@router.put(
    "/products/{product_id}",
    summary="Update product",
    description="Replace the editable fields of a product. The display id is never changed.",
    operation_id="updateProduct",
    responses={
        200: {"description": "Product updated successfully"},
        404: {"model": ErrorResponse, "description": "Product not found"},
        502: {"model": ErrorResponse, "description": "Database write failed"},
    },
)
async def update_product(product_id: UUID, form: ProductForm, app: AppDep) -> Product:
    return await app.update_product(product_id, form)


@router.delete(
    "/products/{product_id}",
    summary="Delete product",
    description="Delete a product. Its display id is not reused.",
    operation_id="deleteProduct",
    status_code=204,
    responses={
        204: {"description": "Product deleted"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def delete_product(product_id: UUID, app: AppDep) -> None:
    await app.delete_product(product_id)
