from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        app.openapi_schema = get_openapi(
            title="Storefront Admin API",
            version="0.1.0",
            summary="Admin operations for the jersey storefront catalogue",
            routes=app.routes,
        )
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Name must be at least 2 characters", "type": "validation_error"},
                {"message": "Product not found: 42", "type": "not_found"},
                {"message": "Duplicate record in products", "type": "duplicate_record"},
                {"message": "Failed to load products", "type": "remote_operation_error"},
            ]
        }
    }
