from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from lireddit.core.modules.session.models import COOKIE_NAME


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="lireddit API",
            version="0.1.0",
            summary="Account registration, login and password recovery",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": COOKIE_NAME,
                "description": "Signed session id, set by register, login and changePassword",
            },
        }

        # Every endpoint accepts anonymous callers; the cookie is optional
        openapi_schema["security"] = [{}, {"SessionCookie": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Service temporarily unavailable.", "type": "infrastructure_error"},
                {"message": "An unexpected error occurred.", "type": "internal_server_error"},
            ]
        }
    }
