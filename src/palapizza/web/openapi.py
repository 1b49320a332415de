from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from palapizza.config import Config

# Staff-only operations, everything else is public
STAFF_ENDPOINTS = {
    ("GET", "/api/bookings"),
    ("GET", "/api/admin/bookings"),
    ("POST", "/api/orders/status"),
}


def set_custom_openapi(app: FastAPI, config: Config) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Pala Pizza API",
            version="0.1.0",
            summary="Orders, reservations and chat for the restaurant, plus the staff panel API",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "StaffSessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": config.session_cookie_name,
                "description": "Signed staff session token set by /api/admin/login",
            },
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in STAFF_ENDPOINTS:
                    operation["security"] = [{"StaffSessionCookie": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    details: Any = Field(None, description="Raw upstream answer, only for upstream errors")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Non autorizzato", "type": "authentication_error"},
                {"message": "Stato non valido", "type": "validation_error"},
                {"message": "PALAPIZZA_ADMIN_SESSION_SECRET mancante", "type": "configuration_error"},
            ]
        }
    }


class OkResponse(BaseModel):
    ok: bool = True
