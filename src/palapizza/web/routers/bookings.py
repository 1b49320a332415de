from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from palapizza.core.modules.order.models import Order
from palapizza.core.modules.store.models import DEFAULT_LIST_LIMIT
from palapizza.web.deps import AppDep, SessionTokenDep
from palapizza.web.openapi import ErrorResponse

router = APIRouter(tags=["bookings"])


class BookingsResponse(BaseModel):
    ok: bool = True
    rows: list[Order] = Field(..., description="Orders sorted by scheduled date and time")
    count: int = Field(..., description="Row count reported by the store")


@router.get(
    "/bookings",
    summary="List orders",
    description="Staff only. Reads the orders sheet; limit is clamped to [1, 500].",
    operation_id="listBookings",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Store URL or session secret not configured"},
        502: {"model": ErrorResponse, "description": "Order store error"},
    },
)
@router.get("/admin/bookings", include_in_schema=False)
async def list_bookings(
    app: AppDep,
    token: SessionTokenDep,
    limit: Annotated[str | None, Query(description="Maximum number of rows")] = None,
) -> BookingsResponse:
    rows, count = await app.list_orders(token, limit if limit is not None else DEFAULT_LIST_LIMIT)
    return BookingsResponse(rows=rows, count=count)
