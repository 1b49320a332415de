from typing import Any

from fastapi import APIRouter
from pydantic import AliasChoices, BaseModel, Field

from palapizza.core.modules.order.models import OrderStatus, OrderSubmission
from palapizza.web.deps import AppDep, MobileDep, SessionTokenDep
from palapizza.web.openapi import ErrorResponse, OkResponse

router = APIRouter(prefix="/orders", tags=["orders"])


class SubmitOrderResponse(BaseModel):
    ok: bool = True
    skipped: bool | None = Field(None, description="Set when the request was dropped as spam")
    message: str | None = None
    response: Any = Field(None, description="Answer of the order store, parsed JSON or raw text")


class UpdateStatusRequest(BaseModel):
    id: str = Field("", description="Order ID")
    status: str = Field(
        "",
        description="NEW, CONFIRMED, DELIVERED, CANCELLED (Italian spellings accepted)",
        validation_alias=AliasChoices("status", "stato"),
    )
    notify: bool = Field(False, description="Also return a WhatsApp link with the customer message")


class UpdateStatusResponse(BaseModel):
    ok: bool = True
    status: OrderStatus
    result: Any = Field(None, description="Answer of the order store")
    whatsapp_url: str | None = None


@router.post(
    "",
    summary="Submit order",
    description="Public endpoint for table, pickup and delivery requests. Forwards the order to the store.",
    operation_id="submitOrder",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or malformed fields"},
        500: {"model": ErrorResponse, "description": "Order store not configured"},
        502: {"model": ErrorResponse, "description": "Order store error"},
    },
)
async def submit_order(submission: OrderSubmission, app: AppDep) -> SubmitOrderResponse:
    result = await app.submit_order(submission)
    if result is None:
        return SubmitOrderResponse(skipped=True)
    return SubmitOrderResponse(message="Ricevuto ✅", response=result)


@router.get("", summary="Orders endpoint liveness", operation_id="ordersPing")
async def ping() -> OkResponse:
    return OkResponse()


@router.post(
    "/status",
    summary="Update order status",
    description="Staff only. Moves an order to a new status in the store.",
    operation_id="updateOrderStatus",
    responses={
        400: {"model": ErrorResponse, "description": "Missing id or invalid status"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        500: {"model": ErrorResponse, "description": "Store URL or session secret not configured"},
        502: {"model": ErrorResponse, "description": "Order store error"},
    },
)
async def update_status(
    request: UpdateStatusRequest, app: AppDep, token: SessionTokenDep, mobile: MobileDep
) -> UpdateStatusResponse:
    status, result, whatsapp_url = await app.update_order_status(
        token, request.id, request.status, notify=request.notify, mobile=mobile
    )
    return UpdateStatusResponse(status=status, result=result, whatsapp_url=whatsapp_url)
