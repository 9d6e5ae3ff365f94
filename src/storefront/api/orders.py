"""FastAPI endpoints for placing, reading and moving orders."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import (
    admin_principal,
    authenticated_principal,
    authenticated_user_id,
    current_principal,
)
from storefront.api.schemas import (
    CancelOrderResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
)
from storefront.identity.principal import Principal
from storefront.order.placement import PlaceOrder
from storefront.order.queries import fetch_order, orders_for
from storefront.order.status import CancelOrder, UpdateOrderStatus

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(authenticated_principal),
) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        payment_method=body.payment_method,
        address=body.shipping.address,
        city=body.shipping.city,
        zip=body.shipping.zip,
        country=body.shipping.country,
        selected_product_ids=body.selected_product_ids or [],
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(fetch_order(principal, order_id))


@order_router.get("", response_model=list[OrderResponse])
async def get_orders(principal: Principal = Depends(current_principal)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in orders_for(principal)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    return OrderResponse.from_order(fetch_order(principal, order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(admin_principal("Only admin can update order status")),
) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(fetch_order(principal, order_id))


@order_router.post("/{order_id}/cancel", response_model=CancelOrderResponse)
async def cancel_order(order_id: str, user_id: str = Depends(authenticated_user_id)) -> CancelOrderResponse:
    cancelled = current_domain.process(CancelOrder(order_id=order_id, user_id=user_id), asynchronous=False)
    return CancelOrderResponse(cancelled=bool(cancelled))
