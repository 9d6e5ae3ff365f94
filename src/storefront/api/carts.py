"""FastAPI endpoints for the signed-in user's cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import authenticated_user_id
from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    ClearCartResponse,
    UpdateCartItemRequest,
)
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.cart.repository import cart_for

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user_id: str = Depends(authenticated_user_id)) -> CartResponse:
    return CartResponse.from_cart(cart_for(user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, user_id: str = Depends(authenticated_user_id)) -> CartResponse:
    current_domain.process(AddToCart(user_id=user_id, product_id=body.product_id), asynchronous=False)
    return CartResponse.from_cart(cart_for(user_id))


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    user_id: str = Depends(authenticated_user_id),
) -> CartResponse:
    command = UpdateCartItem(user_id=user_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return CartResponse.from_cart(cart_for(user_id))


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, user_id: str = Depends(authenticated_user_id)) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=user_id, product_id=product_id), asynchronous=False)
    return CartResponse.from_cart(cart_for(user_id))


@cart_router.delete("", response_model=ClearCartResponse)
async def clear_cart(user_id: str = Depends(authenticated_user_id)) -> ClearCartResponse:
    cleared = current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return ClearCartResponse(cleared=bool(cleared))
