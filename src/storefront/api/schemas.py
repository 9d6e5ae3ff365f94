"""Pydantic request/response schemas for the storefront API.

Request models only fix the shape of a payload. Bounds and business rules
are enforced by the domain commands, so clients get one consistent set of
validation messages.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class SignUpRequest(BaseModel):
    name: str
    email: str
    password: str

    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Ada Lovelace", "email": "ada@example.com", "password": "s3cret-pass"}]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(id=str(user.id), name=user.name, email=user.email, role=user.role)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CategoryRequest(BaseModel):
    name: str


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    is_active: bool
    created_at: datetime | None = None

    @classmethod
    def from_category(cls, category) -> "CategoryResponse":
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            is_active=category.is_active,
            created_at=category.created_at,
        )


class CreateProductRequest(BaseModel):
    name: str
    description: str
    price: float
    stock: int
    category: str
    images: list[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Espresso Grinder",
                    "description": "Conical burr grinder with 40 settings.",
                    "price": 129.0,
                    "stock": 25,
                    "category": "kitchen",
                    "images": ["https://cdn.example.com/grinder.jpg"],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    category: str | None = None
    images: list[str] | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    price: float
    stock: int
    category: str
    images: list[str]
    is_active: bool
    average_rating: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category=product.category,
            images=list(product.images or []),
            is_active=product.is_active,
            average_rating=product.average_rating or 0.0,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CartItemResponse(BaseModel):
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            items=[CartItemResponse(product_id=str(i.product_id), quantity=i.quantity) for i in cart.items],
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )


class ClearCartResponse(BaseModel):
    cleared: bool


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ShippingSchema(BaseModel):
    address: str
    city: str
    zip: str
    country: str


class PlaceOrderRequest(BaseModel):
    payment_method: str
    shipping: ShippingSchema
    selected_product_ids: list[str] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "card",
                    "shipping": {
                        "address": "221B Baker Street",
                        "city": "London",
                        "zip": "NW1 6XE",
                        "country": "UK",
                    },
                    "selected_product_ids": None,
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int


class PaymentResponse(BaseModel):
    method: str
    status: str
    transaction_id: str | None = None


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    total: float
    status: str
    payment: PaymentResponse
    shipping: ShippingSchema
    placed_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            total=order.total,
            status=order.status,
            payment=PaymentResponse(
                method=order.payment.method,
                status=order.payment.status,
                transaction_id=order.payment.transaction_id,
            ),
            shipping=ShippingSchema(
                address=order.shipping.address,
                city=order.shipping.city,
                zip=order.shipping.zip,
                country=order.shipping.country,
            ),
            placed_at=order.placed_at,
            updated_at=order.updated_at,
        )


class CancelOrderResponse(BaseModel):
    cancelled: bool


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class AddReviewRequest(BaseModel):
    product_id: str
    rating: int
    comment: str | None = None


class UpdateReviewRequest(BaseModel):
    rating: int | None = None
    comment: str | None = None


class ReviewResponse(BaseModel):
    id: str
    product_id: str
    user_id: str
    rating: int
    comment: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> "ReviewResponse":
        return cls(
            id=str(review.id),
            product_id=str(review.product_id),
            user_id=str(review.user_id),
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class DeletedResponse(BaseModel):
    deleted: bool
