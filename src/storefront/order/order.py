"""Order aggregate: an immutable receipt of what a customer bought.

Line items and the total are captured once, at placement, from the products
as they were at that moment. After placement only the status moves.

Status:
    PLACED → PROCESSING → SHIPPED → DELIVERED, plus CANCELLED.

Admins may overwrite the status with any of the five values. Customers may
only cancel, and only while the order is PLACED or PROCESSING.
"""

import random
import time
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "placed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"


# States from which the customer may cancel
_CANCELLABLE_STATES = {OrderStatus.PLACED, OrderStatus.PROCESSING}


def new_transaction_id() -> str:
    """Opaque payment reference: millisecond timestamp plus a random suffix."""
    return f"TXN-{int(time.time() * 1000)}-{random.randint(0, 999):03d}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order goes, as entered at checkout."""

    address = String(required=True, min_length=5, max_length=255, sanitize=False)
    city = String(required=True, min_length=2, max_length=100, sanitize=False)
    zip = String(required=True, min_length=3, max_length=20, sanitize=False)
    country = String(required=True, min_length=2, max_length=100, sanitize=False)


@storefront.value_object(part_of="Order")
class Payment:
    """How the order is paid. No gateway is involved: cash on delivery
    stays pending, every other method counts as paid straight away."""

    method = String(required=True, choices=PaymentMethod)
    status = String(required=True, choices=PaymentStatus)
    transaction_id = String(max_length=64, sanitize=False)

    @classmethod
    def for_method(cls, method):
        method = PaymentMethod(method)
        if method == PaymentMethod.COD:
            return cls(method=method.value, status=PaymentStatus.PENDING.value)
        return cls(
            method=method.value,
            status=PaymentStatus.PAID.value,
            transaction_id=new_transaction_id(),
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """Snapshot of a product line at placement time."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200, sanitize=False)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    payment = ValueObject(Payment, required=True)
    shipping = ValueObject(ShippingAddress, required=True)
    placed_at = DateTime(required=True)
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, lines, payment_method, shipping):
        """Create an order from product snapshots.

        ``lines`` is a sequence of dicts with ``product_id``, ``name``,
        ``price`` and ``quantity``, in cart order. The total is summed in
        that same order and never recomputed afterwards.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = []
        total = 0.0
        for line in lines:
            item = OrderItem(
                product_id=line["product_id"],
                name=line["name"],
                price=line["price"],
                quantity=line["quantity"],
            )
            total += item.price * item.quantity
            items.append(item)

        payment = Payment.for_method(payment_method)
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            total=total,
            status=OrderStatus.PLACED.value,
            payment=payment,
            shipping=shipping,
            placed_at=now,
            updated_at=now,
        )
        order.add_items(items)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(items),
                total=total,
                payment_method=payment.method,
                payment_status=payment.status,
                placed_at=now,
            )
        )
        return order

    def belongs_to(self, user_id) -> bool:
        return user_id is not None and str(self.user_id) == str(user_id)

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    def change_status(self, new_status):
        """Admin override: any of the five statuses, from any status."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": ["Invalid order status"]}) from None

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self):
        """Customer cancellation. Returns ``False`` when already cancelled."""
        current = OrderStatus(self.status)
        if current == OrderStatus.CANCELLED:
            return False
        if current not in _CANCELLABLE_STATES:
            raise ValidationError({"status": ["Cannot cancel an order that is already shipped or delivered"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=current.value,
                cancelled_at=now,
            )
        )
        return True
