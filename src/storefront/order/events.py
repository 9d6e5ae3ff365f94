"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer turned (part of) their cart into an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    payment_method = String(required=True, max_length=20, sanitize=False)
    payment_status = String(required=True, max_length=20, sanitize=False)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20, sanitize=False)
    new_status = String(required=True, max_length=20, sanitize=False)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled the order before it shipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20, sanitize=False)
    cancelled_at = DateTime(required=True)
