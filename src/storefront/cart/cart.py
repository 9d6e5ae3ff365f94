"""Cart aggregate: the single, lazily created cart each user shops with.

Adding a product that is already in the cart bumps its quantity by one;
setting a quantity overwrites it. Clearing empties the cart but keeps it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
)
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def product_ids(self):
        return [str(item.product_id) for item in self.items]

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_product(self, product_id):
        """Put one unit of a product in the cart."""
        now = datetime.now(UTC)
        existing = self.line_for(product_id)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=1, added_at=now))
            quantity = 1

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def set_quantity(self, product_id, quantity):
        """Overwrite the quantity of a product already in the cart."""
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive number"]})

        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError("Product not found in cart")

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_product(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            raise ObjectNotFoundError("Product not found in cart")

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        removed = len(self.items)
        if removed:
            self.remove_items(list(self.items))
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=removed))

    def check_out(self, product_ids, order_id=None):
        """Drop the lines that went into an order, leaving the rest in place."""
        wanted = {str(product_id) for product_id in product_ids}
        lines = [item for item in self.items if str(item.product_id) in wanted]
        if lines:
            self.remove_items(lines)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                order_id=str(order_id) if order_id else None,
                product_ids=[str(item.product_id) for item in lines],
            )
        )
