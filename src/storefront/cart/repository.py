"""Cart lookups keyed by the owning user."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        return self.query.filter(user_id=str(user_id)).all().first

    def find_or_create(self, user_id) -> Cart:
        """Return the user's cart, creating and persisting an empty one if needed."""
        cart = self.for_user(user_id)
        if cart is None:
            cart = Cart.create(user_id=str(user_id))
            self.add(cart)
        return cart


def cart_for(user_id) -> Cart:
    return current_domain.repository_for(Cart).find_or_create(user_id)
