"""Order lookups keyed by the owning user."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """Every order the user placed, newest first."""
        return self.query.filter(user_id=str(user_id)).order_by("-placed_at").limit(None).all().items
