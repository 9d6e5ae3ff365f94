"""Read side of orders: what a principal is allowed to see."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.principal import Principal, require_authenticated
from storefront.order.order import Order
from storefront.shared.errors import NotAuthorizedError
from storefront.shared.identifiers import ensure_identifier


def orders_for(principal: Principal) -> list[Order]:
    user_id = require_authenticated(principal)
    return current_domain.repository_for(Order).for_user(user_id)


def fetch_order(principal: Principal, order_id) -> Order:
    require_authenticated(principal)
    order_id = ensure_identifier(order_id, "order")

    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    if not principal.can_view(order.user_id):
        raise NotAuthorizedError("You are not authorized to access this order")
    return order
