"""Order status changes: the admin override and customer cancellation."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.errors import NotAuthorizedError
from storefront.shared.identifiers import ensure_identifier

logger = structlog.get_logger(__name__)


class KnownStatusValidator:
    """Field validator accepting only the five order statuses."""

    message = "Invalid order status"

    def __call__(self, value) -> None:
        if value not in {status.value for status in OrderStatus}:
            raise ValidationError(self.message)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = String(required=True, sanitize=False)
    status = String(required=True, sanitize=False, validators=[KnownStatusValidator()])


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = String(required=True, sanitize=False)
    user_id = Identifier(required=True)


def _load(order_id):
    order = current_domain.repository_for(Order).get_or_none(order_id)
    if order is None:
        raise ObjectNotFoundError("Order not found")
    return order


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order_id = ensure_identifier(command.order_id, "order")
        order = _load(order_id)

        previous_status = order.status
        order.change_status(command.status)
        current_domain.repository_for(Order).add(order)

        logger.info("Order status updated", order_id=order_id, previous=previous_status, status=order.status)
        return order_id

    @handle(CancelOrder)
    def cancel_order(self, command):
        order_id = ensure_identifier(command.order_id, "order")
        order = _load(order_id)

        if not order.belongs_to(command.user_id):
            logger.warning("Cancellation refused, not the owner", order_id=order_id, user_id=str(command.user_id))
            raise NotAuthorizedError("You are not authorized to cancel this order")

        if order.cancel():
            current_domain.repository_for(Order).add(order)
            logger.info("Order cancelled", order_id=order_id)
        return True
