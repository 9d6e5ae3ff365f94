"""Order placement: turn the caller's cart (or a selection from it) into an order.

The handler runs every check before it writes anything: input shape, cart
presence and size, the selection, and that each product still exists. Only
then is the order stored and the ordered lines dropped from the cart.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, List, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.order.order import Order, PaymentMethod, ShippingAddress
from storefront.shared.identifiers import IdentifierListValidator, ensure_identifier

logger = structlog.get_logger(__name__)

# Anti-abuse ceiling on cart size at checkout, not configurable per user
MAX_CART_ITEMS = 20


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    selected_product_ids = List(
        content_type=String(sanitize=False),
        validators=[IdentifierListValidator("product")],
    )
    payment_method = String(required=True, choices=PaymentMethod)
    address = String(required=True, min_length=5, max_length=255, sanitize=False)
    city = String(required=True, min_length=2, max_length=100, sanitize=False)
    zip = String(required=True, min_length=3, max_length=20, sanitize=False)
    country = String(required=True, min_length=2, max_length=100, sanitize=False)


def _working_set(cart, selected_product_ids):
    if not selected_product_ids:
        return list(cart.items)

    wanted = set(selected_product_ids)
    return [item for item in cart.items if str(item.product_id) in wanted]


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        selected = [ensure_identifier(product_id, "product") for product_id in command.selected_product_ids or []]

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        if len(cart.items) > MAX_CART_ITEMS:
            logger.warning("Order rejected, cart too large", user_id=str(command.user_id), lines=len(cart.items))
            raise ValidationError({"cart": ["Exceeded maximum cart items"]})

        working_set = _working_set(cart, selected)
        if not working_set:
            raise ValidationError({"selected_product_ids": ["Selected items not found in cart"]})

        product_repo = current_domain.repository_for(Product)
        lines = []
        for item in working_set:
            product = product_repo.get_or_none(str(item.product_id))
            if product is None:
                raise ObjectNotFoundError(f"Product {item.product_id} not found")
            lines.append(
                {
                    "product_id": str(product.id),
                    "name": product.name,
                    "price": product.price,
                    "quantity": item.quantity,
                }
            )

        order = Order.place(
            user_id=command.user_id,
            lines=lines,
            payment_method=command.payment_method,
            shipping=ShippingAddress(
                address=command.address,
                city=command.city,
                zip=command.zip,
                country=command.country,
            ),
        )
        current_domain.repository_for(Order).add(order)

        cart.check_out([line["product_id"] for line in lines], order_id=order.id)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total=order.total,
            payment_method=order.payment.method,
        )
        return str(order.id)
