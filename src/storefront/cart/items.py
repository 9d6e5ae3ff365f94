"""Cart item management: commands and handler.

Every command carries the id of the signed-in user; the cart is always
looked up by that id, so users can only ever touch their own cart.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.identifiers import ensure_identifier


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, sanitize=False)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = String(required=True, sanitize=False)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = String(required=True, sanitize=False)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product_id = ensure_identifier(command.product_id, "product")

        product = current_domain.repository_for(Product).get_or_none(product_id)
        if product is None or not product.is_active:
            raise ObjectNotFoundError("Product not found")

        repo = current_domain.repository_for(Cart)
        cart = repo.find_or_create(command.user_id)
        cart.add_product(product_id)
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        product_id = ensure_identifier(command.product_id, "product")
        if command.quantity is None or command.quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive number"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart not found")

        cart.set_quantity(product_id, command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        product_id = ensure_identifier(command.product_id, "product")

        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError("Cart not found")

        cart.remove_product(product_id)
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            return False

        cart.clear()
        repo.add(cart)
        return True
