"""Catalogue management: commands and handlers for categories and products.

Only admins reach these commands; the HTTP layer checks the role before a
command is built.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, List, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.identifiers import ensure_identifier

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Category")
class AddCategory:
    name: String(required=True, max_length=100, sanitize=False)


@storefront.command(part_of="Category")
class RenameCategory:
    category_id: String(required=True, sanitize=False)
    name: String(required=True, max_length=100, sanitize=False)


@storefront.command(part_of="Category")
class DeactivateCategory:
    category_id: String(required=True, sanitize=False)


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, min_length=2, max_length=200, sanitize=False)
    description: Text(required=True, sanitize=False)
    price: Float(required=True, min_value=0.01)
    stock: Integer(required=True, min_value=0)
    category: String(required=True, max_length=100, sanitize=False)
    images: List(content_type=String(max_length=500, sanitize=False))


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: String(required=True, sanitize=False)
    name: String(min_length=2, max_length=200, sanitize=False)
    description: Text(sanitize=False)
    price: Float(min_value=0.01)
    stock: Integer(min_value=0)
    category: String(max_length=100, sanitize=False)
    images: List(content_type=String(max_length=500, sanitize=False))


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: String(required=True, sanitize=False)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(AddCategory)
    def add_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": ["Category already exists"]})

        category = Category.create(name=command.name)
        repo.add(category)
        logger.info("Category added", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(RenameCategory)
    def rename_category(self, command):
        category_id = ensure_identifier(command.category_id, "category")
        repo = current_domain.repository_for(Category)
        category = repo.get_or_none(category_id)
        if category is None:
            raise ObjectNotFoundError("Category not found")

        existing = repo.find_by_name(command.name)
        if existing is not None and str(existing.id) != category_id:
            raise ValidationError({"name": ["Category already exists"]})

        category.rename(command.name)
        repo.add(category)
        return category_id

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        category_id = ensure_identifier(command.category_id, "category")
        repo = current_domain.repository_for(Category)
        category = repo.get_or_none(category_id)
        if category is None:
            raise ObjectNotFoundError("Category not found")

        category.deactivate()
        repo.add(category)
        return True


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": ["Product with this name already exists"]})

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category=command.category,
            images=command.images,
        )
        repo.add(product)
        logger.info("Product added", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product_id = ensure_identifier(command.product_id, "product")
        repo = current_domain.repository_for(Product)
        product = repo.get_or_none(product_id)
        if product is None:
            raise ObjectNotFoundError("Product not found")

        if command.name:
            existing = repo.find_by_name(command.name)
            if existing is not None and str(existing.id) != product_id:
                raise ValidationError({"name": ["Product with this name already exists"]})

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category=command.category,
            images=command.images or None,
        )
        repo.add(product)
        return product_id

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        product_id = ensure_identifier(command.product_id, "product")
        repo = current_domain.repository_for(Product)
        product = repo.get_or_none(product_id)
        if product is None:
            raise ObjectNotFoundError("Product not found")

        product.deactivate()
        repo.add(product)
        logger.info("Product deactivated", product_id=product_id)
        return True
