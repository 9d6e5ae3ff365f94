"""Application tests for category and product management commands."""

from uuid import uuid4

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.category import Category
from storefront.catalogue.listing import active_categories, product_by_slug
from storefront.catalogue.management import (
    AddCategory,
    AddProduct,
    DeactivateCategory,
    DeactivateProduct,
    RenameCategory,
    UpdateProduct,
)
from storefront.catalogue.product import Product


def _add_category(name="Furniture"):
    return current_domain.process(AddCategory(name=name), asynchronous=False)


class TestCategoryCommands:
    def test_add_category_persists(self):
        category_id = _add_category()
        category = current_domain.repository_for(Category).get(category_id)
        assert category.slug == "furniture"

    def test_name_is_stored_as_entered(self):
        category_id = _add_category("Garden & Patio <Outdoor>")
        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Garden & Patio <Outdoor>"
        assert category.slug == "garden-patio-outdoor"

    def test_duplicate_category_is_rejected(self):
        _add_category()
        with pytest.raises(ValidationError) as exc:
            _add_category()
        assert exc.value.messages == {"name": ["Category already exists"]}

    def test_rename_category(self):
        category_id = _add_category()
        current_domain.process(RenameCategory(category_id=category_id, name="Home Furniture"), asynchronous=False)
        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Home Furniture"
        assert category.slug == "home-furniture"

    def test_rename_to_existing_name_is_rejected(self):
        _add_category("Garden")
        category_id = _add_category()
        with pytest.raises(ValidationError):
            current_domain.process(RenameCategory(category_id=category_id, name="Garden"), asynchronous=False)

    def test_malformed_category_id_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(RenameCategory(category_id="abc", name="Garden"), asynchronous=False)
        assert exc.value.messages == {"category_id": ["Invalid category ID"]}

    def test_unknown_category_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeactivateCategory(category_id=str(uuid4())), asynchronous=False)

    def test_deactivated_category_is_hidden(self):
        kept = _add_category("Garden")
        removed = _add_category()

        assert current_domain.process(DeactivateCategory(category_id=removed), asynchronous=False) is True

        assert [str(c.id) for c in active_categories()] == [kept]
        assert current_domain.repository_for(Category).get(removed).is_active is False


class TestProductCommands:
    def test_add_product_persists(self, add_product):
        product_id = add_product(name="Walnut Desk", price=250.0)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.slug == "walnut-desk"
        assert product.price == 250.0

    def test_duplicate_name_is_rejected(self, add_product):
        add_product(name="Walnut Desk")
        with pytest.raises(ValidationError) as exc:
            add_product(name="Walnut Desk")
        assert exc.value.messages == {"name": ["Product with this name already exists"]}

    def test_zero_price_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            AddProduct(name="Free Thing", description="Nothing to pay here.", price=0.0, stock=1, category="misc")
        assert "price" in exc.value.messages

    def test_partial_update(self, product_id):
        current_domain.process(UpdateProduct(product_id=product_id, stock=9), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock == 9
        assert product.name == "Walnut Desk"
        assert product.price == 250.0

    def test_rename_reslugs(self, product_id):
        current_domain.process(UpdateProduct(product_id=product_id, name="Oak Desk"), asynchronous=False)
        assert str(product_by_slug("oak-desk").id) == product_id

    def test_rename_to_another_products_name_is_rejected(self, add_product, product_id):
        add_product(name="Oak Desk")
        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateProduct(product_id=product_id, name="Oak Desk"), asynchronous=False)
        assert exc.value.messages == {"name": ["Product with this name already exists"]}

    def test_keeping_own_name_is_allowed(self, product_id):
        current_domain.process(UpdateProduct(product_id=product_id, name="Walnut Desk", price=99.0), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).price == 99.0

    def test_update_without_images_keeps_images(self, add_product):
        product_id = add_product(images=["https://cdn.example.com/a.jpg"])
        current_domain.process(UpdateProduct(product_id=product_id, stock=1), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).images == ["https://cdn.example.com/a.jpg"]

    def test_update_malformed_id(self):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateProduct(product_id="abc", stock=1), asynchronous=False)
        assert exc.value.messages == {"product_id": ["Invalid product ID"]}

    def test_update_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id=str(uuid4()), stock=1), asynchronous=False)

    def test_deactivate_hides_product(self, product_id):
        assert current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False) is True

        with pytest.raises(ObjectNotFoundError) as exc:
            product_by_slug("walnut-desk")
        assert str(exc.value) == "Product not found"
