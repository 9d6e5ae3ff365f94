"""Domain events for the Category and Product aggregates."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Category")
class CategoryAdded:
    """A new category was created."""

    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True, max_length=100, sanitize=False)
    slug = String(required=True, max_length=120, sanitize=False)


@storefront.event(part_of="Category")
class CategoryRenamed:
    """A category's name (and with it, its slug) changed."""

    __version__ = 1

    category_id = Identifier(required=True)
    previous_name = String(required=True, max_length=100, sanitize=False)
    name = String(required=True, max_length=100, sanitize=False)
    slug = String(required=True, max_length=120, sanitize=False)


@storefront.event(part_of="Category")
class CategoryDeactivated:
    """A category was soft-deleted."""

    __version__ = 1

    category_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was listed in the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200, sanitize=False)
    slug = String(required=True, max_length=220, sanitize=False)
    price = Float(required=True)
    category = String(max_length=100, sanitize=False)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """One or more product attributes changed. ``changed_fields`` lists them, comma separated."""

    __version__ = 1

    product_id = Identifier(required=True)
    changed_fields = String(required=True, max_length=255, sanitize=False)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was soft-deleted and no longer shows in the storefront."""

    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRatingRecalculated:
    """The average review rating of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    average_rating = Float(required=True)
