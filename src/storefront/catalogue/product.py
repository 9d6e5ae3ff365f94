"""Product aggregate root.

Products are referenced live by carts and copied into orders at placement
time, so edits here never reach orders that were already placed.
"""

from datetime import UTC, datetime
from urllib.parse import urlparse

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, List, String, Text

from storefront.catalogue.events import (
    ProductAdded,
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductRatingRecalculated,
)
from storefront.catalogue.slug import slugify
from storefront.domain import storefront

# Attributes an admin may change after a product is listed
EDITABLE_FIELDS = ("name", "description", "price", "stock", "category", "images")


def is_url(value) -> bool:
    parsed = urlparse(value or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@storefront.aggregate
class Product:
    name: String(required=True, min_length=2, max_length=200, unique=True, sanitize=False)
    slug: String(required=True, max_length=220, sanitize=False)
    description: Text(required=True, sanitize=False)
    price: Float(required=True, min_value=0.0)
    stock: Integer(required=True, min_value=0)
    category: String(required=True, max_length=100, sanitize=False)
    images: List(content_type=String(max_length=500, sanitize=False), default=list)
    is_active: Boolean(default=True)
    average_rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def description_must_be_meaningful(self):
        if self.description is not None and len(self.description.strip()) < 10:
            raise ValidationError({"description": ["Description must be at least 10 characters long"]})

    @invariant.post
    def images_must_be_urls(self):
        for image in self.images or []:
            if not is_url(image):
                raise ValidationError({"images": [f"Image must be a valid URL: {image!r}"]})

    @classmethod
    def create(cls, name, description, price, stock, category, images=None):
        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            slug=slugify(name),
            description=description,
            price=price,
            stock=stock,
            category=category,
            images=list(images or []),
            is_active=True,
            average_rating=0.0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=product.name,
                slug=product.slug,
                price=product.price,
                category=product.category,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply a partial update. ``None`` values are ignored; a new name re-slugs the product."""
        changed = []
        for field_name in EDITABLE_FIELDS:
            value = changes.get(field_name)
            if value is None:
                continue
            if field_name == "name":
                value = value.strip()
                self.slug = slugify(value)
            if field_name == "images":
                value = list(value)
            setattr(self, field_name, value)
            changed.append(field_name)

        if not changed:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDetailsUpdated(product_id=self.id, changed_fields=",".join(changed)))

    def deactivate(self):
        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=now))

    def record_rating(self, average_rating):
        if self.average_rating == average_rating:
            return

        self.average_rating = average_rating
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductRatingRecalculated(product_id=self.id, average_rating=average_rating))
