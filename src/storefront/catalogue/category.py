"""Category aggregate root for grouping products."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.catalogue.events import CategoryAdded, CategoryDeactivated, CategoryRenamed
from storefront.catalogue.slug import slugify
from storefront.domain import storefront


def _clean_name(name):
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError({"name": ["Category name cannot be empty"]})
    return cleaned


@storefront.aggregate
class Category:
    """A named grouping of products. Deleting a category only deactivates it."""

    name: String(required=True, max_length=100, unique=True, sanitize=False)
    slug: String(required=True, max_length=120, sanitize=False)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name):
        cleaned = _clean_name(name)
        now = datetime.now(UTC)

        category = cls(
            name=cleaned,
            slug=slugify(cleaned),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryAdded(category_id=category.id, name=category.name, slug=category.slug))
        return category

    def rename(self, name):
        cleaned = _clean_name(name)
        previous_name = self.name

        self.name = cleaned
        self.slug = slugify(cleaned)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryRenamed(
                category_id=self.id,
                previous_name=previous_name,
                name=self.name,
                slug=self.slug,
            )
        )

    def deactivate(self):
        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(CategoryDeactivated(category_id=self.id, deactivated_at=now))


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name: str) -> Category | None:
        return self.query.filter(name=(name or "").strip()).all().first

    def active(self) -> list[Category]:
        return self.query.filter(is_active=True).order_by("-created_at").limit(None).all().items
