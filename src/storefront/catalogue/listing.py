"""Read side of the catalogue: browsing and looking up active products."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront

DEFAULT_PAGE_SIZE = 10

SORTABLE_FIELDS = ("name", "price", "created_at", "average_rating", "stock")


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_name(self, name: str) -> Product | None:
        return self.query.filter(name=(name or "").strip()).all().first

    def active_by_slug(self, slug: str) -> Product | None:
        return self.query.filter(slug=slug, is_active=True).all().first

    def browse(
        self,
        search: str | None = None,
        category: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        sort_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Product]:
        query = self.query.filter(is_active=True)

        if search:
            query = query.filter(name__icontains=search)
        if category:
            query = query.filter(category=category)
        if min_price:
            query = query.filter(price__gte=min_price)
        if max_price:
            query = query.filter(price__lte=max_price)

        query = query.order_by(_ordering(sort_by))
        query = query.offset(offset or 0)
        return query.limit(limit or DEFAULT_PAGE_SIZE).all().items


def _ordering(sort_by: str | None) -> str:
    if not sort_by:
        return "-created_at"

    field_name = sort_by.lstrip("-")
    if field_name not in SORTABLE_FIELDS:
        raise ValidationError({"sort_by": [f"Cannot sort products by {field_name!r}"]})
    return sort_by


def list_products(**filters) -> list[Product]:
    return current_domain.repository_for(Product).browse(**filters)


def product_by_slug(slug: str) -> Product:
    product = current_domain.repository_for(Product).active_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return product


def active_categories() -> list[Category]:
    return current_domain.repository_for(Category).active()
