"""FastAPI endpoints for browsing and managing the catalogue."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import admin_principal
from storefront.api.schemas import (
    CategoryRequest,
    CategoryResponse,
    CreateProductRequest,
    DeletedResponse,
    ProductResponse,
    UpdateProductRequest,
)
from storefront.catalogue.category import Category
from storefront.catalogue.listing import active_categories, list_products, product_by_slug
from storefront.catalogue.management import (
    AddCategory,
    AddProduct,
    DeactivateCategory,
    DeactivateProduct,
    RenameCategory,
    UpdateProduct,
)
from storefront.catalogue.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def get_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(category) for category in active_categories()]


@category_router.post(
    "",
    status_code=201,
    response_model=CategoryResponse,
    dependencies=[Depends(admin_principal("Only admins can create categories"))],
)
async def create_category(body: CategoryRequest) -> CategoryResponse:
    category_id = current_domain.process(AddCategory(name=body.name), asynchronous=False)
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(admin_principal("Only admins can update categories"))],
)
async def update_category(category_id: str, body: CategoryRequest) -> CategoryResponse:
    category_id = current_domain.process(RenameCategory(category_id=category_id, name=body.name), asynchronous=False)
    return CategoryResponse.from_category(current_domain.repository_for(Category).get(category_id))


@category_router.delete(
    "/{category_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(admin_principal("Only admins can delete categories"))],
)
async def delete_category(category_id: str) -> DeletedResponse:
    current_domain.process(DeactivateCategory(category_id=category_id), asynchronous=False)
    return DeletedResponse(deleted=True)


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def get_products(
    search: str | None = None,
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort_by: str | None = None,
    limit: int = 10,
    offset: int = 0,
) -> list[ProductResponse]:
    products = list_products(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        limit=limit,
        offset=offset,
    )
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{slug}", response_model=ProductResponse)
async def get_product(slug: str) -> ProductResponse:
    return ProductResponse.from_product(product_by_slug(slug))


@product_router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    dependencies=[Depends(admin_principal("Only admins can create products"))],
)
async def create_product(body: CreateProductRequest) -> ProductResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        images=body.images,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(admin_principal("Only admins can update products"))],
)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True))
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(current_domain.repository_for(Product).get(product_id))


@product_router.delete(
    "/{product_id}",
    response_model=DeletedResponse,
    dependencies=[Depends(admin_principal("Only admins can delete products"))],
)
async def delete_product(product_id: str) -> DeletedResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return DeletedResponse(deleted=True)
