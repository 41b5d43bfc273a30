"""FastAPI endpoints for the Catalogue.

Public: product search, top-rated and detail. Authenticated users may
review a product; admins create, update and delete products.
"""

from fastapi import APIRouter, Depends, Query

from catalogue import settings
from catalogue.api.auth import CurrentUser, get_current_user, require_admin
from catalogue.api.schemas import (
    MessageResponse,
    ProductPageResponse,
    ProductResponse,
    SubmitReviewRequest,
    UpdateProductRequest,
)
from catalogue.product.administration import AdminService
from catalogue.product.listing import CatalogService
from catalogue.product.reviewing import ReviewService

product_router = APIRouter(prefix="/products", tags=["products"])


# --- Public endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def search_products(keyword: str | None = None, page_number: str | None = None) -> ProductPageResponse:
    """List products, optionally filtered by a name keyword, 10 per page."""
    page = CatalogService().search_products(keyword=keyword, page_number=page_number)
    return ProductPageResponse(
        items=[ProductResponse.from_product(product) for product in page.items],
        page_number=page.page_number,
        total_pages=page.total_pages,
    )


@product_router.get("/top", response_model=list[ProductResponse])
async def top_products(limit: int = Query(settings.TOP_PRODUCTS_LIMIT, ge=1, le=50)) -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in CatalogService().top_products(limit)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(CatalogService().get_product(product_id))


# --- Authenticated endpoints ---


@product_router.post("/{product_id}/reviews", status_code=201, response_model=MessageResponse)
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    user: CurrentUser = Depends(get_current_user),
) -> MessageResponse:
    ReviewService().submit_review(product_id, user, rating=body.rating, comment=body.comment)
    return MessageResponse(message="Review added")


# --- Admin endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(admin: CurrentUser = Depends(require_admin)) -> ProductResponse:
    return ProductResponse.from_product(AdminService().create_product(admin))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    admin: CurrentUser = Depends(require_admin),
) -> ProductResponse:
    product = AdminService().update_product(product_id, body.model_dump())
    return ProductResponse.from_product(product)


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, admin: CurrentUser = Depends(require_admin)) -> MessageResponse:
    AdminService().delete_product(product_id)
    return MessageResponse(message="Product removed")
