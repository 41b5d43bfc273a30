"""Pydantic request/response schemas for the Catalogue API.

These are separate from the Product aggregate: the API layer is the
external contract, the aggregate is the internal model.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class UpdateProductRequest(BaseModel):
    """Every editable field is required; updates never merge with stored values."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Airpods Wireless Bluetooth Headphones",
                    "price": 89.99,
                    "description": "Bluetooth technology lets you connect it with compatible devices wirelessly.",
                    "image": "/images/airpods.jpg",
                    "brand": "Apple",
                    "category": "Electronics",
                    "count_in_stock": 10,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str
    image: str = Field(..., max_length=500)
    brand: str = Field(..., max_length=100)
    category: str = Field(..., max_length=100)
    count_in_stock: int = Field(..., ge=0)


class SubmitReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)


# --- Response Schemas ---


class ReviewResponse(BaseModel):
    name: str
    rating: int
    comment: str
    user_id: str
    submitted_at: datetime | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    brand: str | None = None
    category: str | None = None
    description: str | None = None
    image: str | None = None
    count_in_stock: int
    num_reviews: int
    rating: float
    user_id: str | None = None
    reviews: list[ReviewResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            price=product.price,
            brand=product.brand,
            category=product.category,
            description=product.description,
            image=product.image,
            count_in_stock=product.count_in_stock,
            num_reviews=product.num_reviews,
            rating=product.rating,
            user_id=str(product.user_id) if product.user_id else None,
            reviews=[
                ReviewResponse(
                    name=review.name,
                    rating=review.rating,
                    comment=review.comment,
                    user_id=str(review.user_id),
                    submitted_at=review.submitted_at,
                )
                for review in product.ordered_reviews()
            ],
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    page_number: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str
