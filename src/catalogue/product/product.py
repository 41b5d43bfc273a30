"""Product aggregate root with its embedded Review entity."""

from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from catalogue.domain import catalogue
from catalogue.exceptions import DuplicateReviewError
from catalogue.product.rating import aggregate_ratings

# Fields an admin update must supply, in the order the API documents them
EDITABLE_FIELDS = ("name", "price", "description", "image", "brand", "category", "count_in_stock")


@catalogue.entity(part_of="Product")
class Review:
    """One customer's review. Reviews are append-only."""

    name: String(required=True, max_length=255)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text(required=True)
    user_id: Identifier(required=True)
    position: Integer(default=0, min_value=0)
    submitted_at: DateTime(default=datetime.now)


@catalogue.aggregate
class Product:
    """Product aggregate root.

    ``num_reviews`` and ``rating`` are derived from ``reviews`` and only
    change through :meth:`add_review`. Concurrent writers are detected by
    protean's aggregate ``_version``, which the repository checks on every save.
    """

    name: String(required=True, max_length=255)
    price: Float(default=0.0, min_value=0.0)
    brand: String(max_length=100)
    category: String(max_length=100)
    description: Text()
    image: String(max_length=500)
    count_in_stock: Integer(default=0, min_value=0)
    num_reviews: Integer(default=0, min_value=0)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    user_id: Identifier()
    reviews: HasMany(Review)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def unreviewed_product_has_no_rating(self):
        if not self.num_reviews and self.rating:
            raise ValidationError({"rating": ["A product without reviews cannot carry a rating"]})

    @classmethod
    def create(cls, user_id=None, **fields):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(user_id=user_id, created_at=now, updated_at=now, **fields)
        product.raise_(
            ProductCreated(
                product_id=product.id,
                user_id=user_id,
                name=product.name,
                created_at=now,
            )
        )
        return product

    def update_details(self, name, price, description, image, brand, category, count_in_stock):
        """Overwrite every editable field. There is no partial update."""
        from catalogue.product.events import ProductDetailsUpdated

        now = datetime.now()
        with atomic_change(self):
            self.name = name
            self.price = price
            self.description = description
            self.image = image
            self.brand = brand
            self.category = category
            self.count_in_stock = count_in_stock
            self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=name,
                price=price,
                brand=brand,
                category=category,
                count_in_stock=count_in_stock,
                updated_at=now,
            )
        )

    def reviewed_by(self, user_id) -> bool:
        return any(str(review.user_id) == str(user_id) for review in self.reviews)

    def add_review(self, user_id, name, rating, comment):
        """Append a review by ``user_id`` and recompute the aggregate rating."""
        from catalogue.product.events import ProductReviewed

        if self.reviewed_by(user_id):
            raise DuplicateReviewError({"review": ["Product already reviewed"]})

        now = datetime.now()
        review = Review(
            name=name,
            rating=rating,
            comment=comment,
            user_id=user_id,
            position=len(self.reviews),
            submitted_at=now,
        )

        with atomic_change(self):
            self.add_reviews(review)
            summary = aggregate_ratings(self.reviews)
            self.num_reviews = summary.count
            self.rating = summary.rating
            self.updated_at = now

        self.raise_(
            ProductReviewed(
                product_id=self.id,
                user_id=user_id,
                rating=review.rating,
                num_reviews=self.num_reviews,
                average_rating=self.rating,
                reviewed_at=now,
            )
        )
        return review

    def ordered_reviews(self) -> list:
        """Reviews in submission order, whatever order the store returned them in."""
        return sorted(self.reviews, key=lambda review: review.position)
