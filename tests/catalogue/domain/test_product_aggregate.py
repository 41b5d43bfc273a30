"""Tests for the Product aggregate root and its Review entity."""

import pytest
from catalogue.exceptions import DuplicateReviewError
from catalogue.product.events import ProductCreated, ProductDetailsUpdated, ProductReviewed
from catalogue.product.product import EDITABLE_FIELDS, Product, Review
from protean.exceptions import ValidationError
from protean.utils import DomainObjects
from protean.utils.reflection import declared_fields


@pytest.fixture()
def product():
    product = Product.create(user_id="admin-1", name="Airpods", price=89.99, brand="Apple")
    product._events.clear()
    return product


class TestProductConstruction:
    def test_element_type(self):
        assert Product.element_type == DomainObjects.AGGREGATE
        assert Review.element_type == DomainObjects.ENTITY

    def test_declared_fields(self):
        fields = declared_fields(Product)
        for name in EDITABLE_FIELDS:
            assert name in fields
        for name in ("num_reviews", "rating", "reviews", "user_id", "created_at", "updated_at"):
            assert name in fields

    def test_create_sets_defaults(self):
        product = Product.create(name="Camera")
        assert product.price == 0.0
        assert product.count_in_stock == 0
        assert product.num_reviews == 0
        assert product.rating == 0.0
        assert product.created_at == product.updated_at

    def test_create_raises_product_created(self):
        product = Product.create(user_id="admin-1", name="Camera")
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductCreated)
        assert event.product_id == product.id
        assert event.user_id == "admin-1"
        assert event.name == "Camera"

    def test_name_is_required(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(price=10.0)
        assert "name" in exc.value.messages

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Product.create(name="Camera", price=-1.0)
        assert "price" in exc.value.messages


class TestAddReview:
    def test_first_review_sets_count_and_rating(self, product):
        product.add_review(user_id="u1", name="Alice", rating=4, comment="Good")
        assert product.num_reviews == 1
        assert product.rating == 4.0

    def test_rating_is_mean_of_all_reviews(self, product):
        for user_id, rating in (("u1", 4), ("u2", 5), ("u3", 3)):
            product.add_review(user_id=user_id, name=user_id, rating=rating, comment="ok")
        assert product.num_reviews == 3
        assert product.rating == 4.0

        product.add_review(user_id="u4", name="u4", rating=2, comment="meh")
        assert product.num_reviews == 4
        assert product.rating == 3.5

    def test_review_records_author(self, product):
        review = product.add_review(user_id="u1", name="Alice", rating=5, comment="Great")
        assert review.user_id == "u1"
        assert review.name == "Alice"
        assert review.comment == "Great"
        assert review.submitted_at is not None

    def test_duplicate_review_rejected(self, product):
        product.add_review(user_id="u1", name="Alice", rating=4, comment="Good")

        with pytest.raises(DuplicateReviewError) as exc:
            product.add_review(user_id="u1", name="Alice", rating=1, comment="Changed my mind")

        assert exc.value.kind == "DuplicateReview"
        assert exc.value.messages == {"review": ["Product already reviewed"]}
        assert product.num_reviews == 1
        assert product.rating == 4.0

    def test_reviewed_by_compares_identifiers_as_text(self, product):
        product.add_review(user_id="42", name="Alice", rating=4, comment="Good")
        assert product.reviewed_by(42)
        assert not product.reviewed_by("43")

    def test_ordered_reviews_follow_submission(self, product):
        for user_id in ("u1", "u2", "u3"):
            product.add_review(user_id=user_id, name=user_id, rating=3, comment="ok")
        assert [review.user_id for review in product.ordered_reviews()] == ["u1", "u2", "u3"]

    def test_out_of_range_rating_rejected_by_entity(self, product):
        with pytest.raises(ValidationError):
            product.add_review(user_id="u1", name="Alice", rating=6, comment="Too good")

    def test_raises_product_reviewed(self, product):
        product.add_review(user_id="u1", name="Alice", rating=5, comment="Great")
        event = product._events[-1]
        assert isinstance(event, ProductReviewed)
        assert event.rating == 5
        assert event.num_reviews == 1
        assert event.average_rating == 5.0


class TestUpdateDetails:
    def test_overwrites_every_editable_field(self, product):
        product.update_details(
            name="Airpods Pro",
            price=249.0,
            description="Noise cancelling",
            image="/images/airpods-pro.jpg",
            brand="Apple",
            category="Electronics",
            count_in_stock=7,
        )
        assert product.name == "Airpods Pro"
        assert product.price == 249.0
        assert product.description == "Noise cancelling"
        assert product.image == "/images/airpods-pro.jpg"
        assert product.category == "Electronics"
        assert product.count_in_stock == 7

    def test_leaves_reviews_untouched(self, product):
        product.add_review(user_id="u1", name="Alice", rating=4, comment="Good")
        product.update_details(
            name="Airpods", price=1.0, description="", image="", brand="", category="", count_in_stock=0
        )
        assert product.num_reviews == 1
        assert product.rating == 4.0

    def test_raises_product_details_updated(self, product):
        product.update_details(
            name="Airpods 2", price=99.0, description="d", image="i", brand="b", category="c", count_in_stock=1
        )
        event = product._events[-1]
        assert isinstance(event, ProductDetailsUpdated)
        assert event.name == "Airpods 2"
        assert event.price == 99.0

    def test_negative_stock_rejected(self, product):
        with pytest.raises(ValidationError):
            product.update_details(
                name="Airpods", price=1.0, description="d", image="i", brand="b", category="c", count_in_stock=-1
            )
