"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import pytest
from catalogue.exceptions import CatalogueError, ProductNotFoundError
from catalogue.product.listing import CatalogService
from catalogue.product.reviewing import ReviewService
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the error raised by the last When step, if any."""
    return {"exc": None}


@pytest.fixture()
def capture(error):
    """Run an operation and stash any catalogue or validation error for later steps."""

    def _capture(operation):
        try:
            operation()
        except (CatalogueError, ValidationError) as exc:
            error["exc"] = exc

    return _capture


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a product in the catalogue", target_fixture="product_id")
def product_in_catalogue(make_product):
    return make_product(name="Airpods").id


@given(parsers.cfparse("the product was reviewed with ratings {ratings}"))
def product_was_reviewed(product_id, ratings, shopper):
    service = ReviewService()
    for i, rating in enumerate(ratings.split(",")):
        service.submit_review(product_id, shopper(f"earlier-{i}"), rating=int(rating), comment="ok")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product has {count:d} reviews"))
def product_has_reviews(product_id, count):
    assert CatalogService().get_product(product_id).num_reviews == count


@then(parsers.cfparse("the product rating is {rating:f}"))
def product_rating_is(product_id, rating):
    assert CatalogService().get_product(product_id).rating == pytest.approx(rating)


@then("the review is rejected as invalid")
@then("the update is rejected as invalid")
def rejected_as_invalid(error):
    assert isinstance(error["exc"], ValidationError)


@then("the product can no longer be found")
def product_gone(product_id):
    with pytest.raises(ProductNotFoundError):
        CatalogService().get_product(product_id)
