"""Rating aggregation over a product's reviews."""

from collections.abc import Iterable
from typing import NamedTuple


class RatingSummary(NamedTuple):
    count: int
    rating: float


def aggregate_ratings(reviews: Iterable) -> RatingSummary:
    """Return the review count and the mean of each review's ``rating``.

    The mean is kept at full precision; an empty sequence rates ``0.0``.
    """
    scores = [review.rating for review in reviews]
    if not scores:
        return RatingSummary(count=0, rating=0.0)
    return RatingSummary(count=len(scores), rating=sum(scores) / len(scores))
