"""SubmitReview: the only way reviews (and so ratings) change.

The fetch, duplicate check, append and save for one product run inside the
repository's per-product lock. If the conditional save still loses to a
writer outside that lock, the whole sequence is replayed against a fresh
copy, up to ``settings.SAVE_RETRY_ATTEMPTS`` times.
"""

from numbers import Number

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue import settings
from catalogue.exceptions import StorageConflictError
from catalogue.product.product import Product
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)


def coerce_rating(rating) -> int:
    """Accept 1..5 as an int, an integral float or a numeric string."""
    error = ValidationError({"rating": ["Rating must be a whole number between 1 and 5"]})

    if isinstance(rating, bool) or not isinstance(rating, Number | str):
        raise error

    try:
        number = float(rating.strip()) if isinstance(rating, str) else rating
        value = int(number)
    except (TypeError, ValueError, OverflowError):
        raise error from None

    if number != value or not 1 <= value <= 5:
        raise error
    return value


def validate_comment(comment) -> str:
    if not isinstance(comment, str) or not comment.strip():
        raise ValidationError({"comment": ["Comment is required"]})
    return comment


def replay_on_conflict(operation, *, attempts: int, product_id):
    """Run ``operation`` until its conditional save wins or ``attempts`` runs out."""
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except StorageConflictError:
            if attempt == attempts:
                logger.error("conflict_retries_exhausted", product_id=str(product_id), attempts=attempts)
                raise
            logger.info("conflict_retry", product_id=str(product_id), attempt=attempt)


class ReviewService:
    def __init__(self, repository=None, attempts: int | None = None):
        self._repository = repository
        self.attempts = attempts or settings.SAVE_RETRY_ATTEMPTS

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Product)

    def submit_review(self, product_id, author, rating, comment) -> None:
        """Attach ``author``'s review to the product. Returns nothing on success.

        ``author`` is the authenticated user context: anything with ``id``
        and ``name`` attributes.
        """
        score = coerce_rating(rating)
        comment = validate_comment(comment)

        def attempt():
            repo = self.repository
            with repo.locked(product_id):
                product = repo.get_by_id(product_id)
                product.add_review(user_id=author.id, name=author.name, rating=score, comment=comment)
                repo.save(product)
                return product

        product = replay_on_conflict(attempt, attempts=self.attempts, product_id=product_id)
        logger.info(
            "review_submitted",
            product_id=str(product_id),
            user_id=str(author.id),
            num_reviews=product.num_reviews,
            rating=product.rating,
        )
