"""Repository for the Product aggregate.

Adds keyword pagination, top-N ranking and version-checked writes to the
base protean repository. Writes for one product are serialized through a
per-product re-entrant lock. Every write also relies on protean's aggregate
``_version`` check, so a writer holding a stale copy (another process, or
one that skipped the lock) fails instead of overwriting.
"""

import functools
import re
import threading
from contextlib import contextmanager

from protean import UnitOfWork
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.exceptions import (
    CatalogueError,
    ProductNotFoundError,
    StorageConflictError,
    StorageUnavailableError,
)
from catalogue.product.product import Product, Review
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)

# Characters SQL providers treat specially inside LIKE patterns
_LIKE_SPECIALS = re.compile(r"[%_\\]")

_LISTING_ORDER = ["created_at", "id"]


class ProductLockTable:
    """Per-product re-entrant locks, kept only while somebody holds or waits on them."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries = {}  # product id -> [lock, holders]

    @contextmanager
    def hold(self, product_id):
        key = str(product_id)
        with self._guard:
            entry = self._entries.setdefault(key, [threading.RLock(), 0])
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if not entry[1]:
                    del self._entries[key]

    def __contains__(self, product_id) -> bool:
        return str(product_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


_product_locks = ProductLockTable()


def _storage_call(method):
    """Let catalogue and validation errors through; wrap anything else."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except (CatalogueError, ValidationError):
            raise
        except Exception as exc:
            logger.exception("storage_failure", operation=method.__name__)
            raise StorageUnavailableError({"storage": [f"{method.__name__} failed: {exc}"]}) from exc

    return wrapper


@catalogue.repository(part_of=Product)
class ProductRepository:
    """Storage access for products and their embedded reviews."""

    @contextmanager
    def locked(self, product_id):
        """Hold the product's lock; re-entrant, so ``save`` may run inside it."""
        with _product_locks.hold(product_id):
            yield

    @_storage_call
    def create(self, defaults) -> Product:
        return self.save(Product.create(**defaults))

    @_storage_call
    def get_by_id(self, product_id) -> Product:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFoundError.for_id(product_id) from None

    @_storage_call
    def paginate(self, keyword: str | None, page_size: int, page_number: int) -> tuple[list[Product], int]:
        """Return one page of products whose name contains ``keyword`` and the total match count.

        Keywords holding LIKE wildcards are narrowed on their literal
        fragments in the store and matched exactly here, so ``_`` and ``%``
        only ever match themselves.
        """
        query = self._dao.query.order_by(_LISTING_ORDER)
        offset = page_size * (page_number - 1)

        if not keyword or not _LIKE_SPECIALS.search(keyword):
            if keyword:
                query = query.filter(name__icontains=keyword)
            results = query.offset(offset).limit(page_size).all()
            return list(results.items), results.total

        for fragment in _LIKE_SPECIALS.split(keyword):
            if fragment:
                query = query.filter(name__icontains=fragment)

        total = query.all().total
        if not total:
            return [], 0

        needle = keyword.lower()
        matches = [product for product in query.limit(total).all().items if needle in product.name.lower()]
        return matches[offset : offset + page_size], len(matches)

    @_storage_call
    def top_rated(self, limit: int) -> list[Product]:
        """Highest rated first; equal ratings fall back to creation time, then id."""
        leaders = self._dao.query.order_by("-rating").limit(limit).all().items
        if not leaders:
            return []

        # Pull every product tied with the weakest leader so the tie-break
        # does not depend on the store's natural order.
        cutoff = min(product.rating for product in leaders)
        contenders = self._dao.query.filter(rating__gte=cutoff)
        total = contenders.all().total
        candidates = contenders.limit(total).all().items

        ranked = sorted(candidates, key=lambda product: (-product.rating, product.created_at, str(product.id)))
        return ranked[:limit]

    @_storage_call
    def save(self, product: Product) -> Product:
        """Persist the whole aggregate if nobody wrote it since it was read.

        The unit of work commits before the lock is released and rolls back
        if protean's version check fails.
        """
        with self.locked(product.id):
            # protean only derives the next version at load time; an instance
            # saved more than once must still advance by one per write
            product._next_version = product._version + 1
            try:
                with UnitOfWork():
                    self.add(product)
            except ExpectedVersionError as exc:
                logger.warning("save_conflict", product_id=str(product.id), detail=str(exc))
                raise StorageConflictError({"product": [f"Product {product.id} changed concurrently"]}) from exc
            except ObjectNotFoundError:
                # Deleted between our read and this write
                raise ProductNotFoundError.for_id(product.id) from None

        return product

    @_storage_call
    def delete(self, product_id) -> None:
        """Hard delete; the product's reviews are removed with it."""
        with self.locked(product_id):
            product = self.get_by_id(product_id)

            review_dao = current_domain.repository_for(Review)._dao
            for review in list(product.reviews):
                review_dao.delete(review)
            self._dao.delete(product)

        logger.info("product_deleted", product_id=str(product_id))
