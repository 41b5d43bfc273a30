"""Catalogue error taxonomy.

Input problems use protean's ``ValidationError``. The classes below cover
the remaining outcomes; each carries a ``kind`` for the HTTP layer and a
``messages`` dict shaped like protean's (field -> list of messages).
"""


class CatalogueError(Exception):
    """Base class for catalogue outcomes that are reported to the caller."""

    kind = "CatalogueError"

    def __init__(self, messages: dict[str, list[str]]):
        super().__init__(messages)
        self.messages = messages


class ProductNotFoundError(CatalogueError):
    kind = "NotFound"

    @classmethod
    def for_id(cls, product_id) -> "ProductNotFoundError":
        return cls({"product": [f"Product {product_id} not found"]})


class DuplicateReviewError(CatalogueError):
    """The author already has a review on this product."""

    kind = "DuplicateReview"


class StorageConflictError(CatalogueError):
    """A version-checked write lost against a newer version of the same product."""

    kind = "StorageConflict"


class StorageUnavailableError(CatalogueError):
    """The store failed in a way the catalogue cannot interpret."""

    kind = "ServiceUnavailable"
