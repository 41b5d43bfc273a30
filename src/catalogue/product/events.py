"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A stub product was added to the catalogue, ready to be edited."""

    __version__ = 1

    product_id: Identifier(required=True)
    user_id: Identifier()
    name: String(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductDetailsUpdated:
    """An admin overwrote the editable fields of a product."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    brand: String()
    category: String()
    count_in_stock: Integer(required=True)
    updated_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductReviewed:
    """A review was appended and the aggregate rating recomputed."""

    __version__ = 1

    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    num_reviews: Integer(required=True)
    average_rating: Float(required=True)
    reviewed_at: DateTime(required=True)
