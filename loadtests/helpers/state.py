"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; there is no cross-user
sharing. State tracks product IDs returned by the API so follow-up requests
can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ProductState:
    """Tracks state for a single admin-managed product lifecycle."""

    product_id: str | None = None
    current_name: str | None = None
    deleted: bool = False


@dataclass
class BrowseState:
    """Tracks products a shopper has seen while browsing."""

    seen_product_ids: list[str] = field(default_factory=list)
    reviewed_product_ids: list[str] = field(default_factory=list)
