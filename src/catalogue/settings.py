"""Runtime settings for the catalogue service.

Storage and messaging are configured in ``domain.toml``; the values here
cover the service layer and the HTTP edge.
"""

import os

# Listing
PAGE_SIZE = 10  # fixed, clients cannot change it
TOP_PRODUCTS_LIMIT = 3

# Optimistic concurrency
SAVE_RETRY_ATTEMPTS = int(os.getenv("CATALOGUE_SAVE_RETRY_ATTEMPTS", "5"))

# Authentication
JWT_SECRET = os.getenv("JWT_SECRET", "devsecret")
JWT_ALGORITHM = "HS256"
JWT_TTL_DAYS = int(os.getenv("JWT_TTL_DAYS", "7"))

# Stub product placeholders used by the "create, then edit" admin workflow
STUB_PRODUCT_DEFAULTS = {
    "name": "Sample name",
    "price": 0.0,
    "image": "/images/sample.jpg",
    "brand": "Sample Brand",
    "category": "Sample Category",
    "count_in_stock": 0,
    "num_reviews": 0,
    "description": "Sample description",
}
