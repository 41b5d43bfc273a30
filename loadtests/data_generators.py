"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the catalogue's validation rules
and match the exact field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

from catalogue.api.auth import CurrentUser, create_token

fake = Faker()

SEARCH_KEYWORDS = ["phone", "camera", "speaker", "lamp", "watch", "desk", "sample"]


# ---------- Identities ----------


def shopper() -> CurrentUser:
    """A fresh non-admin user; ids are unique so duplicate reviews only happen on purpose."""
    return CurrentUser(id=f"lt-{uuid.uuid4().hex[:12]}", name=fake.name()[:255])


def admin() -> CurrentUser:
    return CurrentUser(id=f"lt-admin-{uuid.uuid4().hex[:8]}", name=fake.name()[:255], is_admin=True)


def auth_headers(user: CurrentUser) -> dict:
    """Bearer header signed with the service's JWT_SECRET."""
    return {"Authorization": f"Bearer {create_token(user)}"}


# ---------- Products ----------


def product_details() -> dict:
    """Generate an UpdateProductRequest payload; every editable field is present."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {random.choice(SEARCH_KEYWORDS).capitalize()} {uuid.uuid4().hex[:4]}",
        "price": round(random.uniform(1.0, 999.0), 2),
        "description": fake.paragraph(nb_sentences=3),
        "image": f"/images/{word.lower()}.jpg",
        "brand": fake.company()[:100],
        "category": random.choice(["Electronics", "Home", "Office", "Outdoors"]),
        "count_in_stock": random.randint(0, 50),
    }


def search_params() -> dict:
    params = {"page_number": random.randint(1, 3)}
    if random.random() < 0.7:
        params["keyword"] = random.choice(SEARCH_KEYWORDS)
    return params


# ---------- Reviews ----------


def review_data(rating: int | None = None) -> dict:
    """Generate a SubmitReviewRequest payload."""
    return {
        "rating": rating or random.randint(1, 5),
        "comment": fake.sentence(nb_words=12),
    }
