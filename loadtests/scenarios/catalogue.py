"""Catalogue load test scenarios.

Three stateful SequentialTaskSet journeys (admin product lifecycle, shopper
browsing and shopper reviewing) plus ReviewStormUser, which aims many
distinct reviewers at one product to exercise the per-product write path.
Steps in a journey execute in order; each depends on the previous step
succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, constant_pacing, task

from loadtests.data_generators import (
    admin,
    auth_headers,
    product_details,
    review_data,
    search_params,
    shopper,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BrowseState, ProductState


class AdminProductLifecycle(SequentialTaskSet):
    """Create stub -> Fill in details -> Read back -> Delete."""

    def on_start(self):
        self.state = ProductState()
        self.headers = auth_headers(admin())

    @task
    def create_stub(self):
        with self.client.post(
            "/products",
            headers=self.headers,
            catch_response=True,
            name="POST /products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["id"]
            else:
                resp.failure(f"Create product failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fill_in_details(self):
        payload = product_details()
        with self.client.put(
            f"/products/{self.state.product_id}",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="PUT /products/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_name = payload["name"]
            else:
                resp.failure(f"Update failed: {extract_error_detail(resp)}")

    @task
    def read_back(self):
        with self.client.get(
            f"/products/{self.state.product_id}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read back failed: {resp.status_code}")
            elif resp.json()["name"] != self.state.current_name:
                resp.failure("Read back returned a stale name")

    @task
    def maybe_delete(self):
        # Keep most products around so browsing has something to find
        if random.random() < 0.3:
            with self.client.delete(
                f"/products/{self.state.product_id}",
                headers=self.headers,
                catch_response=True,
                name="DELETE /products/{id}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.deleted = True
                else:
                    resp.failure(f"Delete failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperBrowseJourney(SequentialTaskSet):
    """Search -> Open a result -> Check the top-rated list."""

    def on_start(self):
        self.state = BrowseState()

    @task
    def search(self):
        with self.client.get(
            "/products",
            params=search_params(),
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code == 200:
                self.state.seen_product_ids = [item["id"] for item in resp.json()["items"]]
            else:
                resp.failure(f"Search failed: {resp.status_code}")
                self.interrupt()

    @task
    def open_result(self):
        if not self.state.seen_product_ids:
            return
        with self.client.get(
            f"/products/{random.choice(self.state.seen_product_ids)}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            # Admin journeys delete products concurrently
            if resp.status_code not in (200, 404):
                resp.failure(f"Product detail failed: {resp.status_code}")
            else:
                resp.success()

    @task
    def top_rated(self):
        self.client.get("/products/top", name="GET /products/top")

    @task
    def done(self):
        self.interrupt()


class ShopperReviewJourney(SequentialTaskSet):
    """Search -> Review a result -> Try to review it again (expect 400)."""

    def on_start(self):
        self.state = BrowseState()
        self.headers = auth_headers(shopper())

    @task
    def search(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            items = resp.json().get("items", []) if resp.status_code == 200 else []
            if not items:
                resp.success()
                self.interrupt()
            self.state.seen_product_ids = [item["id"] for item in items]

    @task
    def review(self):
        product_id = random.choice(self.state.seen_product_ids)
        with self.client.post(
            f"/products/{product_id}/reviews",
            json=review_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /products/{id}/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.reviewed_product_ids.append(product_id)
            elif resp.status_code == 404:
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Review failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def review_again(self):
        with self.client.post(
            f"/products/{self.state.reviewed_product_ids[-1]}/reviews",
            json=review_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /products/{id}/reviews [duplicate]",
        ) as resp:
            if resp.status_code == 400 and resp.json().get("kind") == "DuplicateReview":
                resp.success()
            else:
                resp.failure(f"Duplicate review was not rejected: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Locust user simulating everyday catalogue traffic.

    Weighted distribution:
    - 60% Shopper browsing (most common activity)
    - 25% Shopper reviewing
    - 15% Admin product lifecycle
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        ShopperBrowseJourney: 12,
        ShopperReviewJourney: 5,
        AdminProductLifecycle: 3,
    }


class ReviewStormUser(HttpUser):
    """Stress test: every user reviews the same hot product as a new reviewer.

    After the run, GET /products/{hot_product_id} should report exactly as
    many reviews as there were 201 responses.
    """

    wait_time = constant_pacing(0.1)
    hot_product_id = None

    def on_start(self):
        if ReviewStormUser.hot_product_id is None:
            resp = self.client.post("/products", headers=auth_headers(admin()), name="[STORM] POST /products")
            ReviewStormUser.hot_product_id = resp.json()["id"]

    @task
    def review_hot_product(self):
        with self.client.post(
            f"/products/{ReviewStormUser.hot_product_id}/reviews",
            json=review_data(),
            headers=auth_headers(shopper()),
            catch_response=True,
            name="[STORM] POST /products/{id}/reviews",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Storm review failed: {extract_error_detail(resp)}")
