"""Catalogue load testing: Locust entry point.

Discovers all user classes from the scenarios package.
Run specific scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Everyday traffic only:
    locust -f loadtests/locustfile.py CatalogueUser

    # One hot product, many reviewers:
    locust -f loadtests/locustfile.py ReviewStormUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py CatalogueUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest

Tokens are signed locally, so JWT_SECRET must match the server's.
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.catalogue import CatalogueUser, ReviewStormUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Fires globally for all scenarios, so no per-task wiring is needed.
    Extracts the API error body so you see "DuplicateReview: review: Product already reviewed"
    instead of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Report the hot product's review count when a storm run ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if ReviewStormUser.hot_product_id is None:
        return
    try:
        resp = requests.get(f"{environment.host}/products/{ReviewStormUser.hot_product_id}", timeout=5)
        body = resp.json()
        print(f"[LOADTEST] Hot product reviews: {body['num_reviews']} (rating {body['rating']:.2f})\n")
    except (requests.RequestException, ValueError, KeyError) as e:
        print(f"[LOADTEST] Could not fetch hot product: {e}\n")
