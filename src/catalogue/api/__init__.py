"""Catalogue HTTP API package."""

from catalogue.api.app import create_app
from catalogue.api.routes import product_router

__all__ = ["create_app", "product_router"]
