"""Catalogue FastAPI application.

Serves the catalogue domain synchronously over HTTP.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os

from catalogue.api import create_app
from catalogue.domain import catalogue

# PROTEAN_ENV selects the domain.toml overlay ("production" -> PostgreSQL)
catalogue.init()

app = create_app(catalogue)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
