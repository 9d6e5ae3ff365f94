"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from storefront/domain.toml:
#   - "test"       → in-memory stores, fast password hashing
#   - "production" → Elasticsearch document store, JWT_SECRET from the env
from storefront.api import create_app
from storefront.domain import storefront

storefront.init()

app = create_app(storefront)
